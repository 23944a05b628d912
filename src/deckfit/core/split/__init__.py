"""
deckfit.core.split — Size fitting.

Public API:

    needs_split(slide, budget) -> bool
    split(slide, budget) -> list[Slide]          # never empty
    split_text(content, budget) -> list[str]     # pure, recursive
    choose_strategy(content, budget) -> SplitStrategy
    SplitBudget, DEFAULT_BUDGET, load_budget(path), BudgetConfigError
"""
from deckfit.core.split.budget import DEFAULT_BUDGET, BudgetConfigError, SplitBudget, budget_from_dict, load_budget
from deckfit.core.split.splitter import (
    SplitStrategy,
    choose_strategy,
    exceeds,
    needs_split,
    split,
    split_text,
)

__all__ = [
    "BudgetConfigError",
    "DEFAULT_BUDGET",
    "SplitBudget",
    "SplitStrategy",
    "budget_from_dict",
    "choose_strategy",
    "exceeds",
    "load_budget",
    "needs_split",
    "split",
    "split_text",
]
