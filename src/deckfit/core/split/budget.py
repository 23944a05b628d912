"""
budget.py — Per-slide size budget.

Defaults match the renderer's slide canvas; a JSON file can override any
field (validated against schemas/budget.schema.json).
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from deckfit.core.validate.schema_validate import load_schema, validate_instance


class BudgetConfigError(ValueError):
    """Raised when a budget file is unreadable or violates budget.schema.json."""


@dataclass(frozen=True)
class SplitBudget:
    max_words: int = 150
    max_chars: int = 800
    max_bullets: int = 6
    max_sections: int = 2
    max_title_length: int = 60
    # fractional order offset between fragments of one split group
    order_step: float = 0.001
    # fragments this short are merged into a neighbour, never emitted alone
    min_fragment_chars: int = 10

    def __post_init__(self) -> None:
        for name in ("max_words", "max_chars", "max_bullets", "max_sections", "max_title_length"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int) or v < 1:
                raise ValueError(f"{name} must be a positive int, got {v!r}")
        if not 0 < self.order_step < 1:
            raise ValueError(f"order_step must be in (0, 1), got {self.order_step!r}")
        if self.min_fragment_chars < 0 or self.min_fragment_chars >= self.max_chars:
            raise ValueError("min_fragment_chars must be >= 0 and < max_chars")

    @property
    def snap_window(self) -> int:
        """How far back from the ideal cut point a character split may snap."""
        return max(1, min(100, self.max_chars // 10))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_BUDGET = SplitBudget()


def budget_from_dict(data: dict[str, Any]) -> SplitBudget:
    errors = validate_instance(load_schema("budget"), data)
    if errors:
        raise BudgetConfigError("invalid budget: " + "; ".join(errors))
    try:
        return SplitBudget(**data)
    except ValueError as e:
        raise BudgetConfigError(f"invalid budget: {e}") from e


def load_budget(path: str | Path) -> SplitBudget:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise BudgetConfigError(f"cannot read budget file {p}: {e}") from e
    if not isinstance(data, dict):
        raise BudgetConfigError(f"budget file {p} must contain a JSON object")
    return budget_from_dict(data)
