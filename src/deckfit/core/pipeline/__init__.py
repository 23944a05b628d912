"""
deckfit.core.pipeline — Deck fitting.

Public API:

    fit_deck(candidates, *, budget, options, store, demote) -> FitResult
    retemplate(slide, template, store) -> Slide
    ContentStore, PreservedContent
    build_report(result) -> dict
    write_report(result, out_path) -> dict
"""
from deckfit.core.pipeline.fit import Decision, FitResult, fit_deck, normalize_candidates, retemplate
from deckfit.core.pipeline.preserve import ContentStore, PreservedContent
from deckfit.core.pipeline.report import build_report, write_report

__all__ = [
    "ContentStore",
    "Decision",
    "FitResult",
    "PreservedContent",
    "build_report",
    "fit_deck",
    "normalize_candidates",
    "retemplate",
    "write_report",
]
