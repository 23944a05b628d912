"""
deckfit.core.text — Sanitation and line-level markdown helpers.

Public API:

    sanitize(text) -> str
    is_unusable(text) -> bool
    SENTINEL
"""
from deckfit.core.text.sanitize import SENTINEL, is_unusable, sanitize

__all__ = [
    "SENTINEL",
    "is_unusable",
    "sanitize",
]
