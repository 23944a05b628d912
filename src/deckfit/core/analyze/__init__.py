"""
deckfit.core.analyze — Content structure analysis.

Public API:

    analyze(content) -> ContentStructure
    ContentStructure, DataShape, EMPTY_STRUCTURE
"""
from deckfit.core.analyze.signals import DataShape
from deckfit.core.analyze.structure import EMPTY_STRUCTURE, ContentStructure, analyze

__all__ = [
    "ContentStructure",
    "DataShape",
    "EMPTY_STRUCTURE",
    "analyze",
]
