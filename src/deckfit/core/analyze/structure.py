"""
structure.py — ContentStructure: the per-slide signal vector.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from deckfit.core.analyze import signals as sig
from deckfit.core.analyze.signals import DataShape
from deckfit.core.text import markdown as md
from deckfit.core.text.sanitize import is_unusable


@dataclass(frozen=True)
class ContentStructure:
    bullet_points: int = 0
    numbered_items: int = 0
    sections: int = 0
    paragraphs: int = 0
    images: int = 0
    percentages: int = 0
    people: int = 0
    metrics: int = 0
    words: int = 0
    has_charts: bool = False
    has_tables: bool = False
    has_quotes: bool = False
    has_comparison: bool = False
    has_timeline: bool = False
    data_shape: DataShape = DataShape.SIMPLE
    formality: float = 0.5
    density: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["data_shape"] = self.data_shape.value
        return d


EMPTY_STRUCTURE = ContentStructure()


def analyze(content: str) -> ContentStructure:
    """Compute the structure vector of sanitized slide content.

    Unusable content (empty or the sanitizer sentinel) yields EMPTY_STRUCTURE.
    """
    if is_unusable(content):
        return EMPTY_STRUCTURE

    return ContentStructure(
        bullet_points=sig.count_bullets(content),
        numbered_items=sig.count_numbered(content),
        sections=sig.count_sections(content),
        paragraphs=sig.count_paragraphs(content),
        images=sig.count_images(content),
        percentages=sig.count_percentages(content),
        people=sig.count_people(content),
        metrics=sig.count_metrics(content),
        words=md.word_count(content),
        has_charts=sig.has_charts(content),
        has_tables=sig.has_tables(content),
        has_quotes=sig.has_quotes(content),
        has_comparison=sig.has_comparison(content),
        has_timeline=sig.has_timeline(content),
        data_shape=sig.classify_data_shape(content),
        formality=sig.score_formality(content),
        density=sig.score_density(content),
    )
