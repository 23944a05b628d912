"""
model.py — Value types shared by the detectors and the chain.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from deckfit.core.analyze.structure import ContentStructure
from deckfit.core.chart.series import ChartPoint
from deckfit.core.templates import Template


@dataclass(frozen=True)
class Recommendation:
    """A template choice with a heuristic confidence (not a probability) and a human-readable reason."""

    template: Template
    confidence: float
    reason: str
    detector: str = ""

    def __post_init__(self) -> None:
        if not 0.0 < self.confidence <= 1.0:
            raise ValueError(f"confidence must be in (0, 1], got {self.confidence!r}")
        if not self.reason:
            raise ValueError("reason must not be empty")

    def to_dict(self) -> dict[str, object]:
        return {
            "template": self.template.value,
            "confidence": round(self.confidence, 3),
            "reason": self.reason,
            "detector": self.detector,
        }


@dataclass(frozen=True)
class RecommendOptions:
    # emit swot-matrix / persona-card / numbered-list instead of content layouts
    business_templates: bool = False
    # below this, decisions are reported and logged as low-confidence
    low_confidence: float = 0.7


@dataclass(frozen=True)
class DetectionContext:
    structure: ContentStructure
    title: str
    content: str
    series: Optional[list[ChartPoint]] = None
    is_first: bool = False
    predecessor: Optional[Recommendation] = None
    options: RecommendOptions = field(default_factory=RecommendOptions)
    detectors: Sequence[tuple[str, "Detector"]] = ()

    @property
    def lower_title(self) -> str:
        return self.title.lower()

    @property
    def lower_content(self) -> str:
        return self.content.lower()


Detector = Callable[[DetectionContext], Optional[Recommendation]]
