"""
chain.py — Ordered detector chain and the recommend() entry point.

Order is part of the contract: the earliest detector with an opinion wins,
so ties between detectors are broken here and nowhere else.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from deckfit.core.analyze.structure import ContentStructure
from deckfit.core.chart.series import parse_series
from deckfit.core.recommend import detectors as det
from deckfit.core.recommend.model import Detector, DetectionContext, Recommendation, RecommendOptions
from deckfit.core.templates import Template
from deckfit.core.text.sanitize import is_unusable

logger = logging.getLogger(__name__)

DETECTORS: list[tuple[str, Detector]] = [
    ("title", det.detect_title_slide),
    ("continuation", det.detect_continuation),
    ("swot", det.detect_swot),
    ("chart", det.detect_chart),
    ("people", det.detect_people),
    ("comparison", det.detect_comparison),
    ("timeline", det.detect_timeline),
    ("metrics", det.detect_metrics),
    ("list", det.detect_list),
    ("image", det.detect_images),
    ("quote", det.detect_quote),
    ("columns", det.detect_columns),
    ("default", det.detect_default),
]


def recommend(
    structure: ContentStructure,
    title: str,
    content: str,
    *,
    is_first: bool = False,
    predecessor: Optional[Recommendation] = None,
    options: Optional[RecommendOptions] = None,
    detectors: Sequence[tuple[str, Detector]] = DETECTORS,
) -> Recommendation:
    """Pick a template for one slide.

    Args:
        structure:   analyze() output for `content`.
        title:       slide title (may carry a "(continued)" marker).
        content:     sanitized slide content.
        is_first:    True for the first slide of the deck.
        predecessor: final recommendation of the slide this one continues.
        options:     RecommendOptions (business templates, thresholds).
        detectors:   override the chain (tests, experiments).

    Never raises for any text input; always returns a recommendation.
    """
    options = options or RecommendOptions()
    title = title or ""
    content = content or ""

    if is_unusable(content) and not is_first:
        logger.debug("no usable content for %r; default template", title)
        return Recommendation(Template.CONTENT, 0.5, "No usable content; default content layout", "unusable")

    ctx = DetectionContext(
        structure=structure,
        title=title,
        content="" if is_unusable(content) else content,
        series=parse_series(content),
        is_first=is_first,
        predecessor=predecessor,
        options=options,
        detectors=tuple(detectors),
    )
    rec = det.first_match(detectors, ctx)
    if rec.confidence < options.low_confidence:
        logger.debug("low-confidence recommendation for %r: %s %.2f", title, rec.template.value, rec.confidence)
    return rec

