"""
deckfit.core.recommend — Template recommendation.

Public API:

    recommend(structure, title, content, *, is_first, predecessor, options, detectors) -> Recommendation
    DETECTORS                      # ordered (name, detector) chain
    first_match(detectors, ctx)    # the fold behind recommend()
    Recommendation, RecommendOptions, DetectionContext
"""
from deckfit.core.recommend.chain import DETECTORS, recommend
from deckfit.core.recommend.detectors import base_title, first_match
from deckfit.core.recommend.model import DetectionContext, Recommendation, RecommendOptions

__all__ = [
    "DETECTORS",
    "DetectionContext",
    "Recommendation",
    "RecommendOptions",
    "base_title",
    "first_match",
    "recommend",
]
