"""
detectors.py — Specialized template detectors.

Each detector inspects a DetectionContext and returns a Recommendation or
None ("no opinion"). Priority lives entirely in chain.DETECTORS; detectors
never call each other except for the continuation re-derivation, which
walks the remaining chain carried on the context.
"""
from __future__ import annotations

import logging
import re
from dataclasses import replace

from deckfit.core.analyze.signals import DataShape
from deckfit.core.recommend.model import DetectionContext, Recommendation
from deckfit.core.templates import Template, is_chart
from deckfit.core.text import markdown as md

logger = logging.getLogger(__name__)

CONTINUATION_RE = re.compile(r"\s*\((?:continued|part\s+\d+)\)\s*", re.I)

_SWOT_COMPONENTS: tuple[tuple[str, str], ...] = (
    ("strengths", "strength"),
    ("weaknesses", "weakness"),
    ("opportunities", "opportunit"),
    ("threats", "threat"),
)

_DISTRIBUTION_RE = re.compile(r"\b(distribution|allocation|breakdown|share|split)\b")
_TREND_RE = re.compile(r"\b(trends?|over time|growth|forecast|projection|monthly|quarterly)\b")
_PERIOD_RE = re.compile(
    r"\b(q[1-4]|jan(uary)?|feb(ruary)?|march|apr(il)?|june?|july?|aug(ust)?|sept?(ember)?|oct(ober)?|nov(ember)?|dec(ember)?)\b"
    r"|\b(months?|quarters?)\b"
)
_BAR_RE = re.compile(r"\bcompar\w*|\s(?:vs\.?|versus)\s|\branking\b|\brank(?:ed|s)?\b")
_RADAR_RE = re.compile(r"\b(dimensions?|attributes?|factors?)\b")
_AREA_RE = re.compile(r"\b(cumulative|accumulated|stacked)\b")

_TEAM_TITLE_RE = re.compile(r"\b(team|staff|employees?|our people|leadership|founders?)\b")
_PERSONA_RE = re.compile(r"\b(persona|customer profile|user profile|buyer profile|ideal customer|target customer)\b")
_COMPARISON_TITLE_RE = re.compile(r"\b(comparison|compared?|competitors?|competitive)\b|\s(?:vs\.?|versus)\s")
_COMPARE_RE = re.compile(r"\bcompar\w*")
_FEATURE_RE = re.compile(r"\b(features?|benefits?)\b")
_TIMELINE_TITLE_RE = re.compile(r"\b(timeline|roadmap|milestones?|history|journey|schedule|phases?)\b")
_METRICS_TITLE_RE = re.compile(r"\b(metrics?|kpis?|performance|dashboard|scorecard|results)\b")


def base_title(title: str) -> str:
    """Title with any "(continued)" / "(part N)" marker removed."""
    return CONTINUATION_RE.sub(" ", title).strip()


def _rec(template: Template, confidence: float, reason: str) -> Recommendation:
    return Recommendation(template=template, confidence=confidence, reason=reason)


# ---------------------------------------------------------------------------
# (1) first slide / (2) continuation
# ---------------------------------------------------------------------------


def detect_title_slide(ctx: DetectionContext) -> Recommendation | None:
    if ctx.is_first:
        return _rec(Template.TITLE_SLIDE, 0.95, "First slide in presentation")
    return None


def detect_continuation(ctx: DetectionContext) -> Recommendation | None:
    if not CONTINUATION_RE.search(ctx.title):
        return None
    base = base_title(ctx.title)
    pred = ctx.predecessor

    if pred is not None and pred.template is not Template.TITLE_SLIDE:
        if not (is_chart(pred.template) and ctx.series is None):
            return _rec(
                pred.template,
                pred.confidence,
                f"Continuation of '{base}'; keeps the {pred.template.value} layout of the preceding slide",
            )

    rest = [(n, d) for n, d in ctx.detectors if n not in ("title", "continuation")]
    derived = first_match(rest, replace(ctx, title=base, is_first=False))
    return replace(derived, reason=f"Continuation of '{base}': {derived.reason}", detector="")


# ---------------------------------------------------------------------------
# (3) SWOT
# ---------------------------------------------------------------------------


def _swot_labels(content: str) -> list[str]:
    labels = [s.title.lower() for s in md.split_sections(content) if s.title]
    labels.extend(b.lower() for b in md.bold_spans(content))
    return labels


def detect_swot(ctx: DetectionContext) -> Recommendation | None:
    lt, lc = ctx.lower_title, ctx.lower_content
    labels = _swot_labels(ctx.content)

    headed = [name for name, stem in _SWOT_COMPONENTS if any(stem in lab for lab in labels)]
    titled = [name for name, stem in _SWOT_COMPONENTS if stem in lt]
    mentioned = [name for name, stem in _SWOT_COMPONENTS if stem in lc]

    complete = (
        "swot" in lt
        or len(headed) == 4
        or ("analysis" in lt and len(mentioned) == 4)
    )
    if complete:
        if ctx.options.business_templates:
            return _rec(Template.SWOT_MATRIX, 0.95, "Complete SWOT analysis (strengths, weaknesses, opportunities, threats)")
        return _rec(
            Template.CONTENT,
            0.95,
            "Complete SWOT analysis (strengths, weaknesses, opportunities, threats); "
            "no SWOT matrix layout enabled, using content layout",
        )

    strong = [name for name, _ in _SWOT_COMPONENTS if name in headed or name in titled]
    if len(headed) in (2, 3):
        template = Template.TWO_COLUMNS if len(headed) == 2 else Template.THREE_COLUMNS
        return _rec(
            template,
            0.9,
            f"SWOT components ({', '.join(headed)}) laid out side by side in {template.value}",
        )
    if len(strong) == 1:
        return _rec(Template.CONTENT, 0.9, f"Content focused on {strong[0]} component")
    return None


# ---------------------------------------------------------------------------
# (4) chart
# ---------------------------------------------------------------------------


def detect_chart(ctx: DetectionContext) -> Recommendation | None:
    series = ctx.series
    if not series:
        return None
    s = ctx.structure
    lc, lt = ctx.lower_content, ctx.lower_title
    n = len(series)

    if s.percentages > 3 or _DISTRIBUTION_RE.search(lc) or "marketing mix" in lt:
        return _rec(Template.PIE_CHART, 0.85, f"Percentage distribution across {n} categories")
    if _TREND_RE.search(lc) or _TREND_RE.search(lt) or _PERIOD_RE.search(lc):
        return _rec(Template.LINE_CHART, 0.85, "Percentages follow a trend over time")
    if s.has_comparison or _BAR_RE.search(lc) or _BAR_RE.search(lt):
        return _rec(Template.BAR_CHART, 0.8, f"Comparison of {n} values across categories")
    if _RADAR_RE.search(lc) and s.data_shape is DataShape.MULTI_DIMENSIONAL:
        return _rec(Template.RADAR_CHART, 0.75, "Scores across several dimensions")
    if _AREA_RE.search(lc):
        return _rec(Template.AREA_CHART, 0.75, "Cumulative values over a sequence")

    total = sum(p.value for p in series)
    if 90 <= total <= 110:
        return _rec(Template.PIE_CHART, 0.8, f"{n} percentages forming a whole ({total}%)")
    return _rec(Template.BAR_CHART, 0.75, f"{n} labeled percentage values")


# ---------------------------------------------------------------------------
# (5) people ... (8) metrics
# ---------------------------------------------------------------------------


def detect_people(ctx: DetectionContext) -> Recommendation | None:
    s = ctx.structure
    if _TEAM_TITLE_RE.search(ctx.lower_title) or s.people > 2:
        return _rec(Template.TEAM_PHOTOS, 0.85, f"Team content with {s.people} people mentioned")
    if _PERSONA_RE.search(ctx.lower_title) or _PERSONA_RE.search(ctx.lower_content):
        if ctx.options.business_templates:
            return _rec(Template.PERSONA_CARD, 0.9, "Customer persona description")
        return _rec(Template.CONTENT, 0.9, "Customer persona description; presented as content")
    return None


def detect_comparison(ctx: DetectionContext) -> Recommendation | None:
    s = ctx.structure
    if _COMPARISON_TITLE_RE.search(ctx.lower_title):
        return _rec(Template.COMPARISON_TABLE, 0.85, "Title announces a comparison")
    if s.has_comparison or s.has_tables:
        return _rec(Template.COMPARISON_TABLE, 0.85, "Comparative or tabular content")
    if _COMPARE_RE.search(ctx.lower_content) and _FEATURE_RE.search(ctx.lower_content):
        return _rec(Template.COMPARISON_TABLE, 0.85, "Feature/benefit comparison")
    return None


def detect_timeline(ctx: DetectionContext) -> Recommendation | None:
    if _TIMELINE_TITLE_RE.search(ctx.lower_title) or ctx.structure.has_timeline:
        return _rec(Template.TIMELINE, 0.85, "Chronological or milestone content")
    return None


def detect_metrics(ctx: DetectionContext) -> Recommendation | None:
    s = ctx.structure
    if _METRICS_TITLE_RE.search(ctx.lower_title):
        return _rec(Template.METRICS_DASHBOARD, 0.85, "Title announces metrics")
    if s.metrics > 2:
        return _rec(Template.METRICS_DASHBOARD, 0.85, f"{s.metrics} metric indicators")
    if s.sections > 1 and s.percentages > 2:
        return _rec(Template.METRICS_DASHBOARD, 0.85, "Several sections carrying percentage figures")
    return None


# ---------------------------------------------------------------------------
# (9) list ... (13) default
# ---------------------------------------------------------------------------


def detect_list(ctx: DetectionContext) -> Recommendation | None:
    s = ctx.structure
    if s.bullet_points > 3:
        if s.images > 0:
            return _rec(Template.CONTENT, 0.8, f"{s.bullet_points} bullet points alongside images")
        return _rec(Template.BULLET_LIST, 0.85, f"{s.bullet_points} bullet points")
    if s.numbered_items > 2:
        if ctx.options.business_templates:
            return _rec(Template.NUMBERED_LIST, 0.85, f"{s.numbered_items} numbered items")
        return _rec(Template.CONTENT, 0.85, f"{s.numbered_items} numbered items presented as content")
    return None


def detect_images(ctx: DetectionContext) -> Recommendation | None:
    n = ctx.structure.images
    if n > 3:
        return _rec(Template.IMAGE_GALLERY, 0.85, f"{n} images suit a gallery")
    if n == 1:
        if ctx.structure.paragraphs > 1:
            return _rec(Template.CONTENT, 0.8, "Single image with supporting text")
        return _rec(Template.CONTENT, 0.8, "Single image slide")
    if n == 2:
        return _rec(Template.TWO_IMAGE_COLUMNS, 0.8, "Two images side by side")
    if n == 3:
        return _rec(Template.THREE_IMAGE_COLUMNS, 0.8, "Three images in columns")
    return None


def detect_quote(ctx: DetectionContext) -> Recommendation | None:
    if ctx.structure.has_quotes:
        return _rec(Template.QUOTE, 0.9, "Quotation or testimonial")
    return None


def detect_columns(ctx: DetectionContext) -> Recommendation | None:
    s = ctx.structure
    if s.sections >= 4:
        return _rec(Template.FOUR_COLUMNS, 0.75, f"{s.sections} distinct sections suit a four-column layout")
    if s.sections == 3:
        return _rec(Template.THREE_COLUMNS, 0.8, "3 distinct sections suit a three-column layout")
    if s.sections == 2:
        return _rec(Template.TWO_COLUMNS, 0.85, "2 distinct sections suit a two-column layout")
    if s.density > 0.7 and s.sections <= 1:
        return _rec(Template.ACCENT_LEFT, 0.7, "Dense single-topic content suits an accent layout")
    return None


def detect_default(ctx: DetectionContext) -> Recommendation:
    s = ctx.structure
    if s.density > 0.7 and s.formality > 0.6:
        return _rec(Template.ACCENT_LEFT, 0.65, "Dense, formal content")
    if s.paragraphs > 1 and s.sections < 2:
        return _rec(Template.CONTENT, 0.7, f"{s.paragraphs} paragraphs of prose")
    if s.density < 0.5 and s.sections > 0:
        return _rec(Template.TWO_COLUMN, 0.65, "Light content with a section header")
    return _rec(Template.CONTENT, 0.6, "General content")


# ---------------------------------------------------------------------------
# fold
# ---------------------------------------------------------------------------


def first_match(detectors, ctx: DetectionContext) -> Recommendation:
    """Evaluate detectors in order; the first opinion wins.

    Falls back to detect_default when every detector abstains, so the fold
    always yields a recommendation.
    """
    for name, detector in detectors:
        rec = detector(ctx)
        if rec is not None:
            logger.debug("detector %s -> %s (%.2f)", name, rec.template.value, rec.confidence)
            return rec if rec.detector else replace(rec, detector=name)
    return replace(detect_default(ctx), detector="default")
