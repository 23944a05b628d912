"""
Tests for deckfit.core.recommend

Covers:
  - Recommendation value checks
  - detector priority (title, SWOT, chart, people, comparison, timeline,
    metrics, list, images, quote, columns, default)
  - business templates behind RecommendOptions
  - continuation inheritance and re-derivation
  - custom detector chains and the first-match fold
"""

from __future__ import annotations

import pytest

from conftest import PERCENT_CONTENT, SWOT_CONTENT, bullets_text
from deckfit.core.analyze.structure import analyze
from deckfit.core.recommend import DETECTORS, DetectionContext, Recommendation, RecommendOptions, first_match, recommend
from deckfit.core.templates import CHART_TEMPLATES, Template, TemplateFamily, family

BUSINESS = RecommendOptions(business_templates=True)


def rec_for(content: str, title: str = "Slide", **kw) -> Recommendation:
    return recommend(analyze(content), title, content, **kw)


# ---------------------------------------------------------------------------
# Recommendation
# ---------------------------------------------------------------------------

class TestRecommendation:
    @pytest.mark.parametrize("confidence", [0.0, -0.1, 1.5])
    def test_confidence_range(self, confidence):
        with pytest.raises(ValueError):
            Recommendation(Template.CONTENT, confidence, "reason")

    def test_reason_required(self):
        with pytest.raises(ValueError):
            Recommendation(Template.CONTENT, 0.5, "")

    def test_to_dict(self):
        d = Recommendation(Template.QUOTE, 0.9, "why", "quote").to_dict()
        assert d == {"template": "quote", "confidence": 0.9, "reason": "why", "detector": "quote"}


# ---------------------------------------------------------------------------
# End-to-end examples
# ---------------------------------------------------------------------------

class TestExamples:
    def test_swot_example_content_family(self):
        rec = rec_for(SWOT_CONTENT, title="Position")
        assert rec.template is Template.TWO_COLUMNS
        assert family(rec.template) is TemplateFamily.CONTENT
        assert "strengths" in rec.reason and "weaknesses" in rec.reason
        assert rec.detector == "swot"

    def test_percentages_pie(self):
        rec = rec_for(PERCENT_CONTENT, title="Marketing Mix")
        assert rec.template is Template.PIE_CHART
        assert rec.confidence >= 0.8
        assert rec.detector == "chart"


# ---------------------------------------------------------------------------
# Detector coverage
# ---------------------------------------------------------------------------

FULL_SWOT = "**Strengths**\n- a\n**Weaknesses**\n- b\n**Opportunities**\n- c\n**Threats**\n- d"


class TestDetectors:
    def test_first_slide(self):
        rec = rec_for("Anything at all", is_first=True)
        assert rec.template is Template.TITLE_SLIDE
        assert rec.detector == "title"

    def test_full_swot_default_options(self):
        rec = rec_for(FULL_SWOT, title="Where we stand")
        assert rec.template is Template.CONTENT
        assert rec.confidence == pytest.approx(0.95)

    def test_full_swot_business_templates(self):
        assert rec_for(FULL_SWOT, title="Where we stand", options=BUSINESS).template is Template.SWOT_MATRIX

    def test_percent_without_series_is_not_chart(self):
        assert rec_for("Revenue grew 12% this year").template not in CHART_TEMPLATES

    def test_line_chart_for_periods(self):
        assert rec_for("Q1: 10%\nQ2: 20%\nQ3: 35%", title="Adoption").template is Template.LINE_CHART

    def test_bar_chart_for_comparison(self):
        rec = rec_for("Us vs them\nAlpha: 30%\nBeta: 50%", title="Scores")
        assert rec.template is Template.BAR_CHART

    def test_team(self):
        rec = rec_for("Jane Smith - CEO\nTom Baker - CTO", title="Our Team")
        assert rec.template is Template.TEAM_PHOTOS

    def test_persona(self):
        content = "Age: 30\nLocation: Berlin"
        assert rec_for(content, title="Customer Persona").template is Template.CONTENT
        assert rec_for(content, title="Customer Persona", options=BUSINESS).template is Template.PERSONA_CARD

    def test_comparison_title(self):
        assert rec_for("Price and support", title="Plan A vs Plan B").template is Template.COMPARISON_TABLE

    def test_timeline(self):
        rec = rec_for("Q1 2024: Beta\nQ2 2024: Launch", title="Product Roadmap")
        assert rec.template is Template.TIMELINE

    def test_metrics(self):
        rec = rec_for("Revenue: $2.4M\nUsers: 15K", title="Q3 Results")
        assert rec.template is Template.METRICS_DASHBOARD

    def test_bullet_list(self):
        rec = rec_for(bullets_text(5))
        assert rec.template is Template.BULLET_LIST
        assert rec.detector == "list"

    def test_numbered(self):
        content = "1. Plan\n2. Build\n3. Ship"
        assert rec_for(content).template is Template.CONTENT
        assert rec_for(content, options=BUSINESS).template is Template.NUMBERED_LIST

    def test_two_images(self):
        assert rec_for("![a](a.png)\n![b](b.png)").template is Template.TWO_IMAGE_COLUMNS

    def test_gallery(self):
        content = "\n".join(f"![img {i}](img{i}.png)" for i in range(5))
        assert rec_for(content).template is Template.IMAGE_GALLERY

    def test_quote(self):
        rec = rec_for('"Deckfit saved our team hours every week" - Ann Lee', title="Feedback")
        assert rec.template is Template.QUOTE

    def test_three_columns(self):
        content = "**Plan**\nscope it\n**Build**\nmake it\n**Ship**\nrelease it"
        assert rec_for(content).template is Template.THREE_COLUMNS

    def test_default(self):
        rec = rec_for("Just a short note.")
        assert rec.template is Template.CONTENT
        assert rec.confidence == pytest.approx(0.6)
        assert rec.detector == "default"

    def test_unusable_content(self):
        rec = rec_for("", title="Empty")
        assert rec.template is Template.CONTENT
        assert rec.detector == "unusable"

    @pytest.mark.parametrize("content", ["\x00", "|||", "**", "- " * 100, "%" * 50, "::::"])
    def test_never_raises(self, content):
        rec = rec_for(content)
        assert 0.0 < rec.confidence <= 1.0
        assert isinstance(rec.template, Template)


# ---------------------------------------------------------------------------
# Continuations
# ---------------------------------------------------------------------------

class TestContinuation:
    def test_inherits_predecessor(self):
        pred = Recommendation(Template.BULLET_LIST, 0.85, "bullets", "list")
        rec = rec_for("short note", title="Agenda (continued)", predecessor=pred)
        assert rec.template is Template.BULLET_LIST
        assert rec.confidence == pytest.approx(0.85)
        assert rec.detector == "continuation"
        assert "Continuation of 'Agenda'" in rec.reason

    def test_title_slide_predecessor_rederives(self):
        pred = Recommendation(Template.TITLE_SLIDE, 0.95, "first", "title")
        rec = rec_for(bullets_text(5), title="Intro (continued)", predecessor=pred)
        assert rec.template is Template.BULLET_LIST
        assert rec.detector == "continuation"

    def test_chart_predecessor_without_series_rederives(self):
        pred = Recommendation(Template.PIE_CHART, 0.85, "pie", "chart")
        rec = rec_for(bullets_text(5), title="Budget (part 2)", predecessor=pred)
        assert rec.template is Template.BULLET_LIST

    def test_no_predecessor(self):
        rec = rec_for(bullets_text(5), title="Agenda (continued)")
        assert rec.template is Template.BULLET_LIST
        assert rec.reason.startswith("Continuation of 'Agenda'")


# ---------------------------------------------------------------------------
# Chain
# ---------------------------------------------------------------------------

class TestChain:
    def test_detector_order(self):
        assert [name for name, _ in DETECTORS] == [
            "title",
            "continuation",
            "swot",
            "chart",
            "people",
            "comparison",
            "timeline",
            "metrics",
            "list",
            "image",
            "quote",
            "columns",
            "default",
        ]

    def test_custom_chain(self):
        forced = [("always", lambda ctx: Recommendation(Template.QUOTE, 0.5, "forced"))]
        rec = rec_for("anything", detectors=forced)
        assert rec.template is Template.QUOTE
        assert rec.detector == "always"

    def test_fold_falls_back_to_default(self):
        ctx = DetectionContext(structure=analyze("Just text."), title="T", content="Just text.")
        rec = first_match([("never", lambda c: None)], ctx)
        assert rec.detector == "default"
        assert rec.template is Template.CONTENT
