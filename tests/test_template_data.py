"""
Tests for deckfit.core.extract

Covers:
  - end-to-end extraction for the SWOT / percentage examples
  - every template yields schema-valid, non-empty data (placeholders on empty content)
  - per-kind field parsing (bullets, columns, SWOT, timeline, comparison,
    persona, metrics, gallery, team, quote, accent, card, conclusion)
  - upstream templateData aliasing / reuse / rejection
  - TemplateDataError on an invalid builder payload
"""

from __future__ import annotations

import pytest

from conftest import PERCENT_CONTENT, SWOT_CONTENT
from deckfit.core.extract import BUILDERS, TemplateDataError, extract, extract_all_content_data, extract_with_status
from deckfit.core.extract import template_data as td
from deckfit.core.extract.aliases import alias_template_data
from deckfit.core.slide import Slide
from deckfit.core.templates import SchemaKind, Template
from deckfit.core.validate.schema_validate import validate_template_data


def slide(content: str, title: str = "Slide", **kw) -> Slide:
    return Slide(id="s1", title=title, content=content, order=1.0, **kw)


# ---------------------------------------------------------------------------
# End-to-end examples
# ---------------------------------------------------------------------------

class TestExamples:
    def test_swot_two_columns(self):
        ex = extract_with_status(Template.TWO_COLUMNS, slide(SWOT_CONTENT))
        assert not ex.used_defaults
        assert ex.data == {
            "columns": [
                {"title": "Strengths", "content": "- Strong IP\n- Loyal customers", "bullets": ["Strong IP", "Loyal customers"]},
                {"title": "Weaknesses", "content": "- Slow onboarding", "bullets": ["Slow onboarding"]},
            ]
        }

    def test_percentages_pie(self):
        data = extract(Template.PIE_CHART, slide(PERCENT_CONTENT))
        assert data["type"] == "pie"
        assert [p["value"] for p in data["data"]] == [40, 25, 20, 15]
        assert [p["name"] for p in data["data"]] == ["Product", "Price", "Place", "Promotion"]


# ---------------------------------------------------------------------------
# Every template
# ---------------------------------------------------------------------------

class TestEveryTemplate:
    def test_builders_cover_all_templates(self):
        assert set(BUILDERS) == set(Template)

    @pytest.mark.parametrize("template", list(Template))
    def test_empty_content_gives_valid_placeholders(self, template):
        ex = extract_with_status(template, slide("", title="Title"))
        assert ex.data
        assert validate_template_data(template, ex.data) == []
        assert ex.used_defaults is (template is not Template.TITLE_SLIDE)

    @pytest.mark.parametrize("template", list(Template))
    def test_rich_content_is_valid(self, template):
        content = SWOT_CONTENT + "\n\n![pic](pic.png)\n\nQ1 2024: Launch\nRevenue: $2M (+10%)"
        data = extract(template, slide(content))
        assert validate_template_data(template, data) == []

    def test_content_never_modified(self):
        s = slide(SWOT_CONTENT)
        extract(Template.BULLET_LIST, s)
        assert s.content == SWOT_CONTENT

    def test_template_by_name(self):
        assert extract("bullet-list", slide("- a\n- b"))["bullets"] == ["a", "b"]
        with pytest.raises(ValueError):
            extract("no-such-template", slide("x"))


# ---------------------------------------------------------------------------
# Per-kind parsing
# ---------------------------------------------------------------------------

class TestBuilders:
    def test_bullets_fall_back_to_numbered(self):
        data = extract(Template.BULLET_LIST, slide("1. x\n2. y"))
        assert data == {"title": "Slide", "bullets": ["x", "y"]}

    def test_numbered(self):
        assert extract(Template.NUMBERED_LIST, slide("1. Plan\n2. Ship"))["items"] == ["Plan", "Ship"]

    def test_columns_extra_sections_merge_into_last(self):
        data = extract(Template.TWO_COLUMNS, slide("**A**\n- a1\n**B**\n- b1\n**C**\n- c1"))
        cols = data["columns"]
        assert [c["title"] for c in cols] == ["A", "B"]
        assert cols[1]["content"] == "- b1\n\n**C**\n- c1"
        assert cols[1]["bullets"] == ["b1", "c1"]

    def test_columns_dealt_out_evenly(self):
        data = extract(Template.THREE_COLUMNS, slide("one\ntwo\nthree\nfour"))
        assert [c["content"] for c in data["columns"]] == ["one\ntwo", "three\nfour"]

    def test_image_columns(self):
        content = "![a](a.png)\n![b](b.png)\nLine one\nLine two\nLine three"
        cols = extract(Template.THREE_IMAGE_COLUMNS, slide(content))["columns"]
        assert [c["image"] for c in cols] == ["a.png", "b.png", "/placeholder-3.jpg"]
        assert [c["title"] for c in cols] == ["Image 1", "Image 2", "Image 3"]
        assert [c["content"] for c in cols] == ["Line one", "Line two", "Line three"]

    def test_swot_by_headers(self):
        ex = extract_with_status(Template.SWOT_MATRIX, slide(SWOT_CONTENT))
        assert ex.data["strengths"] == ["Strong IP", "Loyal customers"]
        assert ex.data["weaknesses"] == ["Slow onboarding"]
        assert ex.data["threats"] == td.DEFAULT_SWOT["threats"]
        assert not ex.used_defaults

    def test_swot_by_keyword_lines(self):
        data = extract(Template.SWOT_MATRIX, slide("Strength: brand; team\nThreat: rivals"))
        assert data["strengths"] == ["brand", "team"]
        assert data["threats"] == ["rivals"]

    def test_timeline(self):
        data = extract(Template.TIMELINE, slide("Q1 2024: Beta - private testing\nQ3 2024: Launch"))
        assert data["events"] == [
            {"date": "Q1 2024", "title": "Beta", "description": "private testing"},
            {"date": "Q3 2024", "title": "Launch", "description": ""},
        ]

    def test_comparison_table(self):
        content = "| Feature | Us | Them |\n| --- | --- | --- |\n| Price | $10 | $12 |"
        data = extract(Template.COMPARISON_TABLE, slide(content))
        assert data == {"headers": ["Feature", "Us", "Them"], "rows": [["Price", "$10", "$12"]]}

    def test_comparison_vs_lines(self):
        data = extract(Template.COMPARISON_TABLE, slide("- Price: $10 vs $20\n- Seats: 1 vs 10", title="Basic vs Pro"))
        assert data["headers"] == ["Feature", "Basic", "Pro"]
        assert data["rows"] == [["Price", "$10", "$20"], ["Seats", "1", "10"]]

    def test_persona(self):
        content = "Name: Maria\nRole: Designer\nAge: 30\nInterests: Design\n\n**Goals**\n- Ship faster"
        data = extract(Template.PERSONA_CARD, slide(content))
        assert data["name"] == "Maria"
        assert data["role"] == "Designer"
        assert data["demographics"] == {"age": "30"}
        assert data["psychographics"] == {"interests": "Design"}
        assert data["goals"] == ["Ship faster"]
        assert data["painPoints"] == td.DEFAULT_PERSONA["painPoints"]

    def test_metrics(self):
        data = extract(Template.METRICS_DASHBOARD, slide("Revenue: $2.4M (+12%)\nChurn: 3% (-1%)"))
        assert data["metrics"] == [
            {"label": "Revenue", "value": "$2.4M", "change": "+12%", "trend": "up"},
            {"label": "Churn", "value": "3%", "change": "-1%", "trend": "down"},
        ]

    def test_gallery(self):
        data = extract(Template.IMAGE_GALLERY, slide('![One](a.png)\n![Two](b.png "Caption")'))
        assert data["images"] == [
            {"src": "a.png", "alt": "One"},
            {"src": "b.png", "alt": "Two", "caption": "Caption"},
        ]
        assert data["layout"] == "grid"

    def test_team(self):
        data = extract(Template.TEAM_PHOTOS, slide("Jane Smith - CEO\nTom Baker (CTO) - builds things"))
        assert data["members"] == [
            {"name": "Jane Smith", "role": "CEO", "image": "/placeholder-1.jpg"},
            {"name": "Tom Baker", "role": "CTO", "image": "/placeholder-2.jpg", "bio": "builds things"},
        ]

    def test_quote_with_author(self):
        data = extract(Template.QUOTE, slide('"Deckfit saved our team hours every week" - Ann Lee'))
        assert data["quote"] == "Deckfit saved our team hours every week"
        assert data["author"] == "Ann Lee"

    def test_quote_attribution_must_follow(self):
        data = extract(Template.QUOTE, slide('"Some long quoted text here" is what they said. - Bob'))
        assert "author" not in data

    def test_accent(self):
        data = extract(Template.ACCENT_RIGHT, slide("Dense text ![x](x.png)"))
        assert data["accentPosition"] == "right"
        assert data["image"] == "x.png"
        assert data["content"] == "Dense text"

    def test_card(self):
        data = extract(Template.TEXT_AND_IMAGE, slide("Text only"))
        assert data["imagePosition"] == "right"
        assert data["image"] == "/placeholder.jpg"

    def test_conclusion(self):
        data = extract(Template.CONCLUSION, slide("We covered a lot.\nContact us today"))
        assert data["callToAction"] == "Contact us today"

    def test_sentinel_content_treated_as_empty(self):
        ex = extract_with_status(Template.BULLET_LIST, slide("bad\x00bytes"))
        assert ex.used_defaults
        assert ex.data["bullets"] == td.DEFAULT_BULLETS


# ---------------------------------------------------------------------------
# Upstream templateData
# ---------------------------------------------------------------------------

class TestUpstream:
    def test_aliases_renamed(self):
        assert alias_template_data(SchemaKind.BULLETS, {"items": ["a"], "heading": "H"}) == {"bullets": ["a"], "title": "H"}
        assert alias_template_data(SchemaKind.QUOTE, {"text": "q", "source": "me"}) == {"quote": "q", "author": "me"}

    def test_alias_never_overwrites(self):
        assert alias_template_data(SchemaKind.BULLETS, {"items": ["a"], "bullets": ["b"]}) == {"items": ["a"], "bullets": ["b"]}

    def test_item_aliases(self):
        out = alias_template_data(SchemaKind.TEAM, {"people": [{"name": "A", "title": "CEO", "photo": "a.jpg"}]})
        assert out == {"members": [{"name": "A", "role": "CEO", "image": "a.jpg"}]}

    def test_valid_upstream_reused(self):
        ex = extract_with_status(Template.BULLET_LIST, slide("ignored text", template_data={"items": ["one", "two"]}))
        assert ex.data == {"bullets": ["one", "two"]}
        assert not ex.used_defaults

    def test_upstream_chart_type_follows_template(self):
        upstream = {"series": [{"label": "A", "value": 60}, {"label": "B", "value": 40}], "type": "bar"}
        data = extract(Template.PIE_CHART, slide("", template_data=upstream))
        assert data["type"] == "pie"
        assert data["data"] == [{"name": "A", "value": 60}, {"name": "B", "value": 40}]

    def test_invalid_upstream_rebuilt(self):
        data = extract(Template.BULLET_LIST, slide("- x\n- y", template_data={"unknownKey": 1}))
        assert data["bullets"] == ["x", "y"]


# ---------------------------------------------------------------------------
# Errors and tooling
# ---------------------------------------------------------------------------

class TestErrors:
    def test_invalid_payload_raises(self, monkeypatch):
        monkeypatch.setitem(BUILDERS, Template.CONTENT, lambda t, title, content: ({"bogus": 1}, False))
        with pytest.raises(TemplateDataError):
            extract(Template.CONTENT, slide("x"))

    def test_error_is_value_error(self):
        assert issubclass(TemplateDataError, ValueError)


class TestExtractAll:
    def test_everything_at_once(self):
        content = SWOT_CONTENT + "\n\n" + PERCENT_CONTENT + '\n\n"A long enough quoted sentence" - Ann'
        out = extract_all_content_data(slide(content))
        assert out["bullets"] == ["Strong IP", "Loyal customers", "Slow onboarding"]
        assert [s["title"] for s in out["sections"]] == ["Strengths", "Weaknesses"]
        assert [p["value"] for p in out["series"]] == [40, 25, 20, 15]
        assert out["quote"] == {"quote": "A long enough quoted sentence", "author": "Ann"}
        assert out["numbered"] == []

    def test_plain_text(self):
        out = extract_all_content_data(slide("Just text"))
        assert out["series"] is None
        assert out["quote"] is None
        assert out["paragraphs"] == ["Just text"]
