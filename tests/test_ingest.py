"""
Tests for deckfit.core.ingest

Covers:
  - JSON shapes: slide list, deck wrapper, outline, nested business record
  - markdown / text splitting on headings and on --- rules
  - load_candidates dispatch and error handling
  - pptx reading (text, tables, charts) on decks built with python-pptx
"""

from __future__ import annotations

import pytest
from pptx import Presentation
from pptx.chart.data import CategoryChartData
from pptx.enum.chart import XL_CHART_TYPE
from pptx.util import Inches

from deckfit.core.ingest import IngestError, candidates_from_json, candidates_from_pptx, candidates_from_text, load_candidates
from deckfit.core.ingest.candidates import render_value


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

class TestFromJson:
    def test_slide_list(self):
        assert candidates_from_json([{"title": "A"}, "plain text"]) == [{"title": "A"}, {"content": "plain text"}]

    def test_deck_wrapper(self):
        assert candidates_from_json({"slides": [{"title": "A", "content": "x"}]}) == [{"title": "A", "content": "x"}]

    def test_outline(self):
        outline = {
            "title": "Deck",
            "subtitle": "Sub",
            "sections": [{"title": "S1", "content": "c1"}, {"heading": "S2", "points": ["a", "b"]}, "loose"],
        }
        out = candidates_from_json(outline)
        assert out[0] == {"id": "slide-1", "title": "Deck", "content": "Sub", "type": "title"}
        assert out[1] == {"id": "slide-2", "title": "S1", "content": "c1"}
        assert out[2] == {"id": "slide-3", "title": "S2", "content": "- a\n- b"}
        assert out[3] == {"id": "slide-4", "title": "", "content": "loose"}

    def test_business_record(self):
        record = {
            "market_size": {"tam": "$5B", "segments": ["SMB", "Enterprise"]},
            "teamMembers": [{"name": "Ann", "role": "CEO"}],
        }
        out = candidates_from_json(record)
        assert [s["title"] for s in out] == ["Market size", "Team Members"]
        assert out[0]["content"] == "- Tam: $5B\n\n**Segments**\n- SMB\n- Enterprise"
        assert out[1]["content"] == "- Name: Ann, Role: CEO"
        assert [s["order"] for s in out] == [1, 2]

    def test_render_scalars(self):
        assert render_value(True) == "yes"
        assert render_value(None) == ""
        assert render_value([1, None, "x"]) == "- 1\n- x"

    @pytest.mark.parametrize("obj", [{}, 42, "text", [1], {"title": "x", "sections": "y"}])
    def test_rejected(self, obj):
        with pytest.raises(IngestError):
            candidates_from_json(obj)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

class TestFromText:
    def test_headings(self):
        text = "Intro line\n# First\nbody one\n## Second\nbody two\n### Sub\nmore"
        out = candidates_from_text(text)
        assert [(s["id"], s["title"], s["content"]) for s in out] == [
            ("slide-1", "", "Intro line"),
            ("slide-2", "First", "body one"),
            ("slide-3", "Second", "body two\n### Sub\nmore"),
        ]
        assert [s["order"] for s in out] == [1, 2, 3]

    def test_rules(self):
        out = candidates_from_text("**Title A**\nbody a\n---\nJust one line\n---\n")
        assert [(s["title"], s["content"]) for s in out] == [("Title A", "body a"), ("", "Just one line")]

    def test_long_first_line_is_not_a_title(self):
        line = "word " * 30
        out = candidates_from_text(f"{line}\nmore text")
        assert out[0]["title"] == ""

    def test_empty(self):
        with pytest.raises(IngestError):
            candidates_from_text("  \n ")


# ---------------------------------------------------------------------------
# load_candidates
# ---------------------------------------------------------------------------

class TestLoadCandidates:
    def test_json_file(self, write_json):
        path = write_json("deck.json", {"slides": [{"title": "A", "content": "x"}]})
        assert load_candidates(path) == [{"title": "A", "content": "x"}]

    def test_markdown_file(self, tmp_path):
        path = tmp_path / "talk.md"
        path.write_text("# Hello\nworld\n", encoding="utf-8")
        assert load_candidates(path)[0]["title"] == "Hello"

    def test_missing(self, tmp_path):
        with pytest.raises(IngestError, match="not found"):
            load_candidates(tmp_path / "nope.json")

    def test_bad_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(IngestError, match="invalid JSON"):
            load_candidates(path)

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "deck.csv"
        path.write_text("a,b", encoding="utf-8")
        with pytest.raises(IngestError, match="unsupported"):
            load_candidates(path)

    def test_no_candidates(self, write_json):
        with pytest.raises(IngestError, match="no slide candidates"):
            load_candidates(write_json("empty.json", []))


# ---------------------------------------------------------------------------
# pptx
# ---------------------------------------------------------------------------

@pytest.fixture
def pptx_deck(tmp_path):
    prs = Presentation()

    s1 = prs.slides.add_slide(prs.slide_layouts[1])
    s1.shapes.title.text = "Welcome"
    tf = s1.placeholders[1].text_frame
    tf.text = "First point"
    p = tf.add_paragraph()
    p.text = "Second point"
    p.level = 1

    s2 = prs.slides.add_slide(prs.slide_layouts[5])
    s2.shapes.title.text = "Pricing"
    table = s2.shapes.add_table(2, 2, Inches(1), Inches(2), Inches(4), Inches(1)).table
    for (r, c), text in {(0, 0): "Plan", (0, 1): "Price", (1, 0): "Pro", (1, 1): "$10"}.items():
        table.cell(r, c).text = text

    s3 = prs.slides.add_slide(prs.slide_layouts[5])
    s3.shapes.title.text = "Budget Split"
    data = CategoryChartData()
    data.categories = ["A", "B"]
    data.add_series("Share", (0.6, 0.4))
    s3.shapes.add_chart(XL_CHART_TYPE.PIE, Inches(1), Inches(2), Inches(4), Inches(3), data)

    path = tmp_path / "Sales Deck.pptx"
    prs.save(str(path))
    return path


class TestPptx:
    def test_slides(self, pptx_deck):
        out = candidates_from_pptx(pptx_deck)
        assert [s["id"] for s in out] == ["Sales_Deck-s001", "Sales_Deck-s002", "Sales_Deck-s003"]
        assert [s["type"] for s in out] == ["title", "content", "content"]
        assert [s["order"] for s in out] == [1, 2, 3]

    def test_text_as_bullets(self, pptx_deck):
        first = candidates_from_pptx(pptx_deck)[0]
        assert first["title"] == "Welcome"
        assert first["content"] == "- First point\n- Second point"

    def test_table(self, pptx_deck):
        table = candidates_from_pptx(pptx_deck)[1]
        assert table["content"] == "| Plan | Price |\n| --- | --- |\n| Pro | $10 |"

    def test_chart_as_percentages(self, pptx_deck):
        chart = candidates_from_pptx(pptx_deck)[2]
        assert chart["content"] == "A: 60%\nB: 40%"

    def test_load_dispatches_pptx(self, pptx_deck):
        assert len(load_candidates(pptx_deck)) == 3
