"""
Tests for deckfit.core.analyze (signals + ContentStructure)
"""

from __future__ import annotations

import pytest

from conftest import PERCENT_CONTENT, SWOT_CONTENT
from deckfit.core.analyze import signals as sig
from deckfit.core.analyze.signals import DataShape
from deckfit.core.analyze.structure import EMPTY_STRUCTURE, analyze
from deckfit.core.text.sanitize import SENTINEL


# ---------------------------------------------------------------------------
# analyze()
# ---------------------------------------------------------------------------

class TestAnalyze:
    @pytest.mark.parametrize("content", ["", "   ", SENTINEL])
    def test_unusable_is_empty_structure(self, content):
        assert analyze(content) is EMPTY_STRUCTURE

    def test_swot_example(self):
        s = analyze(SWOT_CONTENT)
        assert s.sections == 2
        assert s.bullet_points == 3
        assert s.words == 11
        assert not s.has_charts

    def test_percentages(self):
        s = analyze(PERCENT_CONTENT)
        assert s.percentages == 4
        assert s.metrics >= 3

    def test_to_dict(self):
        d = analyze("Monthly growth").to_dict()
        assert d["data_shape"] == "time-series"
        assert 0.0 <= d["density"] <= 1.0


# ---------------------------------------------------------------------------
# Counts
# ---------------------------------------------------------------------------

class TestCounts:
    def test_numbered(self):
        assert sig.count_numbered("1. a\n2. b\n3) c") == 3

    def test_bold_markers_are_not_bullets(self):
        assert sig.count_bullets("**Header**\n* star item\n- dash item") == 2

    def test_images_markdown_and_bare(self):
        assert sig.count_images("![a](x.png)\nsee https://example.com/y.jpg") == 2

    def test_people_pairs(self):
        assert sig.count_people("Led by Jane Smith with Tom Baker and Ana Ruiz") == 3

    def test_people_skips_sentence_start(self):
        assert sig.count_people("We shipped. Great Results followed.") == 0

    def test_people_capped(self):
        text = "with " + " and ".join(["Anna Berg", "Carl Dahl", "Eva Fors", "Gus Hall", "Ida Jans", "Kim Lund"])
        assert sig.count_people(text) == 5


# ---------------------------------------------------------------------------
# Booleans
# ---------------------------------------------------------------------------

class TestBooleans:
    def test_tables(self):
        assert sig.has_tables("| a | b |\n| 1 | 2 |")
        assert sig.has_tables("see the table below")
        assert not sig.has_tables("plain prose")

    def test_quotes(self):
        assert sig.has_quotes('"This product changed everything" - Ann')
        assert sig.has_quotes("> quoted line")
        assert not sig.has_quotes('a "short" word')

    def test_comparison(self):
        assert sig.has_comparison("Ours vs theirs")
        assert sig.has_comparison("pros and cons")
        assert not sig.has_comparison("advantages only")

    def test_timeline(self):
        assert sig.has_timeline("Our roadmap")
        assert sig.has_timeline("2021, 2022 and 2023")
        assert not sig.has_timeline("founded 2021")

    def test_charts(self):
        assert sig.has_charts("see the graph")
        assert not sig.has_charts("paragraph")


# ---------------------------------------------------------------------------
# Categorical / continuous
# ---------------------------------------------------------------------------

class TestShapeAndScores:
    @pytest.mark.parametrize(
        "text, shape",
        [
            ("| a | b |", DataShape.TABULAR),
            ("reporting hierarchy", DataShape.HIERARCHICAL),
            ("three key factors", DataShape.MULTI_DIMENSIONAL),
            ("monthly numbers", DataShape.TIME_SERIES),
            ("hello", DataShape.SIMPLE),
        ],
    )
    def test_data_shape(self, text, shape):
        assert sig.classify_data_shape(text) is shape

    def test_formality(self):
        formal = sig.score_formality("Therefore, the analysis supports the strategy.")
        casual = sig.score_formality("You gotta see your stuff, it's awesome!!")
        assert formal == pytest.approx(0.85)
        assert casual == pytest.approx(0.2)

    def test_density_bounds(self):
        light = sig.score_density("hi")
        heavy = sig.score_density("\n".join(f"- **Point {i}** with 10 and 20" for i in range(40)))
        assert 0.0 <= light < 0.05
        assert light < heavy <= 1.0
