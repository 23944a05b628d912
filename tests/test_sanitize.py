"""
Tests for deckfit.core.text.sanitize

Covers:
  - whitespace / line-ending / bullet-glyph normalization
  - typographic punctuation to ASCII, non-ASCII letters kept
  - corrupted input replaced by the sentinel
  - is_unusable
"""

from __future__ import annotations

import pytest

from deckfit.core.text.sanitize import SENTINEL, is_corrupted, is_unusable, sanitize


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

class TestSanitize:
    def test_none_and_non_string(self):
        assert sanitize(None) == ""
        assert sanitize(42) == "42"

    def test_whitespace_collapse(self):
        assert sanitize("  hello    world  ") == "hello world"
        assert sanitize("a\tb\nc") == "a b\nc"

    def test_line_endings(self):
        assert sanitize("one\r\ntwo\rthree") == "one\ntwo\nthree"

    def test_excess_blank_lines(self):
        assert sanitize("a\n\n\n\nb") == "a\n\nb"

    def test_bullet_glyphs(self):
        assert sanitize("\u2022 alpha\n\u25cf beta") == "- alpha\n- beta"

    def test_indentation_kept(self):
        assert sanitize("Intro\n  - nested") == "Intro\n  - nested"

    def test_typographic_punctuation(self):
        text = "\u201cGreat\u201d \u2013 it\u2019s done\u2026 \u2014 ok"
        assert sanitize(text) == "\"Great\" - it's done... -- ok"

    def test_fullwidth_and_invisible(self):
        assert sanitize("\uff21\uff22\uff23") == "ABC"
        assert sanitize("ab\u200bcd") == "abcd"
        assert sanitize("a\u00a0b") == "a b"

    def test_non_ascii_letters_kept(self):
        assert sanitize("Caf\u00e9 M\u00fcnchen") == "Caf\u00e9 M\u00fcnchen"

    def test_soft_break(self):
        assert sanitize("first\x0bsecond") == "first\nsecond"


class TestIdempotence:
    @pytest.mark.parametrize(
        "text",
        [
            "\u201cQuoted\u201d \u2013 and \u2018single\u2019 \u2014 done\u2026",
            "\uff21\uff22\uff23 \ufb01ne \u00bd",
            "\u2022 first\n\t\u25cf  second\n   \u25e6 third",
            "  lead\t\ttabs  \r\n\r\n\r\n\r\ntrailing   \n",
            "a\u00a0b c\u200bd\u00ade",
            "caf\u00e9 \u00e2 \u00c3 alone",
            "\u00e2\u20ac\u2122",
            "x\x00y",
            "line\x0bbreak\x0cpage",
            "",
            "   ",
            "- \u2022 nested glyph",
        ],
    )
    def test_sanitize_twice_is_sanitize_once(self, text):
        once = sanitize(text)
        assert sanitize(once) == once


# ---------------------------------------------------------------------------
# Corruption
# ---------------------------------------------------------------------------

class TestCorruption:
    @pytest.mark.parametrize(
        "text",
        [
            "ok\x00bad",
            "bell\x07",
            "broken \ufffd char",
            "caf\u00c3\u00a9",
            "don\u00e2\u20ac\u2122t",
        ],
    )
    def test_sentinel(self, text):
        assert sanitize(text) == SENTINEL

    def test_clean_text_not_corrupted(self):
        assert not is_corrupted("clean text\twith tab\nand newline")


# ---------------------------------------------------------------------------
# is_unusable
# ---------------------------------------------------------------------------

class TestIsUnusable:
    @pytest.mark.parametrize("text", [None, "", "   \n ", SENTINEL, f"  {SENTINEL}  "])
    def test_unusable(self, text):
        assert is_unusable(text)

    def test_usable(self):
        assert not is_unusable("x")
