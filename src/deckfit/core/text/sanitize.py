"""
sanitize.py — Text sanitation applied to every slide before analysis.

- NFKC normalization (fullwidth forms, ligatures, ellipsis, nbsp).
- Typographic punctuation to ASCII (dashes, curly quotes).
- Line-ending variants and PPTX soft breaks to "\\n".
- Leading bullet glyphs to "- ".
- Whitespace collapse (leading indentation kept).

Corrupted input (control bytes, U+FFFD, UTF-8-read-as-Latin-1 mojibake) is
never repaired: the whole text is replaced by SENTINEL and callers treat it
as "no usable content".
"""
from __future__ import annotations

import logging
import re
import unicodedata

logger = logging.getLogger(__name__)

SENTINEL = "content could not be processed"

# C0 controls except \t \n \v \f \r, DEL, replacement char
_CONTROL_RE = re.compile(r"[\x00-\x08\x0e-\x1f\x7f\ufffd]")
# UTF-8 punctuation or accents decoded as Latin-1
_MOJIBAKE_RE = re.compile(
    "\u00e2\u20ac[\u0080-\u00bf\u0152\u0153\u0160\u0161\u0178\u017d\u017e"
    "\u02c6\u02dc\u2013\u2014\u2018-\u201e\u2020-\u2022\u2026\u2030"
    "\u2039\u203a\u20ac\u2122]"
    "|\u00c3[\u0080-\u00bf]"
    "|\u00c2[\u00a0-\u00bf]"
)

_PUNCT_TABLE = str.maketrans(
    {
        "\u00a0": " ",
        "\u2007": " ",
        "\u202f": " ",
        "\u2013": "-",
        "\u2014": "--",
        "\u2212": "-",
        "\u2018": "'",
        "\u2019": "'",
        "\u201a": "'",
        "\u201b": "'",
        "\u201c": '"',
        "\u201d": '"',
        "\u201e": '"',
        "\u201f": '"',
        "\u2026": "...",
        "\u00ad": "",
        "\u200b": "",
        "\u200c": "",
        "\u200d": "",
        "\u2060": "",
        "\ufeff": "",
        "\x0b": "\n",
        "\x0c": "\n",
    }
)

_BULLET_GLYPH_RE = re.compile(r"^([ \t]*)[\u2022\u2023\u2043\u2219\u25aa\u25cf\u25e6][ \t]*", re.M)
_LEAD_WS_RE = re.compile(r"[ \t]*")
_HORIZ_WS_RE = re.compile(r"[ \t]+")
_EXCESS_NL_RE = re.compile(r"\n{3,}")


def is_corrupted(text: str) -> bool:
    return bool(_CONTROL_RE.search(text) or _MOJIBAKE_RE.search(text))


def _collapse_line(line: str) -> str:
    lead = _LEAD_WS_RE.match(line).group(0)
    rest = _HORIZ_WS_RE.sub(" ", line[len(lead):]).rstrip()
    return lead + rest if rest else ""


def sanitize(text: object) -> str:
    """Return an ASCII-leaning, whitespace-normalized copy of `text`.

    Never raises. Returns SENTINEL when the input looks corrupted.
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)

    normalized = unicodedata.normalize("NFKC", text)
    # removing zero-width chars can join combining marks, so normalize again
    cleaned = unicodedata.normalize("NFKC", normalized.translate(_PUNCT_TABLE))
    if any(is_corrupted(t) for t in (text, normalized, cleaned)):
        logger.warning("corrupted text detected (%d chars); replaced with sentinel", len(text))
        return SENTINEL

    text = cleaned
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _BULLET_GLYPH_RE.sub(r"\1- ", text)
    text = "\n".join(_collapse_line(ln) for ln in text.split("\n"))
    text = _EXCESS_NL_RE.sub("\n\n", text)
    return text.strip()


def is_unusable(text: str | None) -> bool:
    """True for empty / whitespace-only text and for the corruption sentinel."""
    if not text:
        return True
    s = text.strip()
    return not s or s == SENTINEL
