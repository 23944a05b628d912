"""
signals.py — One pure function per structural signal.

Every function takes sanitized text and returns a typed value (int / bool /
float / DataShape). The recommender only ever sees these values through
ContentStructure, never the raw regexes.
"""
from __future__ import annotations

import math
import re
from enum import Enum

from deckfit.core.text import markdown as md

# --- vocabularies ---

_FORMAL_CONNECTIVES_RE = re.compile(
    r"\b(therefore|however|furthermore|moreover|consequently|nevertheless|accordingly|thus|hence)\b", re.I
)
_ANALYTICAL_RE = re.compile(
    r"\b(analy[sz]e|analysis|evaluate|evaluation|assessment|strateg(?:y|ic)|implementation|methodology|framework|objectives?)\b",
    re.I,
)
_CASUAL_FILLER_RE = re.compile(r"\b(so|like|really|just|pretty|stuff|things|basically|actually|kinda|gonna)\b", re.I)
_CASUAL_WORD_RE = re.compile(r"\b(great|awesome|cool|amazing|super|wow|fun)\b", re.I)
_SECOND_PERSON_RE = re.compile(r"\b(you|we)\b", re.I)
_YOU_RE = re.compile(r"\byou\b", re.I)
_YOUR_RE = re.compile(r"\byour\b", re.I)

_PERCENT_RE = re.compile(r"\d+(?:\.\d+)?%")
_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)*")
_CURRENCY_RE = re.compile(r"[$\u20ac\u00a3\u00a5]\s?\d[\d,]*(?:\.\d+)?\s?[KMBkmb]?")
_METRIC_WORDS = ("kpi", "metric", "target", "performance", "measure", "indicator", "benchmark")

_NAME_PAIR_RE = re.compile(r"\b[A-Z][a-z]{1,20}[ \t]+[A-Z][a-z]{1,20}\b")
_MAX_PEOPLE = 5

_TABLE_WORD_RE = re.compile(r"\btable\b", re.I)
_COLUMN_WORD_RE = re.compile(r"\bcolumns?\b", re.I)
_ROW_WORD_RE = re.compile(r"\brows?\b", re.I)
_QUOTED_SPAN_RE = re.compile(r"\"[^\"\n]{12,}\"")
_BLOCKQUOTE_RE = re.compile(r"^[ \t]*>[ \t]*\S", re.M)
_TESTIMONIAL_RE = re.compile(r"\btestimonials?\b", re.I)
_CHART_WORD_RE = re.compile(r"\b(chart|graph|plot|diagram|visuali[sz]ation)s?\b", re.I)

_COMPARISON_RE = re.compile(r"\s(?:vs\.?|versus)\s|\bcompar(?:e|ed|ing|ison)\b|\bcompetit(?:ive|or|ors)\b", re.I)
_ADVANTAGE_RE = re.compile(r"\badvantages?\b", re.I)
_DISADVANTAGE_RE = re.compile(r"\bdisadvantages?\b", re.I)
_PROS_RE = re.compile(r"\bpros\b", re.I)
_CONS_RE = re.compile(r"\bcons\b", re.I)

_TIMELINE_RE = re.compile(r"\b(timeline|roadmap|milestones?|phases?|schedule|history|journey|chronolog\w*)\b", re.I)
_DATE_TOKEN_RE = re.compile(
    r"\b(?:(?:19|20)\d{2}|Q[1-4]|"
    r"Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?|"
    r"Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\b"
)

_TABULAR_RE = re.compile(r"\btable\b", re.I)
_HIERARCHICAL_RE = re.compile(r"\b(hierarch\w*|tree|parent|child(?:ren)?|org(?:anizational)? chart|sub-?categor\w*)\b", re.I)
_MULTI_DIM_RE = re.compile(r"\b(dimensions?|attributes?|factors?|criteria|matrix)\b", re.I)
_TREND_RE = re.compile(r"\b(trends?|over time|growth|monthly|quarterly|yearly|annual(?:ly)?)\b", re.I)
_PERIOD_TOKEN_RE = re.compile(
    r"\b(?:Q[1-4]|Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|June?|July?|Aug(?:ust)?|"
    r"Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?|month|quarter)\b",
    re.I,
)


class DataShape(str, Enum):
    TABULAR = "tabular"
    HIERARCHICAL = "hierarchical"
    MULTI_DIMENSIONAL = "multi-dimensional"
    TIME_SERIES = "time-series"
    SIMPLE = "simple"


# --- counts ---


def count_bullets(text: str) -> int:
    return len(md.bullet_items(text))


def count_numbered(text: str) -> int:
    return len(md.numbered_items(text))


def count_sections(text: str) -> int:
    return len(md.bold_spans(text))


def count_paragraphs(text: str) -> int:
    return len(md.paragraphs(text))


def count_images(text: str) -> int:
    """Markdown images plus bare image URLs outside markdown syntax."""
    return len(md.markdown_images(text)) + len(md.bare_image_urls(text))


def count_percentages(text: str) -> int:
    return len(_PERCENT_RE.findall(text))


def count_numbers(text: str) -> int:
    return len(_NUMBER_RE.findall(text))


def count_currency(text: str) -> int:
    return len(_CURRENCY_RE.findall(text))


def count_people(text: str) -> int:
    """Proper-name pairs ("Jane Smith"), skipping sentence-initial pairs; capped."""
    n = 0
    for m in _NAME_PAIR_RE.finditer(text):
        before = text[: m.start()].rstrip(" \t")
        if before.endswith((".", "!", "?")):
            continue
        n += 1
        if n >= _MAX_PEOPLE:
            break
    return n


def count_metrics(text: str) -> int:
    low = text.lower()
    n = sum(1 for w in _METRIC_WORDS if w in low)
    n += min(count_percentages(text), 3)
    n += min(count_currency(text), 3)
    return n


# --- booleans ---


def has_tables(text: str) -> bool:
    pipe_rows = sum(1 for ln in text.split("\n") if ln.count("|") >= 2)
    if pipe_rows >= 2:
        return True
    if _TABLE_WORD_RE.search(text):
        return True
    return bool(_COLUMN_WORD_RE.search(text) and _ROW_WORD_RE.search(text))


def has_quotes(text: str) -> bool:
    return bool(_QUOTED_SPAN_RE.search(text) or _BLOCKQUOTE_RE.search(text) or _TESTIMONIAL_RE.search(text))


def has_charts(text: str) -> bool:
    return bool(_CHART_WORD_RE.search(text))


def has_comparison(text: str) -> bool:
    if _COMPARISON_RE.search(text):
        return True
    if _ADVANTAGE_RE.search(text) and _DISADVANTAGE_RE.search(text):
        return True
    return bool(_PROS_RE.search(text) and _CONS_RE.search(text))


def has_timeline(text: str) -> bool:
    if _TIMELINE_RE.search(text):
        return True
    return len(_DATE_TOKEN_RE.findall(text)) >= 3


# --- categorical / continuous ---


def classify_data_shape(text: str) -> DataShape:
    """First match wins: tabular > hierarchical > multi-dimensional > time-series > simple."""
    if "|" in text or _TABULAR_RE.search(text):
        return DataShape.TABULAR
    if _HIERARCHICAL_RE.search(text):
        return DataShape.HIERARCHICAL
    if _MULTI_DIM_RE.search(text):
        return DataShape.MULTI_DIMENSIONAL
    if _TREND_RE.search(text) or _PERIOD_TOKEN_RE.search(text):
        return DataShape.TIME_SERIES
    return DataShape.SIMPLE


def score_formality(text: str) -> float:
    score = 0.5

    if _FORMAL_CONNECTIVES_RE.search(text):
        score += 0.1
    if _ANALYTICAL_RE.search(text):
        score += 0.1
    if "!" not in text and "?" not in text:
        score += 0.05
    if not _SECOND_PERSON_RE.search(text):
        score += 0.05
    casual = bool(_CASUAL_WORD_RE.search(text))
    if not casual:
        score += 0.05

    if _CASUAL_FILLER_RE.search(text):
        score -= 0.1
    if "!!" in text:
        score -= 0.1
    if _YOU_RE.search(text) and _YOUR_RE.search(text):
        score -= 0.05
    if casual:
        score -= 0.05

    return max(0.0, min(score, 1.0))


def score_density(text: str) -> float:
    """Logistic squash of words/bullets/sections/numbers into [0, 1]."""
    raw = (
        md.word_count(text) / 100
        + count_bullets(text) * 2
        + count_sections(text) * 3
        + count_numbers(text) * 0.5
    )
    return 1.0 / (1.0 + math.exp(-raw / 50 + 5))
