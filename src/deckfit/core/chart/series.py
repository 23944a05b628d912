"""
series.py — Chart series parsing from "Label: N%" lines.

A series is an ordered list of ChartPoint; order follows the source lines and
becomes legend/axis order downstream. Fewer than two valid points is not a
chart and parse_series returns None.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from deckfit.core.templates import Template

if TYPE_CHECKING:
    from deckfit.core.slide import Slide

# Tried in order; first match on a line wins.
_LINE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\*\*(.+?):\*\*\s*(\d+)%"),            # **Label:** 40%
    re.compile(r"\*\*(.+?)\*\*:\s*(\d+)%"),            # **Label**: 40%
    re.compile(r"^\s*[-*\u2022]\s*([^:]+):\s*(\d+)%"),   # - Label: 40%
    re.compile(r"([^:]+):\s*(\d+)%"),                  # Label: 40%
]

_MAX_LINE_LEN = 500
_MAX_NAME_LEN = 100
_LONG_DIGITS_RE = re.compile(r"\d{10,}")
_LETTER_DIGIT_RUN_RE = re.compile(r"(?:[A-Za-z]\d){4,}|[A-Za-z]\d{5,}")
_PERCENT_RE = re.compile(r"\d+%")
_CONTINUED_RE = re.compile(r"\s*\(continued\)\s*$", re.I)

CHART_TITLES: frozenset[str] = frozenset(
    {
        "budget allocation",
        "budget distribution",
        "spending breakdown",
        "cost analysis",
        "investment distribution",
        "resource allocation",
        "marketing mix",
    }
)

CHART_COLORS: tuple[str, ...] = (
    "#3b82f6",
    "#10b981",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#ec4899",
    "#14b8a6",
    "#f97316",
)

_CHART_TYPE: dict[Template, str] = {
    Template.PIE_CHART: "pie",
    Template.BAR_CHART: "bar",
    Template.LINE_CHART: "line",
    Template.AREA_CHART: "area",
    Template.RADAR_CHART: "radar",
}


@dataclass(frozen=True)
class ChartPoint:
    name: str
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


def _line_is_suspicious(line: str) -> bool:
    if len(line) > _MAX_LINE_LEN:
        return True
    if not line.isprintable():
        return True
    return bool(_LONG_DIGITS_RE.search(line) or _LETTER_DIGIT_RUN_RE.search(line))


def _clean_name(raw: str) -> str:
    s = raw.strip().strip("*").strip()
    s = re.sub(r"^[-*\u2022]\s*", "", s)
    return s.strip().strip("*").strip()


def _valid_name(name: str) -> bool:
    if not name or len(name) >= _MAX_NAME_LEN:
        return False
    return all(32 <= ord(ch) < 127 for ch in name)


def parse_line(line: str) -> ChartPoint | None:
    """Parse one line into a point, or None when it is not a valid "Label: N%" line."""
    line = line.strip()
    if not line or _line_is_suspicious(line):
        return None
    for pat in _LINE_PATTERNS:
        m = pat.search(line)
        if not m:
            continue
        name = _clean_name(m.group(1))
        value = int(m.group(2))
        if _valid_name(name) and 0 <= value <= 100:
            return ChartPoint(name=name, value=value)
        return None
    return None


def parse_series(text: str | None) -> list[ChartPoint] | None:
    """Extract chart points from every matching line; None if fewer than two."""
    if not text:
        return None
    points: list[ChartPoint] = []
    for line in text.split("\n"):
        p = parse_line(line)
        if p is not None:
            points.append(p)
    return points if len(points) >= 2 else None


def should_show_chart(title: str, content: str) -> bool:
    """Chart-worthy title (ignoring "(continued)") or any N% token in the content."""
    base = _CONTINUED_RE.sub("", title or "").strip().lower()
    if base in CHART_TITLES:
        return True
    return bool(_PERCENT_RE.search(content or ""))


def series_from_data(data: Any) -> list[ChartPoint] | None:
    """Accept a templateData-style list of {name, value} (or label/value) dicts."""
    if not isinstance(data, list):
        return None
    points: list[ChartPoint] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        name = item.get("name", item.get("label"))
        value = item.get("value")
        if not isinstance(name, str) or isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        name = _clean_name(name)
        if not _valid_name(name) or not float(value).is_integer() or not 0 <= value <= 100:
            continue
        points.append(ChartPoint(name=name, value=int(value)))
    return points if len(points) >= 2 else None


def chart_series_for_slide(slide: "Slide") -> list[ChartPoint] | None:
    """Series carried by a slide: structured templateData first, then its text."""
    td = slide.template_data or {}
    for key in ("data", "series", "chartData", "values"):
        pts = series_from_data(td.get(key))
        if pts:
            return pts
    if not should_show_chart(slide.title, slide.content):
        return None
    return parse_series(slide.content)


def chart_payload(points: list[ChartPoint], template: Template) -> dict[str, Any]:
    """Renderer-facing chart payload for a chart template."""
    return {
        "type": _CHART_TYPE.get(template, "bar"),
        "data": [p.to_dict() for p in points],
        "dataKey": "value",
        "nameKey": "name",
        "colors": list(CHART_COLORS),
    }
