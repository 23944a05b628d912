"""
deckfit.core.chart — Chart series parsing.

Public API:

    parse_series(text) -> list[ChartPoint] | None
    should_show_chart(title, content) -> bool
    chart_series_for_slide(slide) -> list[ChartPoint] | None
    chart_payload(points, template) -> dict
"""
from deckfit.core.chart.series import (
    CHART_COLORS,
    ChartPoint,
    chart_payload,
    chart_series_for_slide,
    parse_series,
    should_show_chart,
)

__all__ = [
    "CHART_COLORS",
    "ChartPoint",
    "chart_payload",
    "chart_series_for_slide",
    "parse_series",
    "should_show_chart",
]
