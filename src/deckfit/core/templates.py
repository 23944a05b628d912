"""
templates.py — Closed template registry.

Every template id the renderer understands is a member of `Template`. Each
member maps to exactly one data schema (`SchemaKind`, a `$defs` entry of
schemas/template_data.schema.json) and to one coarse family used by the
recommender and the report.
"""
from __future__ import annotations

from enum import Enum


class Template(str, Enum):
    TITLE_SLIDE = "title-slide"
    CONTENT = "content"
    TWO_COLUMN = "two-column"
    PIE_CHART = "pie-chart"
    BAR_CHART = "bar-chart"
    LINE_CHART = "line-chart"
    AREA_CHART = "area-chart"
    RADAR_CHART = "radar-chart"
    COMPARISON_TABLE = "comparison-table"
    TIMELINE = "timeline"
    METRICS_DASHBOARD = "metrics-dashboard"
    BULLET_LIST = "bullet-list"
    QUOTE = "quote"
    TWO_COLUMNS = "two-columns"
    THREE_COLUMNS = "three-columns"
    FOUR_COLUMNS = "four-columns"
    ACCENT_LEFT = "accent-left"
    ACCENT_RIGHT = "accent-right"
    ACCENT_TOP = "accent-top"
    TWO_IMAGE_COLUMNS = "two-image-columns"
    THREE_IMAGE_COLUMNS = "three-image-columns"
    FOUR_IMAGE_COLUMNS = "four-image-columns"
    IMAGES_WITH_TEXT = "images-with-text"
    IMAGE_GALLERY = "image-gallery"
    TEAM_PHOTOS = "team-photos"
    # business / card layouts
    SWOT_MATRIX = "swot-matrix"
    PERSONA_CARD = "persona-card"
    NUMBERED_LIST = "numbered-list"
    IMAGE_AND_TEXT = "image-and-text"
    TEXT_AND_IMAGE = "text-and-image"
    CONCLUSION = "conclusion"

    @classmethod
    def parse(cls, value: "str | Template") -> "Template":
        """Resolve a template id, accepting enum names and loose spellings.

        Raises ValueError for anything outside the closed set.
        """
        if isinstance(value, Template):
            return value
        if not isinstance(value, str):
            raise ValueError(f"template id must be a string, got {type(value).__name__}")
        key = value.strip().lower().replace("_", "-").replace(" ", "-")
        for t in cls:
            if t.value == key:
                return t
        raise ValueError(f"unknown template: {value!r}")


class SchemaKind(str, Enum):
    CONTENT = "content"
    CHART = "chart"
    BULLETS = "bullets"
    NUMBERED = "numbered"
    COLUMNS = "columns"
    SWOT = "swot"
    TIMELINE = "timeline"
    COMPARISON = "comparison"
    PERSONA = "persona"
    METRICS = "metrics"
    GALLERY = "gallery"
    TEAM = "team"
    ACCENT = "accent"
    QUOTE = "quote"
    CARD = "card"
    CONCLUSION = "conclusion"


class TemplateFamily(str, Enum):
    TITLE = "title"
    CONTENT = "content"
    CHART = "chart"
    BUSINESS = "business"
    IMAGE = "image"


_REGISTRY: dict[Template, tuple[SchemaKind, TemplateFamily]] = {
    Template.TITLE_SLIDE: (SchemaKind.CONTENT, TemplateFamily.TITLE),
    Template.CONTENT: (SchemaKind.CONTENT, TemplateFamily.CONTENT),
    Template.TWO_COLUMN: (SchemaKind.COLUMNS, TemplateFamily.CONTENT),
    Template.PIE_CHART: (SchemaKind.CHART, TemplateFamily.CHART),
    Template.BAR_CHART: (SchemaKind.CHART, TemplateFamily.CHART),
    Template.LINE_CHART: (SchemaKind.CHART, TemplateFamily.CHART),
    Template.AREA_CHART: (SchemaKind.CHART, TemplateFamily.CHART),
    Template.RADAR_CHART: (SchemaKind.CHART, TemplateFamily.CHART),
    Template.COMPARISON_TABLE: (SchemaKind.COMPARISON, TemplateFamily.BUSINESS),
    Template.TIMELINE: (SchemaKind.TIMELINE, TemplateFamily.BUSINESS),
    Template.METRICS_DASHBOARD: (SchemaKind.METRICS, TemplateFamily.BUSINESS),
    Template.BULLET_LIST: (SchemaKind.BULLETS, TemplateFamily.CONTENT),
    Template.QUOTE: (SchemaKind.QUOTE, TemplateFamily.CONTENT),
    Template.TWO_COLUMNS: (SchemaKind.COLUMNS, TemplateFamily.CONTENT),
    Template.THREE_COLUMNS: (SchemaKind.COLUMNS, TemplateFamily.CONTENT),
    Template.FOUR_COLUMNS: (SchemaKind.COLUMNS, TemplateFamily.CONTENT),
    Template.ACCENT_LEFT: (SchemaKind.ACCENT, TemplateFamily.CONTENT),
    Template.ACCENT_RIGHT: (SchemaKind.ACCENT, TemplateFamily.CONTENT),
    Template.ACCENT_TOP: (SchemaKind.ACCENT, TemplateFamily.CONTENT),
    Template.TWO_IMAGE_COLUMNS: (SchemaKind.COLUMNS, TemplateFamily.IMAGE),
    Template.THREE_IMAGE_COLUMNS: (SchemaKind.COLUMNS, TemplateFamily.IMAGE),
    Template.FOUR_IMAGE_COLUMNS: (SchemaKind.COLUMNS, TemplateFamily.IMAGE),
    Template.IMAGES_WITH_TEXT: (SchemaKind.GALLERY, TemplateFamily.IMAGE),
    Template.IMAGE_GALLERY: (SchemaKind.GALLERY, TemplateFamily.IMAGE),
    Template.TEAM_PHOTOS: (SchemaKind.TEAM, TemplateFamily.IMAGE),
    Template.SWOT_MATRIX: (SchemaKind.SWOT, TemplateFamily.BUSINESS),
    Template.PERSONA_CARD: (SchemaKind.PERSONA, TemplateFamily.BUSINESS),
    Template.NUMBERED_LIST: (SchemaKind.NUMBERED, TemplateFamily.CONTENT),
    Template.IMAGE_AND_TEXT: (SchemaKind.CARD, TemplateFamily.IMAGE),
    Template.TEXT_AND_IMAGE: (SchemaKind.CARD, TemplateFamily.IMAGE),
    Template.CONCLUSION: (SchemaKind.CONCLUSION, TemplateFamily.CONTENT),
}

CHART_TEMPLATES: frozenset[Template] = frozenset(
    t for t, (_, fam) in _REGISTRY.items() if fam is TemplateFamily.CHART
)

# Number of columns a column-kind template lays out.
COLUMN_COUNTS: dict[Template, int] = {
    Template.TWO_COLUMN: 2,
    Template.TWO_COLUMNS: 2,
    Template.THREE_COLUMNS: 3,
    Template.FOUR_COLUMNS: 4,
    Template.TWO_IMAGE_COLUMNS: 2,
    Template.THREE_IMAGE_COLUMNS: 3,
    Template.FOUR_IMAGE_COLUMNS: 4,
}

DEFAULT_TEMPLATE = Template.CONTENT


def schema_kind(template: Template) -> SchemaKind:
    return _REGISTRY[template][0]


def family(template: Template) -> TemplateFamily:
    return _REGISTRY[template][1]


def is_chart(template: Template | None) -> bool:
    return template in CHART_TEMPLATES
