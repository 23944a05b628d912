"""
template_data.py — Build schema-valid templateData for a chosen template.

Flow:
  1) upstream templateData (aliased) is reused when it already validates
  2) otherwise the builder for the template's schema kind parses the
     sanitized content
  3) a builder that finds nothing fills placeholders and reports
     used_defaults=True (the pipeline may demote such slides)
  4) the payload is validated with jsonschema before it is returned

Import:
    from deckfit.core.extract import extract, extract_with_status
    data = extract(Template.BULLET_LIST, slide)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from deckfit.core.chart.series import chart_payload, parse_series, series_from_data
from deckfit.core.extract import fields
from deckfit.core.extract.aliases import alias_template_data
from deckfit.core.slide import Slide
from deckfit.core.templates import COLUMN_COUNTS, SchemaKind, Template, TemplateFamily, family, schema_kind
from deckfit.core.text import markdown as md
from deckfit.core.text.sanitize import SENTINEL, sanitize
from deckfit.core.validate.schema_validate import validate_template_data

logger = logging.getLogger(__name__)


class TemplateDataError(ValueError):
    """A builder produced a payload that violates its template's schema."""


@dataclass(frozen=True)
class Extraction:
    data: dict[str, Any]
    used_defaults: bool


Builder = Callable[[Template, str, str], "tuple[dict[str, Any], bool]"]

# ---------------------------------------------------------------------------
# Placeholder defaults
# ---------------------------------------------------------------------------

DEFAULT_BULLETS = ["Key point 1", "Key point 2", "Key point 3"]
DEFAULT_NUMBERED = ["First item", "Second item", "Third item"]
DEFAULT_SERIES = [
    {"name": "Product", "value": 40},
    {"name": "Price", "value": 25},
    {"name": "Place", "value": 20},
    {"name": "Promotion", "value": 15},
]
DEFAULT_SWOT: dict[str, list[str]] = {
    "strengths": ["Strong brand recognition", "Experienced team"],
    "weaknesses": ["Limited market reach", "High costs"],
    "opportunities": ["Market expansion", "New partnerships"],
    "threats": ["Competition", "Economic changes"],
}
DEFAULT_METRICS = [
    {"label": "Revenue", "value": "$2.4M", "change": "+12%", "trend": "up"},
    {"label": "Users", "value": "15.2K", "change": "+8%", "trend": "up"},
    {"label": "Conversion", "value": "3.2%", "change": "-2%", "trend": "down"},
    {"label": "Retention", "value": "87%", "change": "+5%", "trend": "up"},
]
DEFAULT_COMPARISON = (
    ["Feature", "Our Product", "Competitor A", "Competitor B"],
    [
        ["Price", "$99/month", "$149/month", "$79/month"],
        ["Support", "24/7", "Business hours", "Email only"],
        ["Integration", "Yes", "Limited", "Yes"],
    ],
)
DEFAULT_EVENTS = [
    {"date": "Q1 2024", "title": "Project Launch", "description": "Initial development phase"},
    {"date": "Q2 2024", "title": "Beta Release", "description": "Limited user testing"},
    {"date": "Q3 2024", "title": "Full Launch", "description": "Public release"},
]
DEFAULT_PERSONA: dict[str, Any] = {
    "name": "Sarah Johnson",
    "role": "Marketing Manager",
    "demographics": {"age": "28-35", "location": "Urban", "income": "$60K-$80K"},
    "psychographics": {"interests": "Technology, Innovation", "values": "Efficiency, Growth"},
    "painPoints": ["Limited time for research", "Need for quick insights"],
    "goals": ["Increase team productivity", "Make data-driven decisions"],
}
DEFAULT_TEAM = [
    {"name": "John Doe", "role": "CEO", "image": "/placeholder-1.jpg", "bio": "Visionary leader"},
    {"name": "Jane Smith", "role": "CTO", "image": "/placeholder-2.jpg", "bio": "Technical expert"},
    {"name": "Mike Johnson", "role": "CFO", "image": "/placeholder-3.jpg", "bio": "Financial strategist"},
]
DEFAULT_QUOTE = "Quote text"
DEFAULT_CALL_TO_ACTION = "Thank you for your attention"
ACCENT_COLOR = "#3b82f6"


def placeholder_image(i: int | None = None) -> str:
    return "/placeholder.jpg" if i is None else f"/placeholder-{i}.jpg"


def _placeholder_images(n: int = 3) -> list[dict[str, str]]:
    return [{"src": placeholder_image(i), "alt": f"Image {i}", "caption": f"Sample image {i}"} for i in range(1, n + 1)]


def _prune(d: Any) -> Any:
    """Drop None values (optional fields are omitted, never null)."""
    if isinstance(d, dict):
        return {k: _prune(v) for k, v in d.items() if v is not None}
    if isinstance(d, list):
        return [_prune(v) for v in d]
    return d


# ---------------------------------------------------------------------------
# Builders (template, title, content) -> (data, used_defaults)
# ---------------------------------------------------------------------------


def _build_content(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    # a title slide with no body is complete, not a placeholder
    used = not content.strip() and template is not Template.TITLE_SLIDE
    return {"title": title, "content": content}, used


def _build_chart(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    points = parse_series(content)
    if points:
        return chart_payload(points, template), False
    payload = chart_payload(series_from_data(DEFAULT_SERIES) or [], template)
    return payload, True


def _build_bullets(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    items = fields.bullets(content) or fields.numbered(content)
    return {
        "title": title,
        "bullets": items or list(DEFAULT_BULLETS),
        "image": fields.first_image(content),
    }, not items


def _build_numbered(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    items = fields.numbered(content) or fields.bullets(content)
    return {
        "title": title,
        "items": items or list(DEFAULT_NUMBERED),
        "image": fields.first_image(content),
    }, not items


def _build_columns(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    count = COLUMN_COUNTS.get(template, 2)
    with_images = family(template) is TemplateFamily.IMAGE
    text = fields.strip_images(content) if with_images else content
    cols = fields.columns(text, count)
    used = not cols
    if not cols:
        cols = [{"content": ""} for _ in range(count)]

    if with_images:
        imgs = [i["src"] for i in fields.images(content)]
        for i, col in enumerate(cols):
            col.setdefault("title", f"Image {i + 1}")
            col["image"] = imgs[i] if i < len(imgs) else placeholder_image(i + 1)
    return {"columns": cols}, used


def _build_swot(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    found = fields.swot(content)
    data = {bucket: found.get(bucket) or list(DEFAULT_SWOT[bucket]) for bucket in DEFAULT_SWOT}
    return data, not found


def _build_timeline(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    events = fields.timeline_events(content)
    return {"events": events or [dict(e) for e in DEFAULT_EVENTS]}, not events


def _build_comparison(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    found = fields.comparison(title, content)
    if found:
        headers, rows = found
        return {"headers": headers, "rows": rows}, False
    headers, rows = DEFAULT_COMPARISON
    return {"headers": list(headers), "rows": [list(r) for r in rows]}, True


def _build_persona(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    found = fields.persona(content)
    data = {k: found.get(k) or DEFAULT_PERSONA[k] for k in DEFAULT_PERSONA}
    return data, not found


def _build_metrics(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    found = fields.metrics(content)
    return {"metrics": found or [dict(m) for m in DEFAULT_METRICS]}, not found


def _build_gallery(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    imgs = fields.images(content)
    data: dict[str, Any] = {
        "title": title,
        "content": fields.strip_images(content),
        "images": imgs or _placeholder_images(),
    }
    if template is Template.IMAGE_GALLERY:
        data["layout"] = "grid"
    return data, not imgs


def _build_team(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    members = fields.team_members(content)
    return {"title": title, "members": members or [dict(m) for m in DEFAULT_TEAM]}, not members


_ACCENT_POSITION = {
    Template.ACCENT_LEFT: "left",
    Template.ACCENT_RIGHT: "right",
    Template.ACCENT_TOP: "top",
}


def _build_accent(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    body = fields.strip_images(content)
    return {
        "title": title,
        "content": body,
        "image": fields.first_image(content),
        "accentPosition": _ACCENT_POSITION.get(template, "left"),
        "accentColor": ACCENT_COLOR,
    }, not body


def _build_quote(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    found = fields.quote(content)
    if found:
        text, author = found
    else:
        text, author = content.strip(), ""
    return {
        "quote": text or DEFAULT_QUOTE,
        "author": author or None,
        "title": title,
        "image": fields.first_image(content),
    }, not text


def _build_card(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    body = fields.strip_images(content)
    return {
        "title": title,
        "content": body,
        "image": fields.first_image(content) or placeholder_image(),
        "imagePosition": "right" if template is Template.TEXT_AND_IMAGE else "left",
    }, not body


def _build_conclusion(template: Template, title: str, content: str) -> tuple[dict[str, Any], bool]:
    return {
        "title": title,
        "content": content,
        "callToAction": fields.call_to_action(content) or DEFAULT_CALL_TO_ACTION,
    }, not content.strip()


_KIND_BUILDERS: dict[SchemaKind, Builder] = {
    SchemaKind.CONTENT: _build_content,
    SchemaKind.CHART: _build_chart,
    SchemaKind.BULLETS: _build_bullets,
    SchemaKind.NUMBERED: _build_numbered,
    SchemaKind.COLUMNS: _build_columns,
    SchemaKind.SWOT: _build_swot,
    SchemaKind.TIMELINE: _build_timeline,
    SchemaKind.COMPARISON: _build_comparison,
    SchemaKind.PERSONA: _build_persona,
    SchemaKind.METRICS: _build_metrics,
    SchemaKind.GALLERY: _build_gallery,
    SchemaKind.TEAM: _build_team,
    SchemaKind.ACCENT: _build_accent,
    SchemaKind.QUOTE: _build_quote,
    SchemaKind.CARD: _build_card,
    SchemaKind.CONCLUSION: _build_conclusion,
}

BUILDERS: dict[Template, Builder] = {t: _KIND_BUILDERS[schema_kind(t)] for t in Template}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def reuse_upstream(template: Template, slide: Slide) -> dict[str, Any] | None:
    """Upstream templateData made canonical for `template`, or None when it cannot be used."""
    if not slide.template_data:
        return None
    kind = schema_kind(template)
    data = alias_template_data(kind, slide.template_data)
    if kind is SchemaKind.CHART:
        # the chart type follows the chosen template, not the upstream guess
        points = series_from_data(data.get("data"))
        if not points:
            return None
        data = {**chart_payload(points, template), **{k: v for k, v in data.items() if k in ("xKey", "yKey")}}
    errors = validate_template_data(template, data)
    if errors:
        logger.debug("upstream templateData for %s rejected (%s): %s", slide.id, template.value, errors[0])
        return None
    return data


def extract_with_status(template: Template | str, slide: Slide) -> Extraction:
    """Build templateData for `template` and report whether only placeholders were used."""
    template = Template.parse(template)
    reused = reuse_upstream(template, slide)
    if reused is not None:
        return Extraction(reused, False)

    content = sanitize(slide.content)
    if content == SENTINEL:
        content = ""
    data, used_defaults = BUILDERS[template](template, slide.title, content)
    data = _prune(data)

    errors = validate_template_data(template, data)
    if errors:
        raise TemplateDataError(f"{template.value} payload for {slide.id!r} is invalid: " + "; ".join(errors))
    if used_defaults:
        logger.debug("no %s fields found in %s; placeholders used", schema_kind(template).value, slide.id)
    return Extraction(data, used_defaults)


def extract(template: Template | str, slide: Slide) -> dict[str, Any]:
    return extract_with_status(template, slide).data


def extract_all_content_data(slide: Slide) -> dict[str, Any]:
    """Every substructure that can be read from the slide's content, for template-change tooling."""
    content = sanitize(slide.content)
    if content == SENTINEL:
        content = ""
    points = parse_series(content)
    q = fields.quote(content)
    return {
        "title": slide.title,
        "bullets": fields.bullets(content),
        "numbered": fields.numbered(content),
        "sections": [s for s in fields.sections(content) if s["title"]],
        "paragraphs": md.paragraphs(content),
        "images": fields.images(content),
        "series": [p.to_dict() for p in points] if points else None,
        "quote": {"quote": q[0], "author": q[1]} if q else None,
    }
