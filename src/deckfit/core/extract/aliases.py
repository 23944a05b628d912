"""
aliases.py — Canonicalize upstream templateData keys.

Drafting stages name the same field several ways (items / points /
bulletPoints for bullets, series / values for chart data, ...). Renames
never overwrite a canonical key that is already present.
"""
from __future__ import annotations

from typing import Any

from deckfit.core.templates import SchemaKind

_COMMON: dict[str, str] = {"heading": "title", "header": "title", "body": "content", "text": "content"}

_BY_KIND: dict[SchemaKind, dict[str, str]] = {
    SchemaKind.BULLETS: {"items": "bullets", "points": "bullets", "bulletPoints": "bullets", "bullet_points": "bullets"},
    SchemaKind.NUMBERED: {"bullets": "items", "points": "items", "steps": "items", "numberedItems": "items"},
    SchemaKind.CHART: {
        "series": "data",
        "values": "data",
        "chartData": "data",
        "chart_data": "data",
        "chartType": "type",
        "chart_type": "type",
    },
    SchemaKind.TEAM: {"people": "members", "team": "members", "teamMembers": "members"},
    SchemaKind.TIMELINE: {"entries": "events", "milestones": "events", "phases": "events"},
    SchemaKind.COMPARISON: {"columns": "headers", "header": "headers", "table": "rows"},
    SchemaKind.METRICS: {"kpis": "metrics", "stats": "metrics", "items": "metrics"},
    SchemaKind.GALLERY: {"pictures": "images", "photos": "images"},
    SchemaKind.PERSONA: {"pain_points": "painPoints", "pains": "painPoints", "objectives": "goals"},
    SchemaKind.ACCENT: {"accent_position": "accentPosition", "position": "accentPosition", "accent_color": "accentColor"},
    SchemaKind.CARD: {"image_position": "imagePosition", "position": "imagePosition"},
    SchemaKind.QUOTE: {"text": "quote", "body": "quote", "attribution": "author", "source": "author"},
    SchemaKind.CONCLUSION: {"cta": "callToAction", "call_to_action": "callToAction"},
}

# (list field, per-item renames)
_ITEM_ALIASES: dict[SchemaKind, tuple[str, dict[str, str]]] = {
    SchemaKind.CHART: ("data", {"label": "name", "category": "name", "amount": "value", "percent": "value"}),
    SchemaKind.METRICS: ("metrics", {"name": "label", "title": "label", "delta": "change"}),
    SchemaKind.TIMELINE: ("events", {"when": "date", "period": "date", "name": "title", "label": "title", "details": "description"}),
    SchemaKind.TEAM: ("members", {"title": "role", "position": "role", "photo": "image", "avatar": "image"}),
    SchemaKind.GALLERY: ("images", {"url": "src", "image": "src", "description": "caption"}),
}


def _rename(d: dict[str, Any], table: dict[str, str]) -> dict[str, Any]:
    out = dict(d)
    for old, new in table.items():
        if old in out and new not in out:
            out[new] = out.pop(old)
    return out


def alias_template_data(kind: SchemaKind, data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of `data` with known aliases renamed for `kind`."""
    # kind-specific renames win over the common ones (quote: text -> quote)
    out = _rename(data, _BY_KIND.get(kind, {}))
    out = _rename(out, _COMMON)

    if kind in _ITEM_ALIASES:
        field, table = _ITEM_ALIASES[kind]
        items = out.get(field)
        if isinstance(items, list):
            out[field] = [_rename(it, table) if isinstance(it, dict) else it for it in items]
    return out
