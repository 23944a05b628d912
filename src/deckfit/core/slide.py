"""
slide.py — Slide candidate record.

A Slide is what the drafting stage hands in and what the renderer receives:
id / title / content / type / order plus, once fitted, a template and its
structured templateData. `order` is a sort key (float) so split fragments can
be slotted in between originals.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from deckfit.core.templates import Template

logger = logging.getLogger(__name__)

# Non-canonical keys seen in drafted decks, mapped to canonical fields.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "slide_id", "slideId", "key"),
    "title": ("title", "heading", "header", "name"),
    "content": ("content", "body", "text", "markdown"),
    "type": ("type", "kind", "slideType"),
    "order": ("order", "index", "position", "slide_no"),
    "template": ("template", "templateId", "template_id"),
    "template_data": ("templateData", "template_data", "data"),
}


def _pick(d: dict[str, Any], field: str) -> Any:
    for k in _FIELD_ALIASES[field]:
        if k in d and d[k] is not None:
            return d[k]
    return None


def _as_text(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    if isinstance(v, list):
        # drafting stages sometimes emit content as a list of lines/bullets
        return "\n".join(_as_text(x) for x in v)
    return str(v)


def _parse_template(value: Any, sid: Any) -> Template | None:
    # an unknown upstream template is dropped so the slide gets reclassified
    if not value:
        return None
    try:
        return Template.parse(value)
    except ValueError:
        logger.warning("slide %s: ignoring unknown template %r", sid, value)
        return None


@dataclass
class Slide:
    id: str
    title: str
    content: str
    order: float = 0.0
    type: str = "content"
    template: Template | None = None
    template_data: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, d: dict[str, Any], *, default_order: float = 0.0, default_id: str = "") -> "Slide":
        """Build a Slide from a loosely-shaped dict (field aliasing applied)."""
        if not isinstance(d, dict):
            raise TypeError(f"slide candidate must be an object, got {type(d).__name__}")

        sid = _pick(d, "id")
        order = _pick(d, "order")
        try:
            order_f = float(order) if order is not None else float(default_order)
        except (TypeError, ValueError):
            order_f = float(default_order)

        template = _pick(d, "template")
        tdata = _pick(d, "template_data")

        return cls(
            id=str(sid) if sid is not None else (default_id or f"slide-{int(order_f)}"),
            title=_as_text(_pick(d, "title")).strip(),
            content=_as_text(_pick(d, "content")),
            order=order_f,
            type=str(_pick(d, "type") or "content"),
            template=_parse_template(template, sid),
            template_data=tdata if isinstance(tdata, dict) and tdata else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "type": self.type,
            "order": self.order,
            "template": self.template.value if self.template else None,
            "templateData": self.template_data,
        }
        return out

    def with_changes(self, **changes: Any) -> "Slide":
        return replace(self, **changes)
