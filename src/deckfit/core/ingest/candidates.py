"""
candidates.py — Slide candidates from JSON, markdown/text and pptx files.

Accepted JSON shapes:
  [ {slide}, ... ]                                   slide list
  {"slides": [ {slide}, ... ]}                       deck wrapper
  {"title": ..., "sections": [{"title", "content"}]} presentation outline
  {"Market": {...}, "Team": [...], ...}              nested business record,
                                                     one slide per top-level key
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^(#{1,2})[ \t]+(\S.*?)[ \t]*#*[ \t]*$", re.M)
_RULE_RE = re.compile(r"^[ \t]*-{3,}[ \t]*$", re.M)
_MAX_RULE_TITLE = 80

TEXT_SUFFIXES = frozenset({".md", ".markdown", ".txt"})


class IngestError(ValueError):
    """Input that cannot be turned into slide candidates."""


def _humanize(key: str) -> str:
    s = re.sub(r"[_\-]+", " ", str(key)).strip()
    s = re.sub(r"(?<=[a-z])(?=[A-Z])", " ", s)
    return s[:1].upper() + s[1:] if s else s


def _scalar(v: Any) -> str:
    if isinstance(v, bool):
        return "yes" if v else "no"
    if v is None:
        return ""
    return str(v)


def _render_list(items: list[Any]) -> list[str]:
    out: list[str] = []
    for it in items:
        if isinstance(it, dict):
            pairs = ", ".join(f"{_humanize(k)}: {_scalar(v)}" for k, v in it.items() if not isinstance(v, (dict, list)))
            if pairs:
                out.append(f"- {pairs}")
        elif isinstance(it, list):
            out.extend(_render_list(it))
        elif _scalar(it):
            out.append(f"- {_scalar(it)}")
    return out


def render_value(value: Any) -> str:
    """Light markdown for a record value: dicts -> **Key** sections / key bullets, lists -> bullets."""
    if isinstance(value, dict):
        blocks: list[str] = []
        flat: list[str] = []
        for k, v in value.items():
            if isinstance(v, (dict, list)):
                body = render_value(v)
                if body:
                    blocks.append(f"**{_humanize(k)}**\n{body}")
            elif _scalar(v):
                flat.append(f"- {_humanize(k)}: {_scalar(v)}")
        if flat:
            blocks.insert(0, "\n".join(flat))
        return "\n\n".join(blocks)
    if isinstance(value, list):
        return "\n".join(_render_list(value))
    return _scalar(value)


def _slide_list(items: list[Any]) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for i, it in enumerate(items):
        if isinstance(it, dict):
            out.append(it)
        elif isinstance(it, str):
            out.append({"content": it})
        else:
            raise IngestError(f"slides[{i}]: expected an object or string, got {type(it).__name__}")
    return out


def _outline(obj: dict[str, Any]) -> list[dict[str, Any]]:
    sections = obj.get("sections")
    if not isinstance(sections, list):
        raise IngestError("sections: must be an array")
    lead = obj.get("subtitle") or obj.get("description") or obj.get("content") or ""
    out: list[dict[str, Any]] = [{"id": "slide-1", "title": str(obj["title"]), "content": render_value(lead), "type": "title"}]
    for i, sec in enumerate(sections, start=2):
        if isinstance(sec, dict):
            title = sec.get("title") or sec.get("heading") or ""
            body = sec.get("content", sec.get("body", sec.get("points", "")))
            out.append({"id": f"slide-{i}", "title": str(title), "content": render_value(body)})
        else:
            out.append({"id": f"slide-{i}", "title": "", "content": render_value(sec)})
    return out


def candidates_from_json(obj: Any) -> list[dict[str, Any]]:
    if isinstance(obj, list):
        return _slide_list(obj)
    if not isinstance(obj, dict):
        raise IngestError(f"expected a JSON array or object, got {type(obj).__name__}")
    if isinstance(obj.get("slides"), list):
        return _slide_list(obj["slides"])
    if "title" in obj and "sections" in obj:
        return _outline(obj)
    if not obj:
        raise IngestError("empty JSON object")

    out = []
    for i, (key, value) in enumerate(obj.items(), start=1):
        out.append({"id": f"slide-{i}", "title": _humanize(key), "content": render_value(value), "order": i})
    return out


def _split_headings(text: str) -> list[dict[str, Any]]:
    matches = list(_HEADING_RE.finditer(text))
    out: list[dict[str, Any]] = []
    lead = text[: matches[0].start()].strip()
    if lead:
        out.append({"title": "", "content": lead})
    for i, m in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        out.append({"title": m.group(2).strip(), "content": text[m.end() : end].strip()})
    return out


def _split_rules(text: str) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for chunk in _RULE_RE.split(text):
        chunk = chunk.strip()
        if not chunk:
            continue
        first, _, rest = chunk.partition("\n")
        if rest.strip() and len(first) <= _MAX_RULE_TITLE:
            out.append({"title": first.strip().strip("*").strip(), "content": rest.strip()})
        else:
            out.append({"title": "", "content": chunk})
    return out


def candidates_from_text(text: str) -> list[dict[str, Any]]:
    """Split markdown/plain text on # / ## headings, else on --- rules."""
    if not text.strip():
        raise IngestError("empty text input")
    if _HEADING_RE.search(text):
        slides = _split_headings(text)
    else:
        slides = _split_rules(text)
    for i, s in enumerate(slides, start=1):
        s["id"] = f"slide-{i}"
        s["order"] = i
    return slides


def load_candidates(path: str | Path) -> list[dict[str, Any]]:
    p = Path(path)
    if not p.exists():
        raise IngestError(f"input not found: {p}")
    suffix = p.suffix.lower()

    if suffix == ".json":
        try:
            obj = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise IngestError(f"{p}: invalid JSON: {e}") from e
        slides = candidates_from_json(obj)
    elif suffix in TEXT_SUFFIXES:
        slides = candidates_from_text(p.read_text(encoding="utf-8"))
    elif suffix == ".pptx":
        from deckfit.core.ingest.pptx_ingest import candidates_from_pptx

        slides = candidates_from_pptx(p)
    else:
        raise IngestError(f"unsupported input type {suffix!r} (expected .json, .md, .txt or .pptx)")

    if not slides:
        raise IngestError(f"{p}: no slide candidates found")
    logger.info("loaded %d candidate(s) from %s", len(slides), p.name)
    return slides
