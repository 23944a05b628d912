from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE, PP_PLACEHOLDER

logger = logging.getLogger(__name__)

_BODY_PLACEHOLDERS = (PP_PLACEHOLDER.BODY, PP_PLACEHOLDER.OBJECT)


def _slugify_ascii(name: str) -> str:
    s = name.strip()
    s = re.sub(r"\s+", "_", s)
    s = re.sub(r"[^a-zA-Z0-9_\-]", "_", s)
    s = re.sub(r"_+", "_", s).strip("_")
    if not s:
        s = "deck"
    return s[:48]


def _norm_text(s: str) -> str:
    s = s.replace("\u00a0", " ").replace("\x0b", " ")
    s = re.sub(r"[ \t]+", " ", s)
    return s.strip()


def _shape_kind(shp: Any) -> str:
    """Coarse kind classification."""
    try:
        st = shp.shape_type
    except Exception:
        return "unknown"

    if getattr(shp, "has_table", False):
        return "table"
    if getattr(shp, "has_chart", False):
        return "chart"
    if st == MSO_SHAPE_TYPE.PICTURE:
        return "image"
    if st == MSO_SHAPE_TYPE.GROUP:
        return "group"
    if getattr(shp, "has_text_frame", False) and shp.has_text_frame:
        return "text"
    return "shape"


def _placeholder_type(shp: Any) -> Optional[Any]:
    try:
        if shp.is_placeholder:
            return shp.placeholder_format.type
    except Exception:
        pass
    return None


def _text_lines(shp: Any) -> List[str]:
    """Paragraphs as markdown lines: nested or body-placeholder paragraphs become bullets, all-bold ones headers."""
    lines: List[str] = []
    is_body = _placeholder_type(shp) in _BODY_PLACEHOLDERS
    for p in shp.text_frame.paragraphs:
        text = _norm_text(p.text or "")
        if not text:
            continue
        level = int(getattr(p, "level", 0) or 0)
        runs = [r for r in p.runs if (r.text or "").strip()]
        try:
            all_bold = bool(runs) and all(r.font.bold for r in runs)
        except Exception:
            all_bold = False

        if level > 0 or is_body:
            lines.append("  " * max(0, level - 1) + f"- {text}")
        elif all_bold:
            lines.append(f"**{text}**")
        else:
            lines.append(text)
    return lines


def _table_lines(shp: Any) -> List[str]:
    out: List[str] = []
    try:
        tbl = shp.table
        n_rows, n_cols = len(tbl.rows), len(tbl.columns)
    except Exception:
        return out
    for r in range(n_rows):
        cells = [_norm_text(tbl.cell(r, c).text or "").replace("|", "/").replace("\n", " ") for c in range(n_cols)]
        out.append("| " + " | ".join(cells) + " |")
        if r == 0:
            out.append("|" + "|".join(" --- " for _ in range(n_cols)) + "|")
    return out


def _chart_lines(shp: Any) -> List[str]:
    """First series of a chart as `Category: N%` lines (values are taken as percentages)."""
    out: List[str] = []
    try:
        plot = shp.chart.plots[0]
        categories = [str(c) for c in plot.categories]
        values = list(plot.series[0].values)
    except Exception:
        return out
    if values and all(isinstance(v, (int, float)) and 0 <= v <= 1 for v in values) and sum(values) <= 1.0001:
        values = [v * 100 for v in values]
    for name, v in zip(categories, values):
        if v is None:
            continue
        out.append(f"{name}: {int(round(v))}%")
    return out


def _image_line(shp: Any, slide_idx: int, shape_idx: int) -> str:
    name = getattr(shp, "name", "") or f"Image {shape_idx}"
    try:
        img = shp.image
        filename = img.filename or f"slide{slide_idx:03d}_img{shape_idx:03d}.{img.ext}"
    except Exception:
        filename = f"slide{slide_idx:03d}_img{shape_idx:03d}.png"
    return f"![{name}]({filename})"


def _shape_lines(shapes: Any, slide_idx: int, title_shape_id: Optional[int]) -> List[str]:
    lines: List[str] = []
    for shape_idx, shp in enumerate(shapes, start=1):
        if title_shape_id is not None and getattr(shp, "shape_id", None) == title_shape_id:
            continue
        kind = _shape_kind(shp)
        try:
            if kind == "text":
                block = _text_lines(shp)
            elif kind == "table":
                block = _table_lines(shp)
            elif kind == "chart":
                block = _chart_lines(shp)
            elif kind == "image":
                block = [_image_line(shp, slide_idx, shape_idx)]
            elif kind == "group":
                block = _shape_lines(shp.shapes, slide_idx, None)
            else:
                block = []
        except Exception as e:
            # best-effort: one unreadable shape must not lose the slide
            logger.warning("slide %d shape %d (%s) skipped: %s", slide_idx, shape_idx, kind, e)
            block = []
        if block:
            if lines:
                lines.append("")
            lines.extend(block)
    return lines


def candidates_from_pptx(path: str | Path) -> List[Dict[str, Any]]:
    """One slide candidate per pptx slide, text rendered as light markdown."""
    p = Path(path)
    prs = Presentation(str(p))
    prefix = _slugify_ascii(p.stem)

    out: List[Dict[str, Any]] = []
    for slide_idx, slide in enumerate(prs.slides, start=1):
        title_shape = slide.shapes.title
        title = ""
        title_id = None
        if title_shape is not None and title_shape.has_text_frame:
            title = _norm_text(title_shape.text_frame.text or "").replace("\n", " ")
            title_id = title_shape.shape_id

        content = "\n".join(_shape_lines(slide.shapes, slide_idx, title_id)).strip()
        out.append(
            {
                "id": f"{prefix}-s{slide_idx:03d}",
                "title": title,
                "content": content,
                "type": "title" if slide_idx == 1 else "content",
                "order": slide_idx,
            }
        )
    logger.info("read %d slide(s) from %s", len(out), p.name)
    return out
