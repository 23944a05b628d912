"""
markdown.py — Line-level markdown helpers shared by the analyzer, splitter and extractor.

Only the light markdown the drafting stage produces is understood:
bullets (-, *, \u2022), numbered items, **bold** spans, bold-only / # header
lines, blank-line paragraphs, and markdown images.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

BULLET_LINE_RE = re.compile(r"^[ \t]*(?:[-\u2022]|\*(?!\*))[ \t]+(\S.*)$", re.M)
NUMBERED_LINE_RE = re.compile(r"^[ \t]*(\d+)[.)][ \t]+(\S.*)$", re.M)
BOLD_SPAN_RE = re.compile(r"\*\*([^*\n]+?)\*\*")
HEADER_LINE_RE = re.compile(r"^[ \t]*(?:\*\*([^*\n]+?)\*\*|#{1,6}[ \t]+(\S[^\n]*?))[ \t]*:?[ \t]*$")
PARAGRAPH_SPLIT_RE = re.compile(r"\n[ \t]*\n")
MD_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)\s]+)(?:\s+\"([^\"]*)\")?\)")
BARE_IMAGE_URL_RE = re.compile(r"https?://[^\s)\"'<>]+?\.(?:png|jpe?g|gif|svg|webp)(?:\?[^\s)\"'<>]*)?", re.I)
_MARKER_RE = re.compile(r"^[ \t]*(?:[-\u2022]|\*(?!\*)|\d+[.)])[ \t]+")


@dataclass
class Section:
    """One header line plus the lines that follow it (header may be empty for a preamble)."""

    title: str
    header_line: str = ""
    lines: list[str] = field(default_factory=list)

    @property
    def body(self) -> str:
        return "\n".join(self.lines).strip()

    @property
    def bullets(self) -> list[str]:
        return bullet_items("\n".join(self.lines))

    @property
    def text(self) -> str:
        parts = [self.header_line] if self.header_line else []
        parts.extend(self.lines)
        return "\n".join(parts).strip()


def lines(text: str) -> list[str]:
    return [ln for ln in text.split("\n") if ln.strip()]


def word_count(text: str) -> int:
    return len(text.split())


def is_bullet_line(line: str) -> bool:
    return BULLET_LINE_RE.match(line) is not None


def bullet_items(text: str) -> list[str]:
    """Text of every bulleted line, marker removed."""
    return [m.group(1).strip() for m in BULLET_LINE_RE.finditer(text)]


def numbered_items(text: str) -> list[str]:
    return [m.group(2).strip() for m in NUMBERED_LINE_RE.finditer(text)]


def bold_spans(text: str) -> list[str]:
    return [m.group(1).strip() for m in BOLD_SPAN_RE.finditer(text)]


def header_text(line: str) -> str | None:
    """Return the header label if `line` is a bold-only or # header line."""
    m = HEADER_LINE_RE.match(line)
    if not m:
        return None
    label = (m.group(1) or m.group(2) or "").strip().rstrip(":").strip()
    return label or None


def strip_marker(line: str) -> str:
    """Remove one leading bullet / number marker and surrounding bold markers."""
    s = _MARKER_RE.sub("", line).strip()
    if s.startswith("**") and s.endswith("**") and len(s) > 4:
        s = s[2:-2].strip()
    return s


def paragraphs(text: str) -> list[str]:
    return [p.strip() for p in PARAGRAPH_SPLIT_RE.split(text) if p.strip()]


def split_sections(text: str) -> list[Section]:
    """Group lines under header lines.

    Lines before the first header land in a preamble Section with an empty
    title. Empty sections (header with nothing after it and no title) are
    dropped.
    """
    sections: list[Section] = []
    current = Section(title="")

    def _flush() -> None:
        if current.title or any(ln.strip() for ln in current.lines):
            sections.append(current)

    for ln in text.split("\n"):
        label = header_text(ln)
        if label is not None:
            _flush()
            current = Section(title=label, header_line=ln.strip())
            continue
        if ln.strip():
            current.lines.append(ln.rstrip())
    _flush()
    return sections


def markdown_images(text: str) -> list[tuple[str, str, str]]:
    """(alt, src, title) for every markdown image."""
    return [(m.group(1).strip(), m.group(2), (m.group(3) or "").strip()) for m in MD_IMAGE_RE.finditer(text)]


def bare_image_urls(text: str) -> list[str]:
    """Image URLs that are not already part of markdown image syntax."""
    remainder = MD_IMAGE_RE.sub(" ", text)
    seen: list[str] = []
    for m in BARE_IMAGE_URL_RE.finditer(remainder):
        url = m.group(0)
        if url not in seen:
            seen.append(url)
    return seen
