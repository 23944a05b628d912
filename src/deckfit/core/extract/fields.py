"""
fields.py — Field parsers over sanitized slide content.

Each parser returns what it found and an empty value when nothing matched;
placeholder defaults are the builders' business, not the parsers'.
"""
from __future__ import annotations

import re
from typing import Any

from deckfit.core.text import markdown as md

_LEAD_RE = r"^[ \t]*(?:[-*+][ \t]+)?(?:\*\*)?"

_TABLE_ROW_RE = re.compile(r"^\s*\|(.+)\|\s*$")
_TABLE_RULE_RE = re.compile(r"^\s*\|?\s*:?-{2,}:?\s*(?:\|\s*:?-{2,}:?\s*)*\|?\s*$")
_VS_TITLE_RE = re.compile(r"^(.+?)\s+(?:vs\.?|versus)\s+(.+)$", re.I)
_VS_LINE_RE = re.compile(_LEAD_RE + r"([^:*\n]+?)(?:\*\*)?:\s*(.+?)\s+(?:vs\.?|versus)\s+(.+?)\s*$", re.I)

_EVENT_RE = re.compile(
    _LEAD_RE
    + r"((?:Q[1-4][ \t]*(?:19|20)\d{2})|(?:(?:19|20)\d{2}(?:[ \t]*Q[1-4])?)"
    r"|(?:(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)[a-z]*\.?[ \t]+(?:19|20)\d{2})"
    r"|(?:(?:Phase|Step|Stage|Week|Month|Year|Day)[ \t]+\d+))"
    r"(?:\*\*)?[ \t]*(?::|-{1,2}|\|)[ \t]*(?:\*\*)?(.+?)[ \t]*$",
    re.I,
)
_TITLE_DESC_SPLIT_RE = re.compile(r"\s+-{1,2}\s+|:\s+")

_METRIC_RE = re.compile(
    _LEAD_RE + r"([^:*\n]{1,60}?)(?:\*\*)?:[ \t]*(?:\*\*)?([^()\n]*?\d[^()\n]*?)(?:\*\*)?"
    r"(?:[ \t]*\(([+-]?\d+(?:\.\d+)?%)[^)]*\))?[ \t]*$"
)

_NAME = r"[A-Z][A-Za-z'.-]+(?:[ \t]+[A-Z][A-Za-z'.-]+){1,2}"
_MEMBER_PAREN_RE = re.compile(_LEAD_RE + r"(" + _NAME + r")(?:\*\*)?[ \t]*\(([^)]+)\)[ \t]*(?:[-:,][ \t]*)?(.*)$")
_MEMBER_SEP_RE = re.compile(_LEAD_RE + r"(" + _NAME + r")(?:\*\*)?[ \t]*(?:,|:|[ \t]-{1,2})[ \t]*([^,.;\n]+?)(?:[ \t]*(?:[,.;]|[ \t]-{1,2})[ \t]*(.*))?$")

_KEY_VALUE_RE = re.compile(_LEAD_RE + r"([A-Za-z][A-Za-z /]{0,30}?)(?:\*\*)?:[ \t]*(?:\*\*)?(.+?)[ \t]*$")

_QUOTED_RE = re.compile(r"\"([^\"\n]{12,})\"")
_BLOCKQUOTE_RE = re.compile(r"^[ \t]*>[ \t]?(.*)$", re.M)
_ATTRIBUTION_RE = re.compile(r"\s*(?:-{1,2}|~)[ \t]*([A-Z][^\n]{1,80})")
_CTA_RE = re.compile(
    _LEAD_RE + r"(?:call to action|cta|next steps?|action items?)(?:\*\*)?[ \t]*:?[ \t]*(?:\*\*)?[ \t]*(.*)$", re.I
)
_CTA_VERB_RE = re.compile(
    r"^[ \t]*(?:[-*+][ \t]+)?(?:join|contact|sign up|get started|learn more|reach out|visit|start|book|schedule|try|let'?s)\b",
    re.I,
)

SWOT_BUCKETS: tuple[tuple[str, str], ...] = (
    ("strengths", "strength"),
    ("weaknesses", "weakness"),
    ("opportunities", "opportunit"),
    ("threats", "threat"),
)

_DEMOGRAPHIC_KEYS = ("age", "location", "income", "education", "gender", "occupation", "family", "industry")
_PSYCHOGRAPHIC_KEYS = ("interests", "values", "lifestyle", "personality", "hobbies", "motivations", "attitudes")
_ROLE_KEYS = ("role", "title", "job", "job title", "position")


def _clean(s: str) -> str:
    return md.strip_marker(s).strip().strip("*").strip()


def first_image(content: str) -> str | None:
    imgs = md.markdown_images(content)
    if imgs:
        return imgs[0][1]
    urls = md.bare_image_urls(content)
    return urls[0] if urls else None


def images(content: str) -> list[dict[str, str]]:
    out: list[dict[str, str]] = []
    for i, (alt, src, title) in enumerate(md.markdown_images(content), 1):
        item = {"src": src, "alt": alt or f"Image {i}"}
        if title:
            item["caption"] = title
        out.append(item)
    for url in md.bare_image_urls(content):
        out.append({"src": url, "alt": f"Image {len(out) + 1}"})
    return out


def strip_images(content: str) -> str:
    text = md.MD_IMAGE_RE.sub("", content)
    text = md.BARE_IMAGE_URL_RE.sub("", text)
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def bullets(content: str) -> list[str]:
    return [b for b in (_clean(x) for x in md.bullet_items(content)) if b]


def numbered(content: str) -> list[str]:
    return [n for n in (_clean(x) for x in md.numbered_items(content)) if n]


def sections(content: str) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for s in md.split_sections(content):
        entry: dict[str, Any] = {"title": s.title, "content": s.body}
        b = [x for x in (_clean(i) for i in s.bullets) if x]
        if b:
            entry["bullets"] = b
        out.append(entry)
    return out


def columns(content: str, count: int) -> list[dict[str, Any]]:
    """Up to `count` columns: one per **Header** section, else lines dealt out evenly."""
    secs = md.split_sections(content)
    titled = [s for s in secs if s.title]
    if titled:
        preamble = "\n".join(s.body for s in secs if not s.title).strip()
        cols: list[dict[str, Any]] = []
        for s in titled[: count - 1] if len(titled) > count else titled:
            cols.append({"title": s.title, "content": s.body, "bullets": [_clean(b) for b in s.bullets if _clean(b)]})
        if len(titled) > count:
            rest = titled[count - 1 :]
            cols.append(
                {
                    "title": rest[0].title,
                    "content": "\n\n".join(s.text if i else s.body for i, s in enumerate(rest)),
                    "bullets": [_clean(b) for s in rest for b in s.bullets if _clean(b)],
                }
            )
        if preamble:
            cols[0]["content"] = f"{preamble}\n\n{cols[0]['content']}".strip()
        for c in cols:
            if not c["bullets"]:
                del c["bullets"]
        return cols

    rows = md.lines(content)
    if not rows:
        return []
    per = -(-len(rows) // count)
    out = []
    for i in range(0, len(rows), per):
        chunk = rows[i : i + per]
        col: dict[str, Any] = {"content": "\n".join(chunk)}
        b = bullets("\n".join(chunk))
        if b:
            col["bullets"] = b
        out.append(col)
    return out


def swot(content: str) -> dict[str, list[str]]:
    """SWOT buckets: by section header first, then by `Strength: ...` keyword lines."""
    found: dict[str, list[str]] = {}
    for s in md.split_sections(content):
        label = s.title.lower()
        for bucket, stem in SWOT_BUCKETS:
            if stem in label:
                items = [_clean(b) for b in s.bullets] or [_clean(ln) for ln in s.lines]
                found.setdefault(bucket, []).extend(x for x in items if x)
    if found:
        return found

    for ln in md.lines(content):
        m = _KEY_VALUE_RE.match(ln)
        if not m:
            continue
        key = m.group(1).lower()
        for bucket, stem in SWOT_BUCKETS:
            if stem in key:
                found.setdefault(bucket, []).extend(v.strip() for v in m.group(2).split(";") if v.strip())
    return found


def timeline_events(content: str) -> list[dict[str, str]]:
    events: list[dict[str, str]] = []
    for ln in md.lines(content):
        m = _EVENT_RE.match(ln)
        if not m:
            continue
        date, rest = m.group(1).strip(), m.group(2).strip().strip("*").strip()
        parts = _TITLE_DESC_SPLIT_RE.split(rest, maxsplit=1)
        title = parts[0].strip()
        description = parts[1].strip() if len(parts) > 1 else ""
        if title:
            events.append({"date": date, "title": title, "description": description})
    return events


def _table_cells(line: str) -> list[str]:
    m = _TABLE_ROW_RE.match(line)
    inner = m.group(1) if m else line.strip().strip("|")
    return [c.strip().strip("*").strip() for c in inner.split("|")]


def comparison(title: str, content: str) -> tuple[list[str], list[list[str]]] | None:
    """(headers, rows) from a markdown table, or from `x: a vs b` lines."""
    table = [ln for ln in md.lines(content) if _TABLE_ROW_RE.match(ln) and not _TABLE_RULE_RE.match(ln)]
    if len(table) >= 2:
        headers = _table_cells(table[0])
        width = len(headers)
        rows = []
        for ln in table[1:]:
            cells = _table_cells(ln)
            rows.append((cells + [""] * width)[:width])
        if width >= 2:
            return headers, rows

    rows = []
    for ln in md.lines(content):
        m = _VS_LINE_RE.match(ln)
        if m:
            rows.append([m.group(1).strip(), m.group(2).strip(), m.group(3).strip()])
    if not rows:
        return None
    tm = _VS_TITLE_RE.match(title.strip())
    if tm:
        headers = ["Feature", tm.group(1).strip(), tm.group(2).strip()]
    else:
        headers = ["Feature", "Option A", "Option B"]
    return headers, rows


def key_values(content: str) -> dict[str, str]:
    out: dict[str, str] = {}
    for ln in md.lines(content):
        m = _KEY_VALUE_RE.match(ln)
        if m:
            out.setdefault(m.group(1).strip().lower(), m.group(2).strip())
    return out


def persona(content: str) -> dict[str, Any]:
    kv = key_values(content)
    found: dict[str, Any] = {}
    if "name" in kv:
        found["name"] = kv["name"]
    role = next((kv[k] for k in _ROLE_KEYS if k in kv), None)
    if role:
        found["role"] = role
    demo = {k: kv[k] for k in _DEMOGRAPHIC_KEYS if k in kv}
    if demo:
        found["demographics"] = demo
    psycho = {k: kv[k] for k in _PSYCHOGRAPHIC_KEYS if k in kv}
    if psycho:
        found["psychographics"] = psycho

    for s in md.split_sections(content):
        label = s.title.lower()
        items = [x for x in (_clean(b) for b in s.bullets) if x]
        if not items:
            continue
        if "goal" in label or "objective" in label:
            found.setdefault("goals", []).extend(items)
        elif "pain" in label or "challenge" in label or "frustration" in label:
            found.setdefault("painPoints", []).extend(items)
    return found


def metrics(content: str, limit: int = 8) -> list[dict[str, str]]:
    out: list[dict[str, str]] = []
    for ln in md.lines(content):
        m = _METRIC_RE.match(ln)
        if not m:
            continue
        label, value, change = m.group(1).strip(), m.group(2).strip(), m.group(3)
        if not label or not value:
            continue
        item = {"label": label, "value": value}
        if change:
            item["change"] = change if change[0] in "+-" else f"+{change}"
            item["trend"] = "down" if change.startswith("-") else "up"
        out.append(item)
        if len(out) >= limit:
            break
    return out


def team_members(content: str) -> list[dict[str, str]]:
    members: list[dict[str, str]] = []
    for ln in md.lines(content):
        m = _MEMBER_PAREN_RE.match(ln) or _MEMBER_SEP_RE.match(ln)
        if not m:
            continue
        name, role, bio = m.group(1).strip(), (m.group(2) or "").strip(), (m.group(3) or "").strip()
        member = {"name": name, "role": role, "image": f"/placeholder-{len(members) + 1}.jpg"}
        if bio:
            member["bio"] = bio
        members.append(member)
    return members


def quote(content: str) -> tuple[str, str] | None:
    """(quote, author); author may be empty."""
    m = _QUOTED_RE.search(content)
    if m:
        text = m.group(1).strip()
        tail = content[m.end() :]
    else:
        block = [q.strip() for q in _BLOCKQUOTE_RE.findall(content) if q.strip()]
        text = " ".join(block)
        tail = _BLOCKQUOTE_RE.sub("", content).strip()
    if not text:
        return None
    # attribution must directly follow the quote
    a = _ATTRIBUTION_RE.match(tail)
    return text, (a.group(1).strip() if a else "")


def call_to_action(content: str) -> str | None:
    for ln in md.lines(content):
        m = _CTA_RE.match(ln)
        if m and m.group(1).strip():
            return m.group(1).strip()
    for ln in reversed(md.lines(content)):
        if _CTA_VERB_RE.match(ln) or ln.rstrip().endswith("!"):
            return _clean(ln)
    return None
