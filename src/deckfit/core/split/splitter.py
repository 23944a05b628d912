"""
splitter.py — Size fitting: split oversized slides into continuation slides.

Strategy chain (chosen once per text):
  section   > 1 bold-marked sections
  bullet    more bullets than the budget allows
  paragraph several blank-line paragraphs
  character raw length, cut snapped back to a paragraph / sentence / line / word break

Each strategy degrades to the next when it has nothing to work with. All
functions return new lists; split_text recurses only on strictly shorter
pieces, so recursion is bounded by the input length.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Sequence

from deckfit.core.chart.series import chart_series_for_slide
from deckfit.core.slide import Slide
from deckfit.core.split.budget import DEFAULT_BUDGET, SplitBudget
from deckfit.core.text import markdown as md
from deckfit.core.text.sanitize import is_unusable

logger = logging.getLogger(__name__)

CONTINUED_SUFFIX = " (continued)"
_SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?])\s+")
# (separator, offset of the cut relative to the match)
_SNAP_POINTS: tuple[tuple[str, int], ...] = (("\n\n", 0), (". ", 1), ("\n", 0), (" ", 0))


class SplitStrategy(str, Enum):
    SECTION = "section"
    BULLET = "bullet"
    PARAGRAPH = "paragraph"
    CHARACTER = "character"


@dataclass(frozen=True)
class TextSize:
    words: int
    chars: int
    bullets: int
    sections: int


def measure(text: str) -> TextSize:
    return TextSize(
        words=md.word_count(text),
        chars=len(text),
        bullets=len(md.bullet_items(text)),
        sections=len(md.bold_spans(text)),
    )


def exceeds(text: str, budget: SplitBudget) -> bool:
    size = measure(text)
    return (
        size.words > budget.max_words
        or size.chars > budget.max_chars
        or size.bullets > budget.max_bullets
        or size.sections > budget.max_sections
    )


def needs_split(slide: Slide, budget: SplitBudget = DEFAULT_BUDGET) -> bool:
    """True when the slide is over budget. Slides carrying a chart series never split."""
    if is_unusable(slide.content):
        return False
    if chart_series_for_slide(slide) is not None:
        return False
    return exceeds(slide.content, budget)


def choose_strategy(content: str, budget: SplitBudget) -> SplitStrategy:
    size = measure(content)
    if size.sections > 1:
        return SplitStrategy.SECTION
    if size.bullets > budget.max_bullets:
        return SplitStrategy.BULLET
    if len(md.paragraphs(content)) > 1:
        return SplitStrategy.PARAGRAPH
    return SplitStrategy.CHARACTER


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _pack(items: Sequence[str], fits: Callable[[list[str]], bool]) -> list[list[str]]:
    """Greedy grouping: grow each group while `fits` holds; a group always takes at least one item."""
    groups: list[list[str]] = []
    current: list[str] = []
    for item in items:
        if current and not fits(current + [item]):
            groups.append(current)
            current = []
        current = current + [item]
    if current:
        groups.append(current)
    return groups


def _word_chunks(text: str, size: int) -> list[str]:
    words = text.split()
    return [" ".join(words[i : i + size]) for i in range(0, len(words), size)]


def _section_units(content: str) -> list[str]:
    """Blank-line parts grouped so that each unit starts at a part carrying **bold**.

    Header lines inside a part start a unit of their own.
    """
    units: list[str] = []
    for part in md.paragraphs(content):
        if "**" not in part and units:
            units[-1] = f"{units[-1]}\n\n{part}"
            continue
        current: list[str] = []
        for ln in part.split("\n"):
            if current and md.header_text(ln) is not None:
                units.append("\n".join(current))
                current = []
            current.append(ln)
        units.append("\n".join(current))
    return units


def _bullet_items(block: str) -> tuple[list[str], list[str]]:
    """(preamble lines, items) where an item is a bullet line plus its continuation lines."""
    preamble: list[str] = []
    items: list[str] = []
    for ln in block.split("\n"):
        if md.is_bullet_line(ln):
            items.append(ln)
        elif items:
            items[-1] = f"{items[-1]}\n{ln}"
        else:
            preamble.append(ln)
    return preamble, [it.rstrip() for it in items]


def _join(parts: Sequence[str], sep: str) -> str:
    return sep.join(p for p in parts if p.strip()).strip()


# ---------------------------------------------------------------------------
# strategies
# ---------------------------------------------------------------------------


def _split_section(unit: str, budget: SplitBudget) -> list[str]:
    """Chunk one oversized section by bullets, repeating its header line on every chunk."""
    preamble, items = _bullet_items(unit)
    header = next((ln for ln in preamble if "**" in ln), preamble[0] if preamble else "")
    chunks = _pack(items, lambda g: len(g) <= budget.max_bullets)
    out: list[str] = []
    for i, chunk in enumerate(chunks):
        head = "\n".join(preamble) if i == 0 else header
        out.append(_join([head, "\n".join(chunk)], "\n"))
    return out


def _pack_sections(units: Sequence[str], budget: SplitBudget) -> list[str]:
    """Group section units into pieces within the section, bullet, word and char limits."""
    parts: list[str] = []
    for unit in units:
        if len(_bullet_items(unit)[1]) > budget.max_bullets:
            parts.extend(_split_section(unit, budget))
        else:
            parts.append(unit)

    def fits(group: list[str]) -> bool:
        text = _join(group, "\n\n")
        return (
            len(group) <= budget.max_sections
            and sum(len(md.bullet_items(u)) for u in group) <= budget.max_bullets
            and md.word_count(text) <= budget.max_words
            and len(text) <= budget.max_chars
        )

    return [_join(g, "\n\n") for g in _pack(parts, fits)]


def split_by_sections(content: str, budget: SplitBudget) -> list[str]:
    units = _section_units(content)
    if len(units) <= 1:
        return split_by_bullets(content, budget)
    return _pack_sections(units, budget)


def split_by_bullets(content: str, budget: SplitBudget) -> list[str]:
    preamble, items = _bullet_items(content)
    if md.bold_spans(content):
        units = _section_units(content)
        if len(units) > 1 or len(items) > budget.max_bullets:
            return _pack_sections(units, budget)

    if len(items) <= budget.max_bullets:
        return split_by_paragraphs(content, budget)
    chunks = ["\n".join(c) for c in _pack(items, lambda g: len(g) <= budget.max_bullets)]
    lead = "\n".join(preamble).strip()
    if lead:
        chunks[0] = f"{lead}\n{chunks[0]}"
    return [c.strip() for c in chunks]


def _split_paragraph(paragraph: str, budget: SplitBudget) -> list[str]:
    """Over-budget paragraph: by sentence, and over-budget sentences by word chunks."""
    sentences = [s for s in _SENTENCE_BREAK_RE.split(paragraph) if s.strip()]
    if len(sentences) <= 1:
        return _word_chunks(paragraph, budget.max_words)
    units: list[str] = []
    for s in sentences:
        if md.word_count(s) > budget.max_words:
            units.extend(_word_chunks(s, budget.max_words))
        else:
            units.append(s.strip())
    groups = _pack(units, lambda g: md.word_count(" ".join(g)) <= budget.max_words)
    return [" ".join(g) for g in groups]


def split_by_paragraphs(content: str, budget: SplitBudget) -> list[str]:
    paras = md.paragraphs(content)
    if len(paras) <= 1:
        return split_by_characters(content, budget)
    units: list[str] = []
    for p in paras:
        if md.word_count(p) > budget.max_words:
            units.extend(_split_paragraph(p, budget))
        else:
            units.append(p)
    groups = _pack(units, lambda g: md.word_count(" ".join(g)) <= budget.max_words)
    return [_join(g, "\n\n") for g in groups]


def _snap_cut(text: str, limit: int, window: int) -> int:
    lo = max(1, limit - window)
    for sep, offset in _SNAP_POINTS:
        i = text.rfind(sep, lo, limit)
        if i != -1:
            return i + offset
    return limit


def _merge_trivial(pieces: list[str], min_chars: int) -> list[str]:
    """Fold fragments of <= min_chars into a neighbour so nothing is dropped."""
    out: list[str] = []
    carry = ""
    for p in pieces:
        if carry:
            p = f"{carry} {p}"
            carry = ""
        if len(p) <= min_chars:
            if out:
                out[-1] = f"{out[-1]} {p}"
            else:
                carry = p
            continue
        out.append(p)
    if carry:
        if out:
            out[-1] = f"{out[-1]} {carry}"
        else:
            out.append(carry)
    return out


def split_by_characters(content: str, budget: SplitBudget) -> list[str]:
    text = content.strip()
    if len(text) <= budget.max_chars:
        if md.word_count(text) > budget.max_words:
            return _word_chunks(text, budget.max_words)
        return [content]

    pieces: list[str] = []
    rest = text
    while len(rest) > budget.max_chars:
        cut = _snap_cut(rest, budget.max_chars, budget.snap_window)
        head = rest[:cut].strip()
        if head:
            pieces.append(head)
        rest = rest[cut:].strip()
    if rest:
        pieces.append(rest)

    pieces = _merge_trivial(pieces, budget.min_fragment_chars)
    if not any(len(p) > budget.min_fragment_chars for p in pieces):
        return [content]
    return pieces


_STRATEGIES: dict[SplitStrategy, Callable[[str, SplitBudget], list[str]]] = {
    SplitStrategy.SECTION: split_by_sections,
    SplitStrategy.BULLET: split_by_bullets,
    SplitStrategy.PARAGRAPH: split_by_paragraphs,
    SplitStrategy.CHARACTER: split_by_characters,
}


# ---------------------------------------------------------------------------
# public API
# ---------------------------------------------------------------------------


def split_text(content: str, budget: SplitBudget = DEFAULT_BUDGET) -> list[str]:
    """Partition `content` into pieces that each fit the budget where possible.

    Never returns an empty list. A piece that is still over budget is split
    again only when it is strictly shorter than its parent text.
    """
    if not exceeds(content, budget):
        return [content]
    strategy = choose_strategy(content, budget)
    pieces = [p for p in _STRATEGIES[strategy](content, budget) if p.strip()]
    if not pieces:
        return [content]

    out: list[str] = []
    for p in pieces:
        if exceeds(p, budget) and len(p) < len(content):
            out.extend(split_text(p, budget))
        else:
            out.append(p)
    return out


def _fragment(slide: Slide, text: str, index: int, budget: SplitBudget) -> Slide:
    title = slide.title
    if index > 0 and CONTINUED_SUFFIX.strip() not in title.lower():
        title = f"{title}{CONTINUED_SUFFIX}".strip()
    return replace(
        slide,
        id=f"{slide.id}-split-{index}",
        title=title,
        content=text,
        order=slide.order + index * budget.order_step,
        template_data=None,
    )


def split(slide: Slide, budget: SplitBudget = DEFAULT_BUDGET) -> list[Slide]:
    """Split an oversized slide into a group of slides; [slide] when it already fits."""
    if not needs_split(slide, budget):
        return [slide]
    pieces = split_text(slide.content, budget)
    if len(pieces) <= 1:
        logger.debug("slide %s over budget but not splittable; kept whole", slide.id)
        return [slide]
    logger.debug("slide %s split into %d (%s)", slide.id, len(pieces), choose_strategy(slide.content, budget).value)
    return [_fragment(slide, text, i, budget) for i, text in enumerate(pieces)]
