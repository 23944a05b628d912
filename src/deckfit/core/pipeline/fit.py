"""
fit.py — Deck fitting pipeline.

  candidates -> normalize/sort -> per slide:
      sanitize -> preserve -> analyze -> recommend -> split
      -> (re-recommend fragments of a split group) -> extract (-> demote)
  -> spread fragment orders -> FitResult(slides, decisions)

Continuations are classified after their predecessor within the same pass,
so a "(continued)" slide can inherit the template chosen for its base.

Import:
    from deckfit.core.pipeline import fit_deck
    result = fit_deck(candidates)
    deck = result.to_deck()
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Optional

from deckfit.core.analyze.structure import analyze
from deckfit.core.extract.template_data import extract, extract_with_status, reuse_upstream
from deckfit.core.pipeline.preserve import ContentStore
from deckfit.core.recommend.chain import recommend
from deckfit.core.recommend.detectors import base_title
from deckfit.core.recommend.model import Recommendation, RecommendOptions
from deckfit.core.slide import Slide
from deckfit.core.split.budget import DEFAULT_BUDGET, SplitBudget
from deckfit.core.split.splitter import split
from deckfit.core.templates import SchemaKind, Template, schema_kind
from deckfit.core.text.sanitize import SENTINEL, sanitize
from deckfit.core.validate.contract import SCHEMA_VERSION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    slide_id: str
    template: Template
    confidence: float
    reason: str
    detector: str = ""
    split_group: Optional[str] = None
    demoted: bool = False
    low_confidence: bool = False
    unusable: bool = False
    # whole-slide recommendation of a split group, before fragments were re-recommended
    pre_split_template: Optional[Template] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "slide_id": self.slide_id,
            "template": self.template.value,
            "confidence": round(self.confidence, 3),
            "reason": self.reason,
            "detector": self.detector,
            "split_group": self.split_group,
            "demoted": self.demoted,
            "low_confidence": self.low_confidence,
            "unusable": self.unusable,
            "pre_split_template": self.pre_split_template.value if self.pre_split_template else None,
        }


@dataclass
class FitResult:
    slides: list[Slide]
    decisions: list[Decision] = field(default_factory=list)

    def to_deck(self) -> dict[str, Any]:
        return {"schema_version": SCHEMA_VERSION, "slides": [s.to_dict() for s in self.slides]}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_candidates(candidates: Iterable[Slide | dict[str, Any]]) -> list[Slide]:
    """Slides from loosely-shaped candidates: stable-sorted by order, unique ids, strictly increasing orders."""
    slides: list[Slide] = []
    for i, c in enumerate(candidates):
        if isinstance(c, Slide):
            slides.append(c)
        else:
            slides.append(Slide.from_dict(c, default_order=float(i + 1), default_id=f"slide-{i + 1}"))
    slides.sort(key=lambda s: s.order)

    out: list[Slide] = []
    seen: set[str] = set()
    prev: float | None = None
    for s in slides:
        sid, n = s.id, 1
        while sid in seen:
            n += 1
            sid = f"{s.id}-{n}"
        if sid != s.id:
            logger.warning("duplicate slide id %r renamed to %r", s.id, sid)
        seen.add(sid)
        order = s.order if prev is None or s.order > prev else prev + 1
        prev = order
        out.append(s.with_changes(id=sid, order=order))
    return out


def _sanitize_slide(slide: Slide) -> tuple[Slide, bool]:
    title = sanitize(slide.title)
    if title == SENTINEL:
        title = ""
    content = sanitize(slide.content)
    unusable = content == SENTINEL or not content.strip()
    if content == SENTINEL:
        # raw text stays for the renderer's own fallback parsing
        content = slide.content
    return slide.with_changes(title=title, content=content), unusable


def _upstream_choice(slide: Slide) -> Recommendation | None:
    """A candidate that already carries a template plus valid templateData keeps it."""
    if slide.template is None or not slide.template_data:
        return None
    if reuse_upstream(slide.template, slide) is None:
        return None
    return Recommendation(slide.template, 1.0, "Template and templateData supplied upstream", "upstream")


def _spread_orders(groups: list[list[Slide]], budget: SplitBudget) -> list[Slide]:
    """Flatten fragment groups; squeeze a group's orders into the gap before the next original."""
    out: list[Slide] = []
    for gi, group in enumerate(groups):
        nxt = groups[gi + 1][0].order if gi + 1 < len(groups) else None
        base = group[0].order
        if len(group) > 1 and nxt is not None and base + (len(group) - 1) * budget.order_step >= nxt:
            step = (nxt - base) / len(group)
            logger.debug("order gap after %s too small; spreading %d fragments by %g", group[0].id, len(group), step)
            group = [s.with_changes(order=base + i * step) for i, s in enumerate(group)]
        out.extend(group)
    return out


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def fit_deck(
    candidates: Iterable[Slide | dict[str, Any]],
    *,
    budget: SplitBudget = DEFAULT_BUDGET,
    options: Optional[RecommendOptions] = None,
    store: Optional[ContentStore] = None,
    demote: bool = True,
) -> FitResult:
    """Fit a list of slide candidates into renderable slides.

    Args:
        candidates: slide dicts (field aliases accepted) or Slide objects.
        budget:     per-slide size budget.
        options:    recommender options.
        store:      caller-owned ContentStore; originals are preserved into it.
        demote:     switch slides whose extraction found nothing to `content`.
    """
    options = options or RecommendOptions()
    store = store if store is not None else ContentStore()

    slides = normalize_candidates(candidates)
    groups: list[list[Slide]] = []
    decisions: list[Decision] = []
    last_by_base: dict[str, Recommendation] = {}

    for idx, raw in enumerate(slides):
        store.preserve(raw)
        slide, unusable = _sanitize_slide(raw)
        is_first = idx == 0
        pred = last_by_base.get(base_title(slide.title).lower())

        # raw text of an unusable slide is carried through untouched
        text = "" if unusable else slide.content
        fragments = [slide] if unusable else split(slide, budget)
        upstream = _upstream_choice(slide) if len(fragments) == 1 else None
        whole = upstream or recommend(analyze(text), slide.title, text, is_first=is_first, predecessor=pred, options=options)
        grouped = len(fragments) > 1
        if grouped:
            logger.debug("slide %s (%s) split into %d; re-recommending fragments", slide.id, whole.template.value, len(fragments))

        group: list[Slide] = []
        prev_rec: Recommendation | None = pred
        for fi, frag in enumerate(fragments):
            if not grouped:
                rec = whole
            else:
                rec = recommend(
                    analyze(frag.content),
                    frag.title,
                    frag.content,
                    is_first=is_first and fi == 0,
                    predecessor=prev_rec,
                    options=options,
                )

            template, demoted = rec.template, False
            ex = extract_with_status(template, frag)
            if ex.used_defaults and demote and schema_kind(template) is not SchemaKind.CONTENT:
                logger.warning("slide %s: no %s data found; demoted to content", frag.id, template.value)
                template, demoted = Template.CONTENT, True
                ex = extract_with_status(template, frag)

            low = rec.confidence < options.low_confidence
            if low:
                logger.warning("slide %s: low-confidence %s (%.2f): %s", frag.id, rec.template.value, rec.confidence, rec.reason)

            out = frag.with_changes(template=template, template_data=ex.data)
            store.preserve(out)
            group.append(out)
            decisions.append(
                Decision(
                    slide_id=out.id,
                    template=template,
                    confidence=rec.confidence,
                    reason=rec.reason,
                    detector=rec.detector,
                    split_group=slide.id if grouped else None,
                    demoted=demoted,
                    low_confidence=low,
                    unusable=unusable,
                    pre_split_template=whole.template if grouped else None,
                )
            )
            # continuations follow what was actually rendered
            prev_rec = replace(rec, template=template) if demoted else rec
            last_by_base[base_title(frag.title).lower()] = prev_rec
        groups.append(group)

    fitted = _spread_orders(groups, budget)
    logger.info(
        "fitted %d candidate(s) into %d slide(s): %d split group(s), %d demoted, %d low-confidence",
        len(slides),
        len(fitted),
        sum(1 for g in groups if len(g) > 1),
        sum(1 for d in decisions if d.demoted),
        sum(1 for d in decisions if d.low_confidence),
    )
    return FitResult(slides=fitted, decisions=decisions)


def retemplate(slide: Slide, template: Template | str, store: ContentStore) -> Slide:
    """Switch `slide` to another template, re-extracting from its preserved original text."""
    template = Template.parse(template)
    store.preserve(slide)
    original = store.restore(slide.id)
    base = slide
    if original is not None:
        base = slide.with_changes(title=original.title, content=original.content)
    base = base.with_changes(template_data=None)
    return base.with_changes(template=template, template_data=extract(template, base))
