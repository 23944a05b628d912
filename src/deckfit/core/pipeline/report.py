"""
report.py — Report generator for a fitted deck.

Generates report.json with:
  - metrics: slide counts, template / family distribution, split groups,
             demoted and low-confidence decisions, average confidence.
  - decisions: one entry per output slide (template, confidence, reason, detector).
  - suspicious_flags: demoted or low-confidence slides, unusable content,
                      placeholder-looking data, over-long titles, contract violations.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from deckfit.core.pipeline.fit import FitResult
from deckfit.core.split.budget import DEFAULT_BUDGET, SplitBudget
from deckfit.core.templates import family
from deckfit.core.validate.contract import SCHEMA_VERSION, run_contract_test

_PLACEHOLDER_MARKERS = ("/placeholder", "Key point 1", "First item")


def _collect_flags(result: FitResult, budget: SplitBudget) -> list[dict[str, Any]]:
    flags: list[dict[str, Any]] = []
    by_id = {s.id: s for s in result.slides}

    for d in result.decisions:
        if d.unusable:
            flags.append({"slide_id": d.slide_id, "reason": "content unusable (empty or corrupted); default layout"})
        if d.demoted:
            flags.append({"slide_id": d.slide_id, "reason": "no structured data found; demoted to content"})
        if d.low_confidence:
            flags.append({"slide_id": d.slide_id, "reason": f"low confidence {d.confidence:.2f} for {d.template.value}"})

        slide = by_id.get(d.slide_id)
        if slide is None:
            continue
        if len(slide.title) > budget.max_title_length:
            flags.append({"slide_id": d.slide_id, "reason": f"title longer than {budget.max_title_length} chars"})
        blob = json.dumps(slide.template_data or {}, ensure_ascii=False)
        if any(m in blob for m in _PLACEHOLDER_MARKERS):
            flags.append({"slide_id": d.slide_id, "reason": "templateData contains placeholder values"})

    for err in run_contract_test(result.to_deck()):
        flags.append({"slide_id": err.split(":", 1)[0], "reason": f"contract: {err}"})
    return flags


def build_report(result: FitResult, *, budget: SplitBudget = DEFAULT_BUDGET) -> dict[str, Any]:
    """Build a report dict from a FitResult."""
    by_template: dict[str, int] = {}
    by_family: dict[str, int] = {}
    groups: set[str] = set()

    for d in result.decisions:
        by_template[d.template.value] = by_template.get(d.template.value, 0) + 1
        fam = family(d.template).value
        by_family[fam] = by_family.get(fam, 0) + 1
        if d.split_group:
            groups.add(d.split_group)

    total = len(result.decisions)
    avg_conf = round(sum(d.confidence for d in result.decisions) / total, 3) if total else 0.0

    return {
        "tool": "deckfit",
        "schema_version": SCHEMA_VERSION,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "budget": budget.to_dict(),
        "metrics": {
            "total_slides": len(result.slides),
            "slides_by_template": dict(sorted(by_template.items())),
            "slides_by_family": dict(sorted(by_family.items())),
            "split_groups": len(groups),
            "split_fragments": sum(1 for d in result.decisions if d.split_group),
            "demoted": sum(1 for d in result.decisions if d.demoted),
            "low_confidence": sum(1 for d in result.decisions if d.low_confidence),
            "unusable": sum(1 for d in result.decisions if d.unusable),
            "avg_confidence": avg_conf,
        },
        "decisions": [d.to_dict() for d in result.decisions],
        "suspicious_flags": _collect_flags(result, budget),
    }


def write_report(result: FitResult, out_path: Path, *, budget: SplitBudget = DEFAULT_BUDGET) -> dict[str, Any]:
    """Build report, write to out_path as JSON, and return the report dict."""
    report = build_report(result, budget=budget)
    out_path.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")
    return report
