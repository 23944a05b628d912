"""
contract.py — Contract validation for fitted deck output.

Contract (deck v0.1):
  Top-level:
    schema_version == "0.1"
    slides: non-empty array

  Per slide (ALL fields required):
    id            str  non-empty, globally unique
    title         str
    content       str  non-empty after strip (title-slide exempt)
    type          str
    order         number, strictly increasing in list order
    template      str  in the closed template set
    templateData  object, non-empty, valid for the template's schema kind

  Continuations:
    a "(continued)" slide directly follows a slide with the same base title

Run as script:
    python -m deckfit.core.validate.contract runs/deck.json

Import:
    from deckfit.core.validate.contract import run_contract_test
    errors = run_contract_test(deck_dict)  # [] == PASS
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from deckfit.core.recommend.detectors import CONTINUATION_RE, base_title
from deckfit.core.templates import Template
from deckfit.core.validate.schema_validate import validate_template_data

# ---------------------------------------------------------------------------
# Contract constants
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1"

REQUIRED_SLIDE_FIELDS: dict[str, type | tuple[type, ...]] = {
    "id": str,
    "title": str,
    "content": str,
    "type": str,
    "order": (int, float),
    "template": str,
    "templateData": dict,
}

VALID_TEMPLATES: frozenset[str] = frozenset(t.value for t in Template)

# ---------------------------------------------------------------------------
# Internal checkers
# ---------------------------------------------------------------------------


def _check_template_data(sid: str, template: Any, data: Any) -> list[str]:
    if not isinstance(template, str) or template not in VALID_TEMPLATES:
        return []
    if not isinstance(data, dict):
        return []
    if not data:
        return [f"{sid}: templateData is empty"]
    return [f"{sid}: templateData {e}" for e in validate_template_data(template, data)]


def _check_continuation(sid: str, title: str, prev_title: str | None) -> list[str]:
    if not CONTINUATION_RE.search(title):
        return []
    if prev_title is None:
        return [f"{sid}: continuation slide {title!r} has no predecessor"]
    if base_title(prev_title) != base_title(title):
        return [f"{sid}: continuation slide {title!r} does not follow {base_title(title)!r}"]
    return []


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def run_contract_test(deck: dict[str, Any]) -> list[str]:
    """Validate a fitted deck dict against the deck v0.1 contract.

    Returns:
        List of error strings. Empty list == PASS.
    """
    errors: list[str] = []

    # --- Top-level ---
    if not isinstance(deck, dict):
        return ["root: must be a JSON object"]

    sv = deck.get("schema_version")
    if sv != SCHEMA_VERSION:
        errors.append(f"schema_version: expected {SCHEMA_VERSION!r}, got {sv!r}")

    slides = deck.get("slides")
    if not isinstance(slides, list):
        errors.append("slides: must be an array")
        return errors
    if len(slides) == 0:
        errors.append("slides: must not be empty")
        return errors

    # --- Per-slide ---
    seen_ids: set[str] = set()
    prev_order: float | None = None
    prev_title: str | None = None

    for idx, sl in enumerate(slides):
        if not isinstance(sl, dict):
            errors.append(f"slides[{idx}]: must be an object, got {type(sl).__name__}")
            prev_title = None
            continue

        sid = sl.get("id", f"<slide[{idx}]>")

        for field, expected in REQUIRED_SLIDE_FIELDS.items():
            val = sl.get(field)
            if val is None:
                errors.append(f"{sid}: missing required field '{field}'")
            elif isinstance(val, bool) or not isinstance(val, expected):
                names = expected.__name__ if isinstance(expected, type) else "/".join(t.__name__ for t in expected)
                errors.append(f"{sid}: '{field}' must be {names}, got {type(val).__name__} ({val!r})")

        # id uniqueness
        if isinstance(sid, str):
            if not sid.strip():
                errors.append(f"slides[{idx}]: id is empty")
            if sid in seen_ids:
                errors.append(f"{sid}: duplicate id")
            seen_ids.add(sid)

        # template enum + templateData
        tpl = sl.get("template")
        if isinstance(tpl, str) and tpl not in VALID_TEMPLATES:
            errors.append(f"{sid}: template={tpl!r} is not a known template")
        errors.extend(_check_template_data(sid, tpl, sl.get("templateData")))

        # order strictly increasing
        order = sl.get("order")
        if isinstance(order, (int, float)) and not isinstance(order, bool):
            if prev_order is not None and order <= prev_order:
                errors.append(f"{sid}: order={order} is not greater than previous order={prev_order}")
            prev_order = float(order)

        # content non-empty (a title slide may carry its title alone)
        content = sl.get("content", "")
        if isinstance(content, str) and not content.strip() and tpl != Template.TITLE_SLIDE.value:
            errors.append(f"{sid}: content is empty or whitespace-only")

        title = sl.get("title")
        if isinstance(title, str):
            errors.extend(_check_continuation(sid, title, prev_title))
            prev_title = title
        else:
            prev_title = None

    return errors


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="deck v0.1 contract test")
    parser.add_argument("deck", help="Path to a fitted deck JSON")
    args = parser.parse_args(argv)

    deck_path = Path(args.deck)
    deck = json.loads(deck_path.read_text(encoding="utf-8"))
    errors = run_contract_test(deck)
    if errors:
        print(f"[FAIL] {len(errors)} contract violation(s):")
        for e in errors[:30]:
            print(f"  ERROR: {e}")
        if len(errors) > 30:
            print(f"  ... and {len(errors) - 30} more")
        return 1
    print(f"[PASS] all contract checks passed ({len(deck.get('slides', []))} slides)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
