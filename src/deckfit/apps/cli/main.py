from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from deckfit.core.analyze.structure import analyze
from deckfit.core.ingest.candidates import load_candidates
from deckfit.core.pipeline.fit import fit_deck, normalize_candidates
from deckfit.core.pipeline.report import write_report
from deckfit.core.recommend.chain import recommend
from deckfit.core.recommend.detectors import base_title
from deckfit.core.recommend.model import Recommendation, RecommendOptions
from deckfit.core.split.budget import DEFAULT_BUDGET, load_budget
from deckfit.core.split.splitter import needs_split
from deckfit.core.text.sanitize import SENTINEL, sanitize
from deckfit.core.validate.contract import run_contract_test
from deckfit.core.validate.schema_validate import SCHEMA_DIR, validate_named

_SCHEMAS = ("deck", "template_data", "budget")
_MAX_SHOWN = 30


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")


def _print_errors(errors: list[str]) -> None:
    for m in errors[:_MAX_SHOWN]:
        print(f"  - {m}")
    if len(errors) > _MAX_SHOWN:
        print(f"  ... ({len(errors)} errors)")


def _options(args: argparse.Namespace) -> RecommendOptions:
    return RecommendOptions(business_templates=args.business_templates, low_confidence=args.low_confidence)


def cmd_paths(args: argparse.Namespace) -> int:
    print(f"schemas: {SCHEMA_DIR}")
    any_ng = False
    for name in _SCHEMAS:
        p = SCHEMA_DIR / f"{name}.schema.json"
        if p.exists():
            print(f"[OK] {name}: {p}")
        else:
            any_ng = True
            print(f"[NG] {name}: missing ({p})")
    return 2 if any_ng else 0


def cmd_ingest(args: argparse.Namespace) -> int:
    in_path = Path(args.input).resolve()
    out_path = Path(args.out).resolve()

    slides = load_candidates(in_path)
    _write_json(out_path, {"slides": slides})
    print(f"[OK] ingested {len(slides)} candidate(s): {out_path}")
    return 0


def cmd_recommend(args: argparse.Namespace) -> int:
    """One line per candidate: id, template, confidence, detector, reason (before splitting)."""
    slides = normalize_candidates(load_candidates(Path(args.input).resolve()))
    options = _options(args)
    budget = load_budget(args.budget) if args.budget else DEFAULT_BUDGET

    last_by_base: dict[str, Recommendation] = {}
    for idx, s in enumerate(slides):
        title = sanitize(s.title)
        title = "" if title == SENTINEL else title
        content = sanitize(s.content)
        rec = recommend(
            analyze(content),
            title,
            content,
            is_first=idx == 0,
            predecessor=last_by_base.get(base_title(title).lower()),
            options=options,
        )
        last_by_base[base_title(title).lower()] = rec
        mark = " [split]" if needs_split(s.with_changes(content=content), budget) else ""
        print(f"{s.id}\t{rec.template.value}\t{rec.confidence:.2f}\t{rec.detector}\t{rec.reason}{mark}")
    return 0


def cmd_fit(args: argparse.Namespace) -> int:
    in_path = Path(args.input).resolve()
    out_path = Path(args.out).resolve()
    budget = load_budget(args.budget) if args.budget else DEFAULT_BUDGET

    result = fit_deck(
        load_candidates(in_path),
        budget=budget,
        options=_options(args),
        demote=not args.no_demote,
    )
    deck = result.to_deck()

    _write_json(out_path, deck)
    print(f"[OK] fitted {len(result.slides)} slide(s): {out_path}")

    if args.report:
        report_path = Path(args.report).resolve()
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report = write_report(result, report_path, budget=budget)
        n_flags = len(report["suspicious_flags"])
        print(f"[OK] report: {report_path} ({n_flags} flag(s))")

    # empty candidates stay in the deck; the contract still reports them
    errors = run_contract_test(deck)
    if errors:
        print("[NG] contract")
        _print_errors(errors)
        return 2
    print("[OK] contract")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    deck_path = Path(args.deck).resolve()
    if not deck_path.exists():
        print(f"[NG] deck not found: {deck_path}")
        return 2
    deck = _load_json(deck_path)

    any_ng = False
    for label, errs in (("schema", validate_named("deck", deck)), ("contract", run_contract_test(deck))):
        if errs:
            any_ng = True
            print(f"[NG] {label}: {deck_path.as_posix()}")
            _print_errors(errs)
        else:
            print(f"[OK] {label}")
    return 2 if any_ng else 0


def _add_recommend_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--business-templates", action="store_true", help="allow swot-matrix / persona-card / numbered-list")
    p.add_argument("--low-confidence", type=float, default=0.7, help="report decisions below this confidence")
    p.add_argument("--budget", required=False, help="budget JSON (see schemas/budget.schema.json)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="deckfit")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_paths = sub.add_parser("paths", help="show bundled schema paths")
    p_paths.set_defaults(func=cmd_paths)

    p_ing = sub.add_parser("ingest", help="read slide candidates [json|md|txt|pptx] into candidates JSON")
    p_ing.add_argument("input", help="path to input")
    p_ing.add_argument("--out", required=True, help="output candidates .json path")
    p_ing.set_defaults(func=cmd_ingest)

    p_rec = sub.add_parser("recommend", help="print the template recommendation for each candidate")
    p_rec.add_argument("input", help="path to input")
    _add_recommend_flags(p_rec)
    p_rec.set_defaults(func=cmd_recommend)

    p_fit = sub.add_parser("fit", help="classify, split and extract templateData into a fitted deck")
    p_fit.add_argument("input", help="path to input")
    p_fit.add_argument("--out", required=True, help="output deck .json path")
    p_fit.add_argument("--report", required=False, help="write report.json here")
    p_fit.add_argument("--no-demote", action="store_true", help="keep the recommended template even with no data found")
    _add_recommend_flags(p_fit)
    p_fit.set_defaults(func=cmd_fit)

    p_val = sub.add_parser("validate", help="validate a fitted deck against schema and contract")
    p_val.add_argument("deck", help="path to deck .json")
    p_val.set_defaults(func=cmd_validate)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (ValueError, OSError) as e:
        # IngestError, BudgetConfigError, TemplateDataError, bad JSON, unreadable files
        print(f"[NG] {args.cmd} failed")
        print(f"      detail: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
