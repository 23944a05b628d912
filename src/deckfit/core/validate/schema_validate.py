from __future__ import annotations

import argparse
import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from deckfit.core.templates import Template, schema_kind

SCHEMA_DIR = Path(__file__).resolve().parents[1] / "schemas"


def load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def schema_path(name: str) -> Path:
    """schemas/<name>.schema.json shipped with the package."""
    return SCHEMA_DIR / f"{name}.schema.json"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    return load_json(schema_path(name))


def format_path(path: Any) -> str:
    out = "$"
    for p in path:
        out += f"[{p!r}]" if isinstance(p, str) else f"[{p}]"
    return out


@lru_cache(maxsize=None)
def _validator_for(name: str, ref: str | None) -> Draft202012Validator:
    schema = load_schema(name)
    if ref is not None:
        # NOTE: single-file schemas only; sub-schemas are addressed through local $defs
        schema = {"$defs": schema.get("$defs", {}), "$ref": f"#/$defs/{ref}"}
    return Draft202012Validator(schema)


def validate_instance(schema: dict[str, Any], instance: Any) -> list[str]:
    """
    Validate an in-memory instance against an in-memory schema.
    Returns human-readable error strings, empty if valid.
    Each error is formatted as: "<jsonpath>: <message>"
    """
    v = Draft202012Validator(schema)
    errors = sorted(v.iter_errors(instance), key=lambda e: list(e.path))
    return [f"{format_path(e.path)}: {e.message}" for e in errors]


def validate_named(name: str, instance: Any, ref: str | None = None) -> list[str]:
    """Like validate_instance, against a packaged schema (optionally one of its $defs)."""
    v = _validator_for(name, ref)
    errors = sorted(v.iter_errors(instance), key=lambda e: list(e.path))
    return [f"{format_path(e.path)}: {e.message}" for e in errors]


def validate_template_data(template: Template | str, data: Any) -> list[str]:
    """Check a templateData payload against the $defs entry for the template's schema kind."""
    kind = schema_kind(Template.parse(template))
    return validate_named("template_data", data, ref=kind.value)


def validate_json_against_schema(schema_file: Path, instance_file: Path) -> list[str]:
    if not schema_file.exists():
        return [f"[ERR] schema not found: {schema_file}"]
    if not instance_file.exists():
        return [f"[ERR] instance not found: {instance_file}"]
    return validate_instance(load_json(schema_file), load_json(instance_file))


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="schema_validate")
    ap.add_argument("--schema", required=True, help="path to *.schema.json, or a packaged schema name (deck, budget)")
    ap.add_argument("--instance", required=True, help="path to json to validate")
    args = ap.parse_args(argv)

    schema_file = Path(args.schema)
    if not schema_file.exists() and schema_path(args.schema).exists():
        schema_file = schema_path(args.schema)
    instance_file = Path(args.instance)

    errors = validate_json_against_schema(schema_file, instance_file)
    if not errors:
        print(f"[OK] {instance_file} conforms to {schema_file}")
        return 0
    if errors[0].startswith("[ERR]"):
        print(errors[0])
        return 2
    print(f"[NG] {instance_file} does NOT conform to {schema_file}")
    for i, err in enumerate(errors, 1):
        print(f"  {i}. {err}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
