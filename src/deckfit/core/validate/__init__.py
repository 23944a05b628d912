"""
deckfit.core.validate — JSON Schema validation and the deck contract.

Public API:

    validate_instance(schema, instance) -> list[str]
    validate_template_data(template, data) -> list[str]
    load_schema(name) -> dict
    schema_path(name) -> Path
"""
from deckfit.core.validate.schema_validate import (
    load_schema,
    schema_path,
    validate_instance,
    validate_named,
    validate_template_data,
)

__all__ = [
    "load_schema",
    "schema_path",
    "validate_instance",
    "validate_named",
    "validate_template_data",
    # run_contract_test: import directly from deckfit.core.validate.contract so the
    # module can also be run with `python -m`.
]
