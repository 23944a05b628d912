"""
deckfit.core.extract — templateData extraction.

Public API:

    extract(template, slide) -> dict
    extract_with_status(template, slide) -> Extraction(data, used_defaults)
    extract_all_content_data(slide) -> dict
    reuse_upstream(template, slide) -> dict | None
    TemplateDataError
"""
from deckfit.core.extract.template_data import (
    BUILDERS,
    Extraction,
    TemplateDataError,
    extract,
    extract_all_content_data,
    extract_with_status,
    reuse_upstream,
)

__all__ = [
    "BUILDERS",
    "Extraction",
    "TemplateDataError",
    "extract",
    "extract_all_content_data",
    "extract_with_status",
    "reuse_upstream",
]
