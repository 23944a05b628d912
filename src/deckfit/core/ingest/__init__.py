"""
deckfit.core.ingest — Slide candidates from input files.

Public API:

    load_candidates(path) -> list[dict]          # .json / .md / .txt / .pptx
    candidates_from_json(obj) -> list[dict]
    candidates_from_text(text) -> list[dict]
    candidates_from_pptx(path) -> list[dict]     # python-pptx
    IngestError
"""
from deckfit.core.ingest.candidates import IngestError, candidates_from_json, candidates_from_text, load_candidates
from deckfit.core.ingest.pptx_ingest import candidates_from_pptx

__all__ = [
    "IngestError",
    "candidates_from_json",
    "candidates_from_pptx",
    "candidates_from_text",
    "load_candidates",
]
