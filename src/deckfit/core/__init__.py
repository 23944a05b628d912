"""
deckfit.core — Library code: text, analyze, recommend, split, extract, pipeline, ingest, validate.
"""
