"""
deckfit — Slide content classification, size fitting and templateData extraction.
"""
__version__ = "0.1.0"
