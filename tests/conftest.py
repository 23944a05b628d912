"""
Pytest configuration and shared fixtures for deckfit tests.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from deckfit.core.slide import Slide

SWOT_CONTENT = "**Strengths**\n- Strong IP\n- Loyal customers\n\n**Weaknesses**\n- Slow onboarding"
PERCENT_CONTENT = "Product: 40%\nPrice: 25%\nPlace: 20%\nPromotion: 15%"


def bullets_text(n: int, word: str = "Item") -> str:
    return "\n".join(f"- {word} {i} of the plan" for i in range(1, n + 1))


@pytest.fixture
def swot_content() -> str:
    return SWOT_CONTENT


@pytest.fixture
def percent_content() -> str:
    return PERCENT_CONTENT


@pytest.fixture
def make_slide() -> Callable[..., Slide]:
    def _make(content: str = "", title: str = "Slide", sid: str = "s1", order: float = 1.0, **kw: Any) -> Slide:
        return Slide(id=sid, title=title, content=content, order=order, **kw)

    return _make


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    def _write(name: str, obj: Any) -> Path:
        p = tmp_path / name
        p.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")
        return p

    return _write
