"""
preserve.py — Caller-owned store of a slide's original text.

Re-templating a slide must start from what the author wrote, not from the
output of an earlier template. The store keeps the first version seen for
each slide id; editing the slide is the caller's cue to clear() it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator

from deckfit.core.slide import Slide
from deckfit.core.templates import Template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreservedContent:
    title: str
    content: str
    template: Template | None = None
    template_data: dict[str, Any] | None = None


class ContentStore:
    def __init__(self) -> None:
        self._items: dict[str, PreservedContent] = {}

    def preserve(self, slide: Slide) -> bool:
        """Store the slide's text unless its id is already held. True when stored."""
        if slide.id in self._items:
            return False
        self._items[slide.id] = self._snapshot(slide)
        return True

    def force_preserve(self, slide: Slide) -> None:
        self._items[slide.id] = self._snapshot(slide)

    def get(self, slide_id: str) -> PreservedContent | None:
        return self._items.get(slide_id)

    def restore(self, slide_id: str) -> PreservedContent | None:
        item = self._items.get(slide_id)
        if item is None:
            logger.debug("nothing preserved for %s", slide_id)
        return item

    def clear(self, slide_id: str) -> None:
        self._items.pop(slide_id, None)

    def clear_all(self) -> None:
        self._items.clear()

    def __contains__(self, slide_id: object) -> bool:
        return slide_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    @staticmethod
    def _snapshot(slide: Slide) -> PreservedContent:
        data = dict(slide.template_data) if slide.template_data else None
        return PreservedContent(
            title=slide.title,
            content=slide.content,
            template=slide.template,
            template_data=data,
        )
