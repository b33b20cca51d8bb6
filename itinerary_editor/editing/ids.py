"""Activity id generation."""

import itertools
import uuid
from typing import Protocol

from itinerary_editor.models.common import SlotName


class IdGenerator(Protocol):
    """Supplies fresh activity ids scoped to a day and slot."""

    def __call__(self, day_key: str, slot: SlotName) -> str:
        """Return a new id, never returned before."""
        ...


class UuidIdGenerator:
    """Production generator: ``<day>-<slot>-<uuid4 hex>``."""

    def __call__(self, day_key: str, slot: SlotName) -> str:
        return f"{day_key}-{slot.attr}-{uuid.uuid4().hex}"


class SequentialIdGenerator:
    """Deterministic generator for tests: ``<day>-<slot>-<n>``."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def __call__(self, day_key: str, slot: SlotName) -> str:
        return f"{day_key}-{slot.attr}-{next(self._counter)}"
