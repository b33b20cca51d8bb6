"""Draft store - keyed cache of in-progress trip edits."""

import logging
import time
from typing import Protocol

from itinerary_editor.models.trip import Trip

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "temp_trip_changes"


def new_temp_trip_id(now_ms: int | None = None) -> str:
    """Temporary id for a trip that has never been saved."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"temp_{now_ms}"


def draft_key(namespace: str, trip_id: str) -> str:
    return f"{namespace}_{trip_id}"


def dump_snapshot(snapshot: Trip) -> str:
    return snapshot.model_dump_json(by_alias=True, exclude_none=True)


def load_snapshot(text: str | bytes) -> Trip:
    return Trip.model_validate_json(text)


class DraftStore(Protocol):
    """Pass-through cache of trip snapshots keyed by trip id.

    Saving a snapshot always marks the trip as having unsaved changes. The
    flag is cleared only by ``mark_saved`` (after a successful save) or by
    ``clear`` (discard). Trip invariants are not checked here.
    """

    def save(self, trip_id: str, snapshot: Trip) -> None:
        """Persist a snapshot and flag unsaved changes."""
        ...

    def load(self, trip_id: str) -> Trip | None:
        """Latest snapshot, or None if there is no draft."""
        ...

    def clear(self, trip_id: str) -> None:
        """Drop the draft and its unsaved flag."""
        ...

    def has_unsaved_changes(self, trip_id: str) -> bool:
        """Whether the draft differs from what was last saved."""
        ...

    def mark_saved(self, trip_id: str) -> None:
        """Clear the unsaved flag without dropping the draft."""
        ...


class InMemoryDraftStore:
    """Process-local implementation of DraftStore.

    Snapshots are stored as JSON text, like the browser cache they replace.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._namespace = namespace
        self._drafts: dict[str, str] = {}
        self._unsaved: set[str] = set()

    def save(self, trip_id: str, snapshot: Trip) -> None:
        key = draft_key(self._namespace, trip_id)
        self._drafts[key] = dump_snapshot(snapshot)
        self._unsaved.add(key)
        logger.debug(f"Draft saved: {key}")

    def load(self, trip_id: str) -> Trip | None:
        text = self._drafts.get(draft_key(self._namespace, trip_id))
        return load_snapshot(text) if text is not None else None

    def clear(self, trip_id: str) -> None:
        key = draft_key(self._namespace, trip_id)
        self._drafts.pop(key, None)
        self._unsaved.discard(key)
        logger.debug(f"Draft cleared: {key}")

    def has_unsaved_changes(self, trip_id: str) -> bool:
        return draft_key(self._namespace, trip_id) in self._unsaved

    def mark_saved(self, trip_id: str) -> None:
        self._unsaved.discard(draft_key(self._namespace, trip_id))
