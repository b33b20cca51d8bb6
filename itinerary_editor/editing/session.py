"""Editing session - the single "current draft" reference for one trip."""

import logging
import time

from itinerary_editor.drafts.store import DraftStore
from itinerary_editor.editing.hotel_sync import hotels_match, sync_hotel
from itinerary_editor.editing.ids import IdGenerator, UuidIdGenerator
from itinerary_editor.editing.reducer import reduce
from itinerary_editor.errors import InvalidMoveError, ItineraryError
from itinerary_editor.models.commands import EditCommand
from itinerary_editor.models.hotel import Hotel
from itinerary_editor.models.trip import Trip
from itinerary_editor.utils.logging import StructuredEditLogger
from itinerary_editor.utils.metrics import PrometheusEditMetrics

logger = logging.getLogger(__name__)


class EditingSession:
    """Read-latest, reduce, replace: every edit goes through the draft store.

    The session never holds a snapshot of its own; each operation reads the
    most recently saved draft so no update is computed from a stale copy.
    Rejected commands raise before anything is replaced.
    """

    def __init__(
        self,
        trip_id: str,
        drafts: DraftStore,
        id_generator: IdGenerator | None = None,
        edit_logger: StructuredEditLogger | None = None,
        metrics: PrometheusEditMetrics | None = None,
    ) -> None:
        self.trip_id = trip_id
        self._drafts = drafts
        self._id_generator = id_generator or UuidIdGenerator()
        self._edit_logger = edit_logger or StructuredEditLogger()
        self._metrics = metrics or PrometheusEditMetrics()
        self._dragging = False

    @property
    def current(self) -> Trip:
        """Latest draft snapshot.

        Raises:
            InvalidMoveError: If there is no draft for this trip
        """
        snapshot = self._drafts.load(self.trip_id)
        if snapshot is None:
            raise InvalidMoveError(f"No draft for trip {self.trip_id}")
        return snapshot

    @property
    def has_unsaved_changes(self) -> bool:
        return self._drafts.has_unsaved_changes(self.trip_id)

    def start(self, trip: Trip) -> Trip:
        """Materialize a working copy; an existing draft wins over the source."""
        existing = self._drafts.load(self.trip_id)
        if existing is not None:
            logger.info(f"Resuming draft for trip {self.trip_id}")
            return existing

        snapshot = trip.model_copy(update={"id": self.trip_id})
        self._drafts.save(self.trip_id, snapshot)
        # A freshly opened trip has nothing unsaved yet
        self._drafts.mark_saved(self.trip_id)
        return snapshot

    def dispatch(self, command: EditCommand) -> Trip:
        """Apply one edit command to the latest draft."""
        started = time.perf_counter()
        try:
            updated = reduce(self.current, command, self._id_generator)
        except ItineraryError as e:
            self._record(command.kind, "rejected", started, e.code)
            raise

        self._drafts.save(self.trip_id, updated)
        self._record(command.kind, "applied", started)
        return updated

    def select_hotel(self, hotel: Hotel) -> Trip:
        """Select a hotel and re-bind check-in/out activities to it."""
        snapshot = self.current
        updated = snapshot.model_copy(update={"selected_hotel": hotel}).with_itinerary(
            sync_hotel(snapshot.itinerary, hotel)
        )
        self._drafts.save(self.trip_id, updated)
        self._record("select_hotel", "applied", time.perf_counter())
        return updated

    def toggle_hotel(self, hotel: Hotel) -> Trip:
        """Selecting the already selected hotel clears the selection."""
        snapshot = self.current
        if snapshot.selected_hotel is not None and hotels_match(snapshot.selected_hotel, hotel):
            return self.clear_hotel()
        return self.select_hotel(hotel)

    def clear_hotel(self) -> Trip:
        updated = self.current.model_copy(update={"selected_hotel": None})
        self._drafts.save(self.trip_id, updated)
        return updated

    def discard(self) -> None:
        """Drop the draft and its unsaved flag."""
        self._drafts.clear(self.trip_id)
        logger.info(f"Draft discarded for trip {self.trip_id}")

    # Drag gesture guard

    def begin_drag(self) -> None:
        self._dragging = True

    def end_drag(self, command: EditCommand | None = None) -> Trip | None:
        """Finish a drag; a drop carries a command, a drop outside carries none."""
        self._dragging = False
        if command is None:
            return None
        return self.dispatch(command)

    def cancel_drag(self) -> None:
        self._dragging = False

    @property
    def is_dragging(self) -> bool:
        return self._dragging

    def should_warn_before_leaving(self) -> bool:
        """Warn about unsaved work, except mid-drag."""
        return self.has_unsaved_changes and not self._dragging

    def _record(self, command: str, outcome: str, started: float, reason: str | None = None) -> None:
        latency_ms = (time.perf_counter() - started) * 1000
        self._metrics.inc_edit(command, outcome)
        self._edit_logger.log_edit(
            trip_id=self.trip_id,
            command=command,
            outcome=outcome,
            latency_ms=latency_ms,
            error_reason=reason,
        )
