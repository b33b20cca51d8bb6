"""Save reconciler - validates a draft and hands it to the Trip Store."""

import logging
import time
from dataclasses import dataclass

from itinerary_editor.drafts.store import DraftStore
from itinerary_editor.editing.source import is_temporary_id
from itinerary_editor.errors import EmptyDaysError, NoHotelSelectedError, SaveError
from itinerary_editor.models.common import SLOT_ORDER
from itinerary_editor.models.hotel import Hotel
from itinerary_editor.models.save import SaveTripRequest
from itinerary_editor.models.trip import Itinerary, Trip
from itinerary_editor.saving.trip_store import TripStore
from itinerary_editor.utils.logging import StructuredEditLogger
from itinerary_editor.utils.metrics import PrometheusEditMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a successful save."""

    trip_id: str
    message: str
    created: bool


def find_empty_days(itinerary: Itinerary) -> list[str]:
    """Day keys with no activity in any slot, in calendar order."""
    return [key for key in sorted(itinerary) if itinerary[key].activity_count() == 0]


def strip_activity_ids(itinerary: Itinerary) -> Itinerary:
    """Activity ids are draft-local and never persisted."""
    result: Itinerary = {}
    for key, day in itinerary.items():
        stripped = day
        for name in SLOT_ORDER:
            slot = stripped.slot(name)
            if slot is None:
                continue
            members = [a.model_copy(update={"id": None}) for a in slot.members()]
            stripped = stripped.with_slot(name, slot.with_members(members))
        result[key] = stripped
    return result


class SaveReconciler:
    """Runs save-time validation, then the single awaited save call.

    Nothing is sent unless every check passes. On failure the draft and its
    unsaved flag are kept so the user can retry; on success both are cleared.
    """

    def __init__(
        self,
        trip_store: TripStore,
        drafts: DraftStore,
        edit_logger: StructuredEditLogger | None = None,
        metrics: PrometheusEditMetrics | None = None,
    ) -> None:
        self._trip_store = trip_store
        self._drafts = drafts
        self._edit_logger = edit_logger or StructuredEditLogger()
        self._metrics = metrics or PrometheusEditMetrics()

    async def save(
        self,
        trip_id: str,
        trip: Trip,
        selected_hotels: list[Hotel],
        user_email: str,
    ) -> SaveResult:
        """Validate and persist a draft.

        Args:
            trip_id: Draft trip id (temporary for never-saved trips)
            trip: Current draft snapshot
            selected_hotels: Hotels chosen by the user
            user_email: Owner of the trip

        Returns:
            SaveResult with the persisted trip id

        Raises:
            NoHotelSelectedError: Not exactly one hotel selected
            EmptyDaysError: Some days have no activities
            SaveError: The Trip Store rejected or failed the save
        """
        started = time.perf_counter()

        if len(selected_hotels) != 1:
            self._record(trip_id, "invalid", started, reason=NoHotelSelectedError.code)
            raise NoHotelSelectedError("Please select exactly one hotel before saving")

        empty_days = find_empty_days(trip.itinerary)
        if empty_days:
            self._record(trip_id, "invalid", started, reason=EmptyDaysError.code)
            raise EmptyDaysError(empty_days)

        request = SaveTripRequest(
            trip_id=trip_id,
            user_email=user_email,
            user_selection=trip.user_selection,
            trip_data=trip.trip_data.model_copy(
                update={"itinerary": strip_activity_ids(trip.itinerary)}
            ),
            selected_hotels=list(selected_hotels),
        )

        try:
            response = await self._trip_store.save_trip(request)
            if not response.success:
                raise SaveError(response.message or "Failed to save trip")
        except SaveError as e:
            self._record(trip_id, "error", started, reason=e.message)
            raise

        self._drafts.clear(trip_id)
        created = is_temporary_id(trip_id)
        self._record(response.trip_id, "success", started, created=created)

        return SaveResult(trip_id=response.trip_id, message=response.message, created=created)

    def _record(
        self,
        trip_id: str,
        outcome: str,
        started: float,
        created: bool | None = None,
        reason: str | None = None,
    ) -> None:
        latency_ms = (time.perf_counter() - started) * 1000
        self._metrics.record_save(outcome, latency_ms)
        self._edit_logger.log_save(
            trip_id=trip_id,
            outcome=outcome,
            latency_ms=latency_ms,
            created=created,
            error_reason=reason,
        )
