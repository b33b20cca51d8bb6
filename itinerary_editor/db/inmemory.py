"""In-memory implementation of the trip repository."""

from datetime import UTC, datetime
from typing import Any

from itinerary_editor.db.repositories import TripRecordData


class InMemoryTripRepository:
    """In-memory implementation of TripRepository."""

    def __init__(self) -> None:
        self._trips: dict[str, TripRecordData] = {}

    async def get_trip(self, trip_id: str) -> TripRecordData | None:
        """Get a saved trip by ID."""
        return self._trips.get(trip_id)

    async def upsert_trip(
        self,
        trip_id: str,
        user_email: str,
        document: dict[str, Any],
        *,
        merge: bool,
    ) -> TripRecordData:
        """Write a trip document."""
        now = datetime.now(UTC)
        existing = self._trips.get(trip_id)

        if existing is not None and merge:
            record = TripRecordData(
                trip_id=trip_id,
                user_email=user_email,
                document={**existing.document, **document},
                created_at=existing.created_at,
                updated_at=now,
            )
        else:
            record = TripRecordData(
                trip_id=trip_id,
                user_email=user_email,
                document=dict(document),
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )

        self._trips[trip_id] = record
        return record

    async def list_trips(self, user_email: str) -> list[TripRecordData]:
        """List a user's trips, newest first."""
        trips = [t for t in self._trips.values() if t.user_email == user_email]
        return sorted(trips, key=lambda t: t.created_at, reverse=True)

    async def delete_trip(self, trip_id: str) -> bool:
        """Delete a trip."""
        return self._trips.pop(trip_id, None) is not None
