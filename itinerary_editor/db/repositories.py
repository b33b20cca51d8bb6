"""Repository protocol interfaces for saved trips."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol


@dataclass
class TripRecordData:
    """Saved trip data record."""

    trip_id: str
    user_email: str
    document: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class TripRepository(Protocol):
    """Repository for saved trip documents."""

    async def get_trip(self, trip_id: str) -> TripRecordData | None:
        """Get a saved trip by ID.

        Args:
            trip_id: Trip ID

        Returns:
            Trip record or None if not found
        """
        ...

    async def upsert_trip(
        self,
        trip_id: str,
        user_email: str,
        document: dict[str, Any],
        *,
        merge: bool,
    ) -> TripRecordData:
        """Write a trip document.

        Args:
            trip_id: Trip ID
            user_email: Owner email
            document: Full trip document
            merge: Merge top-level keys into the existing document instead
                of replacing it

        Returns:
            The stored record
        """
        ...

    async def list_trips(self, user_email: str) -> list[TripRecordData]:
        """List a user's trips, newest first."""
        ...

    async def delete_trip(self, trip_id: str) -> bool:
        """Delete a trip.

        Returns:
            True if a trip was deleted
        """
        ...
