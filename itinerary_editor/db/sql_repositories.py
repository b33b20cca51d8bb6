"""SQL implementation of the trip repository."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from itinerary_editor.db.models import TripRecord
from itinerary_editor.db.repositories import TripRecordData


def _to_data(row: TripRecord) -> TripRecordData:
    return TripRecordData(
        trip_id=row.trip_id,
        user_email=row.user_email,
        document=dict(row.document),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlTripRepository:
    """SQL implementation of TripRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_trip(self, trip_id: str) -> TripRecordData | None:
        """Get a saved trip by ID."""
        row = await self._session.get(TripRecord, trip_id)
        if row is None:
            return None
        return _to_data(row)

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
        row = await self._session.get(TripRecord, trip_id)

        if row is None:
            row = TripRecord(
                trip_id=trip_id,
                user_email=user_email,
                document=dict(document),
                created_at=now,
                updated_at=now,
            )
            self._session.add(row)
        else:
            # Reassign so the JSON column is flagged dirty
            row.document = {**row.document, **document} if merge else dict(document)
            row.user_email = user_email
            row.updated_at = now

        data = _to_data(row)
        await self._session.commit()
        return data

    async def list_trips(self, user_email: str) -> list[TripRecordData]:
        """List a user's trips, newest first."""
        result = await self._session.execute(
            select(TripRecord)
            .where(TripRecord.user_email == user_email)
            .order_by(TripRecord.created_at.desc())
        )
        return [_to_data(row) for row in result.scalars().all()]

    async def delete_trip(self, trip_id: str) -> bool:
        """Delete a trip."""
        row = await self._session.get(TripRecord, trip_id)
        if row is None:
            return False

        await self._session.delete(row)
        await self._session.commit()
        return True
