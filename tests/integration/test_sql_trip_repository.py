"""Integration tests for the SQL trip repository (aiosqlite)."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from itinerary_editor.db.sql_repositories import SqlTripRepository
from itinerary_editor.models import Hotel, SaveTripRequest, Trip
from itinerary_editor.saving.service import persist_trip


@pytest.mark.asyncio
async def test_upsert_and_get_trip(sqlite_session: AsyncSession) -> None:
    """Test that a document round-trips through the JSON column."""
    repo = SqlTripRepository(sqlite_session)
    document = {"id": "t1", "tripData": {"Location": "Hue", "Itinerary": {}}}

    stored = await repo.upsert_trip("t1", "an@example.com", document, merge=False)
    fetched = await repo.get_trip("t1")

    assert stored.trip_id == "t1"
    assert fetched is not None
    assert fetched.document == document
    assert fetched.user_email == "an@example.com"
    assert await repo.get_trip("missing") is None


@pytest.mark.asyncio
async def test_merge_keeps_unsent_keys(sqlite_session: AsyncSession) -> None:
    repo = SqlTripRepository(sqlite_session)
    await repo.upsert_trip("t1", "an@example.com", {"a": 1, "createdAt": "x"}, merge=False)

    await repo.upsert_trip("t1", "an@example.com", {"a": 2, "b": 3}, merge=True)
    merged = await repo.get_trip("t1")
    await repo.upsert_trip("t1", "an@example.com", {"c": 4}, merge=False)
    replaced = await repo.get_trip("t1")

    assert merged is not None and merged.document == {"a": 2, "b": 3, "createdAt": "x"}
    assert replaced is not None and replaced.document == {"c": 4}


@pytest.mark.asyncio
async def test_list_and_delete_trips(sqlite_session: AsyncSession) -> None:
    repo = SqlTripRepository(sqlite_session)
    await repo.upsert_trip("t1", "an@example.com", {"n": 1}, merge=False)
    await repo.upsert_trip("t2", "an@example.com", {"n": 2}, merge=False)
    await repo.upsert_trip("t3", "other@example.com", {"n": 3}, merge=False)

    trips = await repo.list_trips("an@example.com")

    assert {t.trip_id for t in trips} == {"t1", "t2"}
    assert await repo.delete_trip("t1") is True
    assert await repo.delete_trip("t1") is False
    assert [t.trip_id for t in await repo.list_trips("an@example.com")] == ["t2"]


@pytest.mark.asyncio
async def test_persist_trip_through_sql_repository(
    sqlite_session: AsyncSession, trip: Trip, lotus: Hotel
) -> None:
    """Test the save service end to end on a real database."""
    repo = SqlTripRepository(sqlite_session)
    request = SaveTripRequest(
        trip_id="temp_1",
        user_email="an@example.com",
        user_selection=trip.user_selection,
        trip_data=trip.trip_data,
        selected_hotels=[lotus],
    )

    response = await persist_trip(repo, request, id_factory=lambda: "1717")
    record = await repo.get_trip("1717")

    assert response.trip_id == "1717"
    assert record is not None
    lunch = record.document["tripData"]["Itinerary"]["2025-06-10"]["Lunch"]["Activity"]
    assert lunch["PlaceName"] == "Bun Cha Huong Lien"
    assert lunch["ScheduleStart"] == "2025-06-10T12:00:00+07:00"


@pytest.mark.postgres
@pytest.mark.asyncio
async def test_trip_document_storage_on_postgres(postgres_session: AsyncSession) -> None:
    """Test JSON document storage against a real PostgreSQL instance."""
    repo = SqlTripRepository(postgres_session)
    document = {"id": "pg-1", "tripData": {"Itinerary": {"2025-06-10": {"Theme": "Arrival"}}}}

    await repo.upsert_trip("pg-1", "pg@example.com", document, merge=False)
    fetched = await repo.get_trip("pg-1")

    assert fetched is not None
    assert fetched.document["tripData"]["Itinerary"]["2025-06-10"]["Theme"] == "Arrival"
