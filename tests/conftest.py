"""Shared pytest fixtures for all test suites."""

import os
from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from itinerary_editor.db.models import Base
from itinerary_editor.editing.ids import SequentialIdGenerator
from itinerary_editor.models import Hotel, Trip

LOTUS = {
    "HotelName": "Lotus Hotel",
    "HotelAddress": "12 Tran Phu, Hanoi",
    "HotelImageUrl": "https://img.example.com/lotus.jpg",
    "GeoCoordinates": {"Latitude": 21.03, "Longitude": 105.85},
    "Price": "1,200,000 VND",
    "Rating": 4.5,
}

SEN = {
    "HotelName": "Sen Boutique",
    "HotelAddress": "8 Hang Bac, Hanoi",
    "HotelImageUrl": "https://img.example.com/sen.jpg",
    "GeoCoordinates": {"Latitude": 21.034, "Longitude": 105.853},
}


def _activity(activity_id: str, name: str, time_slot: str, **extra: Any) -> dict[str, Any]:
    return {
        "id": activity_id,
        "ActivityType": "normal_attraction",
        "PlaceName": name,
        "PlaceDetails": f"Visit {name}",
        "ImageUrl": f"https://img.example.com/{activity_id}.jpg",
        "TicketPricing": "Free",
        "TimeSlot": time_slot,
        **extra,
    }


def _checkin(activity_id: str, time_slot: str) -> dict[str, Any]:
    return _activity(
        activity_id,
        "Hotel Check-in",
        time_slot,
        ActivityType="hotel_checkin",
        PlaceDetails="Check-in at Lotus Hotel",
        ImageUrl=LOTUS["HotelImageUrl"],
    )


def _checkout(activity_id: str, time_slot: str) -> dict[str, Any]:
    return _activity(
        activity_id,
        "Hotel Check-out",
        time_slot,
        ActivityType="hotel_checkout",
        PlaceDetails="Check-out from Lotus Hotel",
        ImageUrl=LOTUS["HotelImageUrl"],
    )


def _slot(start: str, end: str, *activities: dict[str, Any]) -> dict[str, Any]:
    return {"StartTime": start, "EndTime": end, "Activities": list(activities)}


def build_trip_document() -> dict[str, Any]:
    """Three-day Hanoi trip.

    2025-06-10: Morning [lake], Lunch [bun cha], Afternoon [check-in, temple],
                Evening [puppets]
    2025-06-11: Morning [market, cathedral], Evening [night market]
    2025-06-12: Morning [mausoleum, check-out], Afternoon [train street]
    """
    return {
        "id": "trip-1",
        "userSelection": {
            "location": "Hanoi",
            "startDate": "2025-06-10",
            "endDate": "2025-06-12",
            "adults": 2,
        },
        "tripData": {
            "Location": "Hanoi, Vietnam",
            "Duration": "3 days",
            "Budget": "Moderate",
            "Timezone": "Asia/Ho_Chi_Minh",
            "Hotels": [LOTUS, SEN],
            "Itinerary": {
                "2025-06-10": {
                    "Theme": "Arrival",
                    "Morning": _slot(
                        "8:00 AM", "12:00 PM", _activity("d1-lake", "Hoan Kiem Lake", "8:00 AM - 12:00 PM")
                    ),
                    "Lunch": {
                        "StartTime": "12:00 PM",
                        "EndTime": "2:00 PM",
                        "Activity": _activity("d1-buncha", "Bun Cha Huong Lien", "12:00 PM - 2:00 PM"),
                    },
                    "Afternoon": _slot(
                        "2:00 PM",
                        "6:00 PM",
                        _checkin("d1-checkin", "2:00 PM - 4:00 PM"),
                        _activity("d1-temple", "Temple of Literature", "4:00 PM - 6:00 PM"),
                    ),
                    "Evening": _slot(
                        "6:00 PM", "10:00 PM", _activity("d1-puppets", "Water Puppet Theatre", "6:00 PM - 10:00 PM")
                    ),
                },
                "2025-06-11": {
                    "Theme": "Old Quarter",
                    "Morning": _slot(
                        "8:00 AM",
                        "12:00 PM",
                        _activity("d2-market", "Dong Xuan Market", "8:00 AM - 10:00 AM"),
                        _activity("d2-cathedral", "St. Joseph's Cathedral", "10:00 AM - 12:00 PM"),
                    ),
                    "Evening": _slot(
                        "6:00 PM", "10:00 PM", _activity("d2-nightmarket", "Night Market", "6:00 PM - 10:00 PM")
                    ),
                },
                "2025-06-12": {
                    "Theme": "Departure",
                    "Morning": _slot(
                        "8:00 AM",
                        "12:00 PM",
                        _activity("d3-mausoleum", "Ho Chi Minh Mausoleum", "8:00 AM - 10:00 AM"),
                        _checkout("d3-checkout", "10:00 AM - 12:00 PM"),
                    ),
                    "Afternoon": _slot(
                        "2:00 PM", "6:00 PM", _activity("d3-train", "Train Street", "2:00 PM - 6:00 PM")
                    ),
                },
            },
        },
        "selectedHotel": LOTUS,
    }


@pytest.fixture
def trip_document() -> dict[str, Any]:
    """Raw JSON document of the sample trip."""
    return build_trip_document()


@pytest.fixture
def trip() -> Trip:
    """Sample trip as a model."""
    return Trip.model_validate(build_trip_document())


@pytest.fixture
def lotus() -> Hotel:
    return Hotel.model_validate(LOTUS)


@pytest.fixture
def sen() -> Hotel:
    return Hotel.model_validate(SEN)


@pytest.fixture
def make_activity() -> Callable[..., dict[str, Any]]:
    """Factory for activity JSON dicts."""
    return _activity


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    """Deterministic activity ids: ``<day>-<slot>-<n>``."""
    return SequentialIdGenerator()


@pytest_asyncio.fixture
async def sqlite_session() -> AsyncGenerator[AsyncSession, None]:
    """Async session on a fresh in-memory SQLite database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def postgres_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine for PostgreSQL integration tests.

    Requires DATABASE_URL to be set to a real PostgreSQL connection string.
    Tests using this fixture should be marked with @pytest.mark.postgres.
    """
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        pytest.skip("DATABASE_URL not set - skipping postgres test")

    if not database_url.startswith(("postgresql://", "postgresql+asyncpg://")):
        pytest.skip(f"DATABASE_URL is not PostgreSQL: {database_url}")

    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    engine = create_async_engine(database_url, poolclass=NullPool, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def postgres_session(postgres_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session for PostgreSQL integration tests."""
    async with AsyncSession(postgres_engine, expire_on_commit=False) as session:
        yield session
