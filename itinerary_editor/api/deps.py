"""FastAPI dependencies for stores and repositories."""

from functools import lru_cache
from typing import Annotated

import redis
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from itinerary_editor.config import get_settings
from itinerary_editor.db.engine import get_session
from itinerary_editor.db.repositories import TripRepository
from itinerary_editor.db.sql_repositories import SqlTripRepository
from itinerary_editor.drafts.redis_store import RedisDraftStore
from itinerary_editor.drafts.store import DraftStore, InMemoryDraftStore
from itinerary_editor.saving.trip_store import HttpTripStore, LocalTripStore, TripStore


@lru_cache
def get_draft_store() -> DraftStore:
    """Redis-backed drafts when REDIS_URL is set, process-local otherwise."""
    settings = get_settings()
    if settings.redis_url:
        client = redis.from_url(settings.redis_url, decode_responses=True)  # type: ignore[no-untyped-call]
        return RedisDraftStore(client, settings.draft_namespace, settings.draft_ttl_seconds)
    return InMemoryDraftStore(settings.draft_namespace)


async def get_trip_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> TripRepository:
    return SqlTripRepository(session)


async def get_trip_store(
    repo: Annotated[TripRepository, Depends(get_trip_repository)],
) -> TripStore:
    """Remote Trip Store when TRIP_STORE_URL is set, in-process otherwise."""
    settings = get_settings()
    if settings.trip_store_url:
        return HttpTripStore(settings.trip_store_url, settings.trip_store_timeout_s)
    return LocalTripStore(repo)
