"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from itinerary_editor.api.routes.drafts import router as drafts_router
from itinerary_editor.api.routes.health import router as health_router
from itinerary_editor.api.routes.metrics import router as metrics_router
from itinerary_editor.api.routes.trips import router as trips_router
from itinerary_editor.config import get_settings
from itinerary_editor.db.engine import create_schema, get_async_engine


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Create the trip table on startup when a database is configured."""
    if get_settings().database_url:
        await create_schema(get_async_engine())
    yield


app = FastAPI(title="Itinerary Editor API", version="0.1.0", lifespan=lifespan)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(trips_router)
app.include_router(drafts_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Itinerary Editor API", "version": "0.1.0"}
