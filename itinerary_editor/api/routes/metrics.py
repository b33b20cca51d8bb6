"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint.

    Exposes all registered Prometheus metrics including:
    - itinerary_edits_total{command, outcome}
    - trip_saves_total{outcome}
    - trip_save_latency_ms{outcome}
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
