"""Structured logging for draft edits and trip saves."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredEditLogger:
    """Structured logger for itinerary edit commands and saves."""

    def log_edit(
        self,
        trip_id: str,
        command: str,
        outcome: str,
        latency_ms: float,
        error_reason: str | None = None,
    ) -> None:
        """Log one edit command with structured data."""
        log_data: dict[str, Any] = {
            "trip_id": trip_id,
            "command": command,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Itinerary edit: {command} - {outcome}"

        if outcome == "applied":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})

    def log_save(
        self,
        trip_id: str,
        outcome: str,
        latency_ms: float,
        created: bool | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log a save attempt with structured data."""
        log_data: dict[str, Any] = {
            "trip_id": trip_id,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if created is not None:
            log_data["created"] = created
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Trip save: {trip_id} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
