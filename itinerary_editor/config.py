"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from itinerary_editor.models.common import SlotName


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (Trip Store)
    database_url: str | None = None

    # Draft cache
    redis_url: str | None = None
    draft_namespace: str = "temp_trip_changes"
    draft_ttl_seconds: int = 7 * 24 * 3600

    # Remote Trip Store; drafts are saved in-process when unset
    trip_store_url: str | None = None
    trip_store_timeout_s: float = 30.0

    # Scheduling
    default_timezone: str = "Asia/Ho_Chi_Minh"

    # Default bounds for slots created by an edit
    morning_start: str = "8:00 AM"
    morning_end: str = "12:00 PM"
    lunch_start: str = "12:00 PM"
    lunch_end: str = "2:00 PM"
    afternoon_start: str = "2:00 PM"
    afternoon_end: str = "6:00 PM"
    evening_start: str = "6:00 PM"
    evening_end: str = "10:00 PM"

    def slot_bounds(self) -> dict[SlotName, tuple[str, str]]:
        """Default (StartTime, EndTime) per slot."""
        return {
            SlotName.morning: (self.morning_start, self.morning_end),
            SlotName.lunch: (self.lunch_start, self.lunch_end),
            SlotName.afternoon: (self.afternoon_start, self.afternoon_end),
            SlotName.evening: (self.evening_start, self.evening_end),
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
