"""Redis-backed draft store."""

import logging

import redis

from itinerary_editor.drafts.store import DEFAULT_NAMESPACE, draft_key, dump_snapshot, load_snapshot
from itinerary_editor.models.trip import Trip

logger = logging.getLogger(__name__)


class RedisDraftStore:
    """DraftStore keeping snapshots as JSON strings under ``<namespace>_<trip_id>``.

    The unsaved flag lives beside the snapshot under ``<key>:unsaved``. Both
    keys share a TTL so abandoned drafts expire.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        namespace: str = DEFAULT_NAMESPACE,
        ttl_seconds: int | None = None,
    ) -> None:
        """Initialize draft store.

        Args:
            redis_client: Redis client
            namespace: Key prefix for drafts
            ttl_seconds: Expiry for drafts (None keeps them forever)
        """
        self._redis = redis_client
        self._namespace = namespace
        self._ttl_seconds = ttl_seconds

    def _keys(self, trip_id: str) -> tuple[str, str]:
        key = draft_key(self._namespace, trip_id)
        return key, f"{key}:unsaved"

    def save(self, trip_id: str, snapshot: Trip) -> None:
        key, flag_key = self._keys(trip_id)
        pipe = self._redis.pipeline()
        pipe.set(key, dump_snapshot(snapshot), ex=self._ttl_seconds)
        pipe.set(flag_key, "1", ex=self._ttl_seconds)
        pipe.execute()
        logger.debug(f"Draft saved: {key}")

    def load(self, trip_id: str) -> Trip | None:
        key, _ = self._keys(trip_id)
        text = self._redis.get(key)
        return load_snapshot(text) if text is not None else None

    def clear(self, trip_id: str) -> None:
        key, flag_key = self._keys(trip_id)
        self._redis.delete(key, flag_key)
        logger.debug(f"Draft cleared: {key}")

    def has_unsaved_changes(self, trip_id: str) -> bool:
        _, flag_key = self._keys(trip_id)
        return bool(self._redis.exists(flag_key))

    def mark_saved(self, trip_id: str) -> None:
        _, flag_key = self._keys(trip_id)
        self._redis.delete(flag_key)
