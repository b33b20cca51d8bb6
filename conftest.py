"""Global pytest configuration."""

import os

# Set DATABASE_URL for tests before any imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
# Drafts and saves stay in process unless a test wires Redis or HTTP explicitly
os.environ.pop("REDIS_URL", None)
os.environ.pop("TRIP_STORE_URL", None)
