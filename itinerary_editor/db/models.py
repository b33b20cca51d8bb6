"""SQLAlchemy ORM models for saved trips."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TripRecord(Base):
    """Trip table - one saved trip document per row."""

    __tablename__ = "trip"
    __table_args__ = (Index("idx_trip_user_email", "user_email"),)

    trip_id: Mapped[str] = mapped_column(Text, primary_key=True)
    user_email: Mapped[str] = mapped_column(Text, nullable=False)
    document: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
