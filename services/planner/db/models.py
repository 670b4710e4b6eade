"""
SQLAlchemy DeclarativeBase models for trips, participants and activities.

Column names use camelCase to match the PostgreSQL column names shared with
the web client. Base.metadata is the schema source for scripts/create_tables.py.
"""

import uuid as _uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Trip(Base):
    __tablename__ = "trips"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(_uuid.uuid4()))
    destination: Mapped[str] = mapped_column(String)
    startsAt: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    endsAt: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    isConfirmed: Mapped[bool] = mapped_column(Boolean, default=False)
    createdAt: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class Participant(Base):
    """One row per person on a trip. Emails are not unique per trip."""

    __tablename__ = "participants"
    __table_args__ = (Index("ix_participants_tripId", "tripId"),)

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(_uuid.uuid4()))
    tripId: Mapped[str] = mapped_column(String, ForeignKey("trips.id", ondelete="CASCADE"))
    email: Mapped[str] = mapped_column(String)
    name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    isOwner: Mapped[bool] = mapped_column(Boolean, default=False)
    isConfirmed: Mapped[bool] = mapped_column(Boolean, default=False)


class Activity(Base):
    __tablename__ = "activities"
    __table_args__ = (Index("ix_activities_tripId_occursAt", "tripId", "occursAt"),)

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(_uuid.uuid4()))
    tripId: Mapped[str] = mapped_column(String, ForeignKey("trips.id", ondelete="CASCADE"))
    title: Mapped[str] = mapped_column(String)
    occursAt: Mapped[datetime] = mapped_column(DateTime(timezone=True))
