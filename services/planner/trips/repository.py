"""
Database access for trips, participants and activities.

Every write path commits exactly once, so the trip row and its participant
batch become visible together or not at all. SQLAlchemy failures are rolled
back and re-raised as PersistenceError; nothing here retries.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services.planner.db.models import Activity, Participant, Trip
from services.planner.errors import PersistenceError
from services.planner.trips.participants import NewParticipant, to_row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredParticipant:
    id: str
    trip_id: str
    email: str
    name: Optional[str]
    is_owner: bool
    is_confirmed: bool


class TripRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _commit(self, action: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("db_commit_failed action=%s error=%s", action, exc)
            raise PersistenceError(f"Could not {action}.") from exc

    async def create_trip(
        self,
        *,
        destination: str,
        starts_at: datetime,
        ends_at: datetime,
        participants: Sequence[NewParticipant],
        now: datetime,
    ) -> tuple[str, list[StoredParticipant]]:
        """Insert the trip and its participant batch in one transaction."""
        trip_id = str(uuid.uuid4())
        rows = [{"id": str(uuid.uuid4()), **to_row(p, trip_id)} for p in participants]

        await self._run(
            insert(Trip).values(
                id=trip_id,
                destination=destination,
                startsAt=starts_at,
                endsAt=ends_at,
                isConfirmed=False,
                createdAt=now,
            ),
            "create trip",
        )
        await self._run(insert(Participant).values(rows), "create trip")
        await self._commit("create trip")

        return trip_id, [
            StoredParticipant(
                id=r["id"],
                trip_id=trip_id,
                email=r["email"],
                name=r["name"],
                is_owner=r["isOwner"],
                is_confirmed=r["isConfirmed"],
            )
            for r in rows
        ]

    async def get_trip(self, trip_id: str) -> Optional[Trip]:
        result = await self._run(select(Trip).where(Trip.id == trip_id), "load trip")
        return result.scalars().first()

    async def list_activities(self, trip_id: str) -> list[Activity]:
        """Activities for the trip, ascending by occursAt."""
        stmt = (
            select(Activity)
            .where(Activity.tripId == trip_id)
            .order_by(Activity.occursAt.asc())
        )
        result = await self._run(stmt, "load activities")
        return list(result.scalars().all())

    async def list_invitees(self, trip_id: str) -> list[Participant]:
        stmt = select(Participant).where(
            and_(Participant.tripId == trip_id, Participant.isOwner.is_(False))
        )
        result = await self._run(stmt, "load participants")
        return list(result.scalars().all())

    async def get_participant(self, participant_id: str) -> Optional[Participant]:
        result = await self._run(
            select(Participant).where(Participant.id == participant_id),
            "load participant",
        )
        return result.scalars().first()

    async def mark_trip_confirmed(self, trip_id: str) -> None:
        """Confirm the trip and its owner together."""
        await self._run(
            update(Trip).where(Trip.id == trip_id).values(isConfirmed=True),
            "confirm trip",
        )
        await self._run(
            update(Participant)
            .where(and_(Participant.tripId == trip_id, Participant.isOwner.is_(True)))
            .values(isConfirmed=True),
            "confirm trip",
        )
        await self._commit("confirm trip")

    async def mark_participant_confirmed(self, participant_id: str) -> None:
        await self._run(
            update(Participant)
            .where(Participant.id == participant_id)
            .values(isConfirmed=True),
            "confirm participant",
        )
        await self._commit("confirm participant")

    async def _run(self, stmt, action: str):
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("db_execute_failed action=%s error=%s", action, exc)
            raise PersistenceError(f"Could not {action}.") from exc
