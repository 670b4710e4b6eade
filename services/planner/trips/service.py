"""
Trip lifecycle workflow.

create_trip:     validate dates -> build participant batch -> one transaction
notify_owner:    confirmation email to the owner (failure is reported, not raised)
list_activities_by_day: trip + activities -> day buckets
confirm_trip / confirm_participant: flip confirmation flags, send invitations
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from services.planner.config import Settings
from services.planner.errors import (
    NotificationError,
    ParticipantNotFound,
    TripNotFound,
)
from services.planner.notifications.formatting import DateFormatter, LongDateFormatter
from services.planner.notifications.mailer import Mailer
from services.planner.notifications.messages import (
    build_trip_confirmation,
    build_trip_invitation,
)
from services.planner.trips.itinerary import (
    ActivityView,
    DayBucket,
    bucket_activities_by_day,
)
from services.planner.trips.participants import build_participant_batch
from services.planner.trips.repository import StoredParticipant, TripRepository
from services.planner.trips.validation import validate_trip_dates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewTrip:
    destination: str
    starts_at: datetime
    ends_at: datetime
    owner_name: str
    owner_email: str
    emails_to_invite: Sequence[str] = ()


@dataclass(frozen=True)
class CreatedTrip:
    trip_id: str
    confirmation_link: str
    participants: list[StoredParticipant]


@dataclass(frozen=True)
class DispatchResult:
    delivered: bool
    reference: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        if self.delivered:
            return {"delivered": True, "reference": self.reference}
        return {"delivered": False, "error": self.error}


def trip_confirmation_link(settings: Settings, trip_id: str) -> str:
    return f"{settings.api_base_url.rstrip('/')}/trips/{trip_id}/confirm"


def participant_confirmation_link(settings: Settings, participant_id: str) -> str:
    return f"{settings.api_base_url.rstrip('/')}/participants/{participant_id}/confirm"


def trip_page_link(settings: Settings, trip_id: str) -> str:
    return f"{settings.web_base_url.rstrip('/')}/trips/{trip_id}"


class TripService:
    def __init__(
        self,
        repository: TripRepository,
        mailer: Mailer,
        settings: Settings,
        format_date: DateFormatter | None = None,
    ):
        self.repository = repository
        self.mailer = mailer
        self.settings = settings
        self.format_date = format_date or LongDateFormatter(settings.itinerary_timezone)

    async def create_trip(self, new_trip: NewTrip, *, now: datetime | None = None) -> CreatedTrip:
        now = now or datetime.now(timezone.utc)
        starts_at, ends_at = validate_trip_dates(new_trip.starts_at, new_trip.ends_at, now=now)

        batch = build_participant_batch(
            new_trip.owner_name,
            new_trip.owner_email,
            new_trip.emails_to_invite,
        )
        trip_id, participants = await self.repository.create_trip(
            destination=new_trip.destination,
            starts_at=starts_at,
            ends_at=ends_at,
            participants=batch,
            now=now,
        )

        logger.info(
            "trip_created trip=%s participants=%d",
            trip_id,
            len(participants),
        )

        return CreatedTrip(
            trip_id=trip_id,
            confirmation_link=trip_confirmation_link(self.settings, trip_id),
            participants=participants,
        )

    async def notify_owner(self, new_trip: NewTrip, created: CreatedTrip) -> DispatchResult:
        """Send the confirmation email. A transport failure is logged and returned."""
        message = build_trip_confirmation(
            owner_name=new_trip.owner_name,
            owner_email=new_trip.owner_email,
            destination=new_trip.destination,
            starts_on=self.format_date(new_trip.starts_at),
            ends_on=self.format_date(new_trip.ends_at),
            confirmation_link=created.confirmation_link,
            trip_id=created.trip_id,
        )
        try:
            reference = await self.mailer.send(message)
        except NotificationError as exc:
            logger.warning(
                "trip_confirmation_not_sent trip=%s error=%s",
                created.trip_id,
                exc.message,
            )
            return DispatchResult(delivered=False, error=exc.message)

        logger.info(
            "trip_confirmation_sent trip=%s preview=%s",
            created.trip_id,
            reference,
        )
        return DispatchResult(delivered=True, reference=reference)

    async def list_activities_by_day(self, trip_id: str) -> list[DayBucket]:
        trip = await self.repository.get_trip(trip_id)
        if trip is None:
            raise TripNotFound(trip_id)

        activities = await self.repository.list_activities(trip_id)
        return bucket_activities_by_day(
            trip.startsAt,
            trip.endsAt,
            [ActivityView(id=a.id, title=a.title, occurs_at=a.occursAt) for a in activities],
            tz=ZoneInfo(self.settings.itinerary_timezone),
        )

    async def confirm_trip(self, trip_id: str) -> list[DispatchResult]:
        """
        Mark the trip confirmed and invite every non-owner participant.

        Returns one DispatchResult per invitation sent; an already-confirmed
        trip sends nothing and returns an empty list.
        """
        trip = await self.repository.get_trip(trip_id)
        if trip is None:
            raise TripNotFound(trip_id)

        if trip.isConfirmed:
            return []

        await self.repository.mark_trip_confirmed(trip_id)
        logger.info("trip_confirmed trip=%s", trip_id)

        invitees = await self.repository.list_invitees(trip_id)
        starts_on = self.format_date(trip.startsAt)
        ends_on = self.format_date(trip.endsAt)

        results = []
        for invitee in invitees:
            message = build_trip_invitation(
                invitee_email=invitee.email,
                destination=trip.destination,
                starts_on=starts_on,
                ends_on=ends_on,
                confirmation_link=participant_confirmation_link(self.settings, invitee.id),
                trip_id=trip_id,
            )
            try:
                reference = await self.mailer.send(message)
            except NotificationError as exc:
                logger.warning(
                    "trip_invitation_not_sent trip=%s participant=%s error=%s",
                    trip_id,
                    invitee.id,
                    exc.message,
                )
                results.append(DispatchResult(delivered=False, error=exc.message))
            else:
                results.append(DispatchResult(delivered=True, reference=reference))

        return results

    async def confirm_participant(self, participant_id: str) -> str:
        """Mark a participant confirmed; return their trip id."""
        participant = await self.repository.get_participant(participant_id)
        if participant is None:
            raise ParticipantNotFound(participant_id)

        if not participant.isConfirmed:
            await self.repository.mark_participant_confirmed(participant_id)
            logger.info(
                "participant_confirmed trip=%s participant=%s",
                participant.tripId,
                participant_id,
            )

        return participant.tripId
