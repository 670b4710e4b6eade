"""
Trip endpoints.

  POST /trips                        -- create a trip + participants, email the owner
  GET  /trips/{trip_id}/activities   -- activities grouped by calendar day
  GET  /trips/{trip_id}/confirm      -- owner confirms; invitees get emailed; redirect to web app

A failed confirmation email never turns a created trip into an error
response: the outcome is reported under data.notification instead.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from services.planner.routers._deps import get_trip_service, request_id_of, require_uuid
from services.planner.trips.schemas import (
    ActivitiesByDayResponse,
    CreateTripRequest,
    CreateTripResponse,
)
from services.planner.trips.service import NewTrip, TripService, trip_page_link

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", response_model=CreateTripResponse, status_code=201)
async def create_trip(
    body: CreateTripRequest,
    request: Request,
    service: TripService = Depends(get_trip_service),
) -> CreateTripResponse:
    new_trip = NewTrip(
        destination=body.destination,
        starts_at=body.startsAt,
        ends_at=body.endsAt,
        owner_name=body.ownerName,
        owner_email=str(body.ownerEmail),
        emails_to_invite=[str(e) for e in body.emailsToInvite],
    )

    created = await service.create_trip(new_trip)
    notification = await service.notify_owner(new_trip, created)

    return CreateTripResponse(
        success=True,
        data={
            "tripId": created.trip_id,
            "notification": notification.to_dict(),
        },
        requestId=request_id_of(request),
    )


@router.get("/{trip_id}/activities", response_model=ActivitiesByDayResponse)
async def list_activities(
    trip_id: str,
    request: Request,
    service: TripService = Depends(get_trip_service),
) -> ActivitiesByDayResponse:
    trip_id = require_uuid(trip_id)

    buckets = await service.list_activities_by_day(trip_id)

    return ActivitiesByDayResponse(
        success=True,
        data={"activities": [b.to_dict() for b in buckets]},
        requestId=request_id_of(request),
    )


@router.get("/{trip_id}/confirm")
async def confirm_trip(
    trip_id: str,
    request: Request,
    service: TripService = Depends(get_trip_service),
) -> RedirectResponse:
    trip_id = require_uuid(trip_id)

    results = await service.confirm_trip(trip_id)
    failed = sum(1 for r in results if not r.delivered)
    if failed:
        logger.warning(
            "trip_invitations_incomplete trip=%s failed=%d sent=%d",
            trip_id,
            failed,
            len(results) - failed,
        )

    return RedirectResponse(trip_page_link(request.app.state.settings, trip_id))
