"""
Participant endpoints.

  GET /participants/{participant_id}/confirm -- invitee confirms presence; redirect to web app
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from services.planner.routers._deps import get_trip_service, require_uuid
from services.planner.trips.service import TripService, trip_page_link

router = APIRouter(prefix="/participants", tags=["participants"])


@router.get("/{participant_id}/confirm")
async def confirm_participant(
    participant_id: str,
    request: Request,
    service: TripService = Depends(get_trip_service),
) -> RedirectResponse:
    participant_id = require_uuid(participant_id)
    trip_id = await service.confirm_participant(participant_id)
    return RedirectResponse(trip_page_link(request.app.state.settings, trip_id))
