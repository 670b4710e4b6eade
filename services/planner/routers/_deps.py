"""Shared router dependencies: trip service wiring, id parsing, request ids."""

from __future__ import annotations

import uuid

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from services.planner.db.session import get_db
from services.planner.trips.repository import TripRepository
from services.planner.trips.service import TripService


def get_trip_service(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> TripService:
    return TripService(
        repository=TripRepository(session),
        mailer=request.app.state.mailer,
        settings=request.app.state.settings,
        format_date=getattr(request.app.state, "date_formatter", None),
    )


def require_uuid(value: str) -> str:
    """Accept only the hyphenated 8-4-4-4-12 form; return it lowercased."""
    try:
        canonical = str(uuid.UUID(value))
    except ValueError:
        raise HTTPException(status_code=422, detail="Invalid UUID format.")
    # uuid.UUID also parses bare hex, braces and urn:uuid: prefixes
    if canonical != value.lower():
        raise HTTPException(status_code=422, detail="Invalid UUID format.")
    return canonical


def request_id_of(request: Request) -> str:
    return getattr(request.state, "request_id", str(uuid.uuid4()))
