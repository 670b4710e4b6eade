"""Request / response models for the trip endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field


class CreateTripRequest(BaseModel):
    destination: str = Field(min_length=4)
    startsAt: datetime
    endsAt: datetime
    ownerName: str
    ownerEmail: EmailStr
    emailsToInvite: list[EmailStr] = Field(default_factory=list)


class CreateTripResponse(BaseModel):
    success: bool
    data: dict[str, Any]
    requestId: str


class ActivitiesByDayResponse(BaseModel):
    success: bool
    data: dict[str, Any]
    requestId: str
