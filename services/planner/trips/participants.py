"""
Participant variants and the creation-time batch builder.

A trip has exactly one Owner (pre-confirmed) and zero or more Invitees
(unconfirmed, nameless until they self-identify). Invitee emails are kept
as given: duplicates produce duplicate rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Sequence, Union


@dataclass(frozen=True)
class Owner:
    email: str
    name: str
    kind: Literal["owner"] = "owner"

    @property
    def is_owner(self) -> bool:
        return True

    @property
    def is_confirmed(self) -> bool:
        return True


@dataclass(frozen=True)
class Invitee:
    email: str
    name: Optional[str] = None
    confirmed: bool = False
    kind: Literal["invitee"] = "invitee"

    @property
    def is_owner(self) -> bool:
        return False

    @property
    def is_confirmed(self) -> bool:
        return self.confirmed


NewParticipant = Union[Owner, Invitee]


class OwnershipError(ValueError):
    """A participant batch without exactly one owner."""


def build_participant_batch(
    owner_name: str,
    owner_email: str,
    emails_to_invite: Sequence[str],
) -> list[NewParticipant]:
    """Owner first, then one Invitee per email in input order."""
    batch: list[NewParticipant] = [Owner(email=owner_email, name=owner_name)]
    batch.extend(Invitee(email=email) for email in emails_to_invite)
    ensure_single_owner(batch)
    return batch


def ensure_single_owner(batch: Sequence[NewParticipant]) -> Owner:
    owners = [p for p in batch if isinstance(p, Owner)]
    if len(owners) != 1:
        raise OwnershipError(f"expected exactly one owner, got {len(owners)}")
    return owners[0]


def to_row(participant: NewParticipant, trip_id: str) -> dict:
    """Column values for a participants row."""
    return {
        "tripId": trip_id,
        "email": participant.email,
        "name": participant.name,
        "isOwner": participant.is_owner,
        "isConfirmed": participant.is_confirmed,
    }
