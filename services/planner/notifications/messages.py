"""
Email message builders.

Inline styles only (email client compatibility). Every interpolated value is
HTML-escaped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class EmailMessage:
    to_email: str
    subject: str
    html: str
    to_name: Optional[str] = None
    tags: list[dict[str, str]] = field(default_factory=list)


def _escape_html(text: str) -> str:
    """Minimal HTML escaping for email content."""
    return (
        text
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _wrap(paragraphs: list[str]) -> str:
    body = "\n    <p></p>\n".join(f"    <p>{p}</p>" for p in paragraphs)
    return (
        '<div style="font-family: sans-serif; font-size: 16px; line-height: 1.6;">\n'
        f"{body}\n"
        "</div>"
    )


def build_trip_confirmation(
    *,
    owner_name: str,
    owner_email: str,
    destination: str,
    starts_on: str,
    ends_on: str,
    confirmation_link: str,
    trip_id: str,
) -> EmailMessage:
    """Message asking the owner to confirm a freshly created trip."""
    html = _wrap([
        f"You asked to create a trip to <strong>{_escape_html(destination)}</strong> "
        f"from <strong>{_escape_html(starts_on)}</strong> "
        f"to <strong>{_escape_html(ends_on)}</strong>.",
        "To confirm your trip, click the link below:",
        f'<a href="{_escape_html(confirmation_link)}">Confirm trip</a>',
        "If you don't know what this email is about, just ignore it.",
    ])
    return EmailMessage(
        to_email=owner_email,
        to_name=owner_name,
        subject=f"Confirm your trip to {destination} on {starts_on}",
        html=html,
        tags=[
            {"name": "category", "value": "trip_confirmation"},
            {"name": "trip_id", "value": trip_id},
        ],
    )


def build_trip_invitation(
    *,
    invitee_email: str,
    destination: str,
    starts_on: str,
    ends_on: str,
    confirmation_link: str,
    trip_id: str,
) -> EmailMessage:
    """Message inviting a participant to confirm their place on a trip."""
    html = _wrap([
        f"You have been invited to a trip to <strong>{_escape_html(destination)}</strong> "
        f"from <strong>{_escape_html(starts_on)}</strong> "
        f"to <strong>{_escape_html(ends_on)}</strong>.",
        "To confirm your presence, click the link below:",
        f'<a href="{_escape_html(confirmation_link)}">Confirm presence</a>',
        "If you don't know what this email is about, just ignore it.",
    ])
    return EmailMessage(
        to_email=invitee_email,
        subject=f"Confirm your presence on the trip to {destination} on {starts_on}",
        html=html,
        tags=[
            {"name": "category", "value": "trip_invitation"},
            {"name": "trip_id", "value": trip_id},
        ],
    )
