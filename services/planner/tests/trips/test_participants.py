"""
Participant batch construction.

Validates:
- owner first, pre-confirmed, named
- one unconfirmed, nameless invitee per email, input order kept
- duplicate invitee emails are preserved
- exactly one owner is enforced
"""

import pytest

from services.planner.trips.participants import (
    Invitee,
    Owner,
    OwnershipError,
    build_participant_batch,
    ensure_single_owner,
    to_row,
)


class TestBuildParticipantBatch:
    def test_owner_only(self):
        batch = build_participant_batch("Ana", "ana@x.com", [])
        assert batch == [Owner(email="ana@x.com", name="Ana")]
        assert batch[0].is_owner and batch[0].is_confirmed

    @pytest.mark.parametrize("n", [0, 1, 3, 12])
    def test_n_invitees_yield_n_plus_one(self, n):
        emails = [f"guest{i}@x.com" for i in range(n)]
        batch = build_participant_batch("Ana", "ana@x.com", emails)

        assert len(batch) == n + 1
        owners = [p for p in batch if p.is_owner]
        assert len(owners) == 1
        assert owners[0].is_confirmed
        assert all(not p.is_confirmed for p in batch if not p.is_owner)

    def test_invitees_keep_input_order(self):
        batch = build_participant_batch("Ana", "ana@x.com", ["c@x.com", "a@x.com", "b@x.com"])
        assert [p.email for p in batch[1:]] == ["c@x.com", "a@x.com", "b@x.com"]

    def test_duplicate_invitees_preserved(self):
        batch = build_participant_batch("Ana", "ana@x.com", ["bob@x.com", "bob@x.com"])
        assert len(batch) == 3
        assert batch[1] == batch[2] == Invitee(email="bob@x.com")
        assert batch[1].name is None
        assert not batch[1].is_confirmed

    def test_owner_email_may_also_be_invited(self):
        batch = build_participant_batch("Ana", "ana@x.com", ["ana@x.com"])
        assert [p.kind for p in batch] == ["owner", "invitee"]


class TestEnsureSingleOwner:
    def test_no_owner_rejected(self):
        with pytest.raises(OwnershipError):
            ensure_single_owner([Invitee(email="bob@x.com")])

    def test_two_owners_rejected(self):
        with pytest.raises(OwnershipError):
            ensure_single_owner([Owner("a@x.com", "A"), Owner("b@x.com", "B")])

    def test_returns_the_owner(self):
        owner = Owner("a@x.com", "A")
        assert ensure_single_owner([Invitee("b@x.com"), owner]) is owner


class TestToRow:
    def test_owner_row(self):
        assert to_row(Owner("ana@x.com", "Ana"), "trip-1") == {
            "tripId": "trip-1",
            "email": "ana@x.com",
            "name": "Ana",
            "isOwner": True,
            "isConfirmed": True,
        }

    def test_invitee_row(self):
        assert to_row(Invitee("bob@x.com"), "trip-1") == {
            "tripId": "trip-1",
            "email": "bob@x.com",
            "name": None,
            "isOwner": False,
            "isConfirmed": False,
        }
