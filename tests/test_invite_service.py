"""Tests for claim_invite_by_token."""

from datetime import datetime

import pytest
from sqlalchemy import select

from models import Invite, InviteStatus, Membership, PropertyMembershipRole
from services.invite_service import InviteClaimError, claim_invite_by_token


NOW = datetime(2026, 10, 19, 9, 30, 0)


@pytest.fixture
def pending(seed):
    seed.user()
    seed.user(id="user-2", email="intruder@example.com")
    seed.property(10)
    profile = seed.owner_profile()
    invite = seed.invite(profile, 10, token="tok-10", role=PropertyMembershipRole.MANAGER)
    return profile, invite


def test_claim_creates_membership_and_marks_invite(db_session, pending):
    profile, invite = pending

    result = claim_invite_by_token(db_session, "tok-10", "user-1", "OWNER@example.com", now=NOW)

    assert result.already_claimed is False
    assert result.owner_profile_id == profile.id
    assert result.property_id == 10
    assert result.user_id == "user-1"
    assert result.role == PropertyMembershipRole.MANAGER

    claimed = db_session.get(Invite, invite.id)
    assert claimed.status == InviteStatus.CLAIMED
    assert claimed.claimed_at == NOW
    assert claimed.claimed_by_id == "user-1"


def test_claiming_twice_reports_already_claimed(db_session, pending):
    first = claim_invite_by_token(db_session, "tok-10", "user-1", "owner@example.com", now=NOW)
    second = claim_invite_by_token(db_session, "tok-10", "user-1", "owner@example.com")

    assert second.already_claimed is True
    assert second.membership_id == first.membership_id
    assert len(db_session.execute(select(Membership)).scalars().all()) == 1
    assert db_session.execute(select(Invite.claimed_at)).scalar_one() == NOW


def test_claim_replaces_membership_user_for_same_natural_key(db_session, seed, pending):
    profile, _ = pending
    existing = seed.membership(profile, 10, user_id=None, role=PropertyMembershipRole.OWNER)

    result = claim_invite_by_token(db_session, "tok-10", "user-1", "owner@example.com")

    assert result.membership_id == existing.id
    assert result.role == PropertyMembershipRole.MANAGER


@pytest.mark.parametrize(
    "token, email, message, status",
    [
        ("  ", "owner@example.com", "Token is required", 400),
        ("tok-10", " ", "Email is required", 400),
        ("missing", "owner@example.com", "Invite not found", 404),
        ("tok-10", "intruder@example.com", "Invite does not belong to the current user", 403),
    ],
)
def test_claim_rejects_invalid_requests(db_session, pending, token, email, message, status):
    with pytest.raises(InviteClaimError) as exc_info:
        claim_invite_by_token(db_session, token, "user-1", email)

    assert exc_info.value.message == message
    assert exc_info.value.status == status


def test_claim_rejects_revoked_invite(db_session, pending):
    _, invite = pending
    invite.status = InviteStatus.REVOKED
    db_session.flush()

    with pytest.raises(InviteClaimError) as exc_info:
        claim_invite_by_token(db_session, "tok-10", "user-1", "owner@example.com")

    assert exc_info.value.status == 410
    assert db_session.execute(select(Membership)).scalars().all() == []


def test_claim_rejects_invite_claimed_by_another_user(db_session, pending):
    _, invite = pending
    invite.status = InviteStatus.CLAIMED
    invite.claimed_by_id = "user-2"
    db_session.flush()

    with pytest.raises(InviteClaimError) as exc_info:
        claim_invite_by_token(db_session, "tok-10", "user-1", "owner@example.com")

    assert exc_info.value.status == 409
    assert str(exc_info.value) == "Invite already claimed by another user"
