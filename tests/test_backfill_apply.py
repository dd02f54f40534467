"""Tests for loading snapshots and applying backfill plans against SQLite.

Coverage:
- Snapshot loading only carries PENDING invites
- Applier writes link, membership upsert and invite claim
- Re-applying the same operations is idempotent
- Planning after apply yields nothing for resolved profiles
"""

from datetime import datetime

import pytest
from sqlalchemy import func, select

from models import (
    Invite,
    InviteStatus,
    Membership,
    OwnerProfile,
    OwnershipRole,
    PropertyMembershipRole,
)
from schemas.backfill import CreateMembershipOperation, LinkOwnerOperation
from services.backfill_service import (
    apply_backfill_operations,
    load_backfill_snapshot,
    plan_membership_backfill,
)


NOW = datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture
def linked_scenario(seed):
    """One unlinked owner with an ownership, a caretaker share and a pending invite."""
    seed.user()
    for property_id in (7, 10, 12):
        seed.property(property_id)
    profile = seed.owner_profile()
    seed.ownership(profile, 10, OwnershipRole.OWNER)
    seed.ownership(profile, 7, OwnershipRole.CARETAKER)
    invite = seed.invite(profile, 12, token="tok-12", role=PropertyMembershipRole.MANAGER)
    return profile, invite


def memberships(db_session):
    return db_session.execute(
        select(Membership).order_by(Membership.property_id)
    ).scalars().all()


# ============================================================================
# Snapshot loading
# ============================================================================


def test_snapshot_includes_only_pending_invites(db_session, seed):
    seed.user()
    seed.property(10)
    profile = seed.owner_profile()
    seed.invite(profile, 10, token="pending")
    seed.invite(profile, 10, token="claimed", status=InviteStatus.CLAIMED, claimed_by_id="user-1")
    seed.invite(profile, 10, token="revoked", status=InviteStatus.REVOKED)

    profiles, users = load_backfill_snapshot(db_session)

    assert [user.id for user in users] == ["user-1"]
    assert len(profiles) == 1
    assert [invite.status for invite in profiles[0].invites] == [InviteStatus.PENDING]


def test_snapshot_orders_profiles_by_id(db_session, seed):
    seed.owner_profile(email="b@example.com", id=2)
    seed.owner_profile(email="a@example.com", id=1)

    profiles, _ = load_backfill_snapshot(db_session)

    assert [profile.id for profile in profiles] == [1, 2]


# ============================================================================
# Applying
# ============================================================================


def test_apply_links_creates_memberships_and_claims_invites(db_session, linked_scenario):
    profile, invite = linked_scenario

    plan = plan_membership_backfill(*load_backfill_snapshot(db_session))
    assert [op.type for op in plan.operations] == [
        "link-owner",
        "create-membership",
        "create-membership",
        "create-membership",
        "claim-invite",
    ]

    apply_backfill_operations(db_session, plan.operations, now=NOW)

    assert db_session.get(OwnerProfile, profile.id).user_id == "user-1"
    assert [(m.property_id, m.user_id, m.role) for m in memberships(db_session)] == [
        (7, "user-1", PropertyMembershipRole.MANAGER),
        (10, "user-1", PropertyMembershipRole.OWNER),
        (12, "user-1", PropertyMembershipRole.MANAGER),
    ]

    claimed = db_session.get(Invite, invite.id)
    assert claimed.status == InviteStatus.CLAIMED
    assert claimed.claimed_at == NOW
    assert claimed.claimed_by_id == "user-1"


def test_replanning_after_apply_yields_no_operations(db_session, linked_scenario):
    plan = plan_membership_backfill(*load_backfill_snapshot(db_session))
    apply_backfill_operations(db_session, plan.operations, now=NOW)
    db_session.commit()

    replanned = plan_membership_backfill(*load_backfill_snapshot(db_session))

    assert replanned.operations == []
    assert replanned.conflicts == []


def test_reapplying_operations_is_idempotent(db_session, linked_scenario):
    plan = plan_membership_backfill(*load_backfill_snapshot(db_session))

    apply_backfill_operations(db_session, plan.operations, now=NOW)
    first = [(m.id, m.property_id, m.user_id, m.role) for m in memberships(db_session)]

    apply_backfill_operations(db_session, plan.operations, now=NOW)
    second = [(m.id, m.property_id, m.user_id, m.role) for m in memberships(db_session)]

    assert first == second
    assert db_session.scalar(select(func.count()).select_from(Membership)) == 3


def test_create_membership_updates_existing_row_for_natural_key(db_session, seed):
    seed.user()
    seed.property(20)
    profile = seed.owner_profile(user_id="user-1")
    existing = seed.membership(profile, 20, user_id=None, role=PropertyMembershipRole.OWNER)

    apply_backfill_operations(
        db_session,
        [
            CreateMembershipOperation(
                owner_profile_id=profile.id,
                property_id=20,
                user_id="user-1",
                role=PropertyMembershipRole.MANAGER,
            )
        ],
    )

    rows = memberships(db_session)
    assert len(rows) == 1
    assert rows[0].id == existing.id
    assert rows[0].user_id == "user-1"
    assert rows[0].role == PropertyMembershipRole.MANAGER


def test_apply_raises_for_missing_owner_profile(db_session):
    with pytest.raises(ValueError, match="OwnerProfile with ID 404 not found"):
        apply_backfill_operations(
            db_session,
            [LinkOwnerOperation(owner_profile_id=404, user_id="user-1")],
        )


def test_conflicting_profile_is_left_untouched(db_session, seed):
    seed.user()
    seed.user(id="user-999", email="someone-else@example.com")
    seed.property(10)
    profile = seed.owner_profile(user_id="user-999")
    seed.ownership(profile, 10)

    plan = plan_membership_backfill(*load_backfill_snapshot(db_session))

    assert plan.operations == []
    assert [conflict.owner_profile_id for conflict in plan.conflicts] == [profile.id]
    assert memberships(db_session) == []
