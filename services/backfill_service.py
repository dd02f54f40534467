# services/backfill_service.py
"""
Membership backfill - attach owner profiles to signed-up users.

Owner profiles, their ownerships and their invites exist before the owner
ever signs in. Once a user account with the same email exists, this service:
1. Plans the work (pure, no I/O): link the profile to the user, upsert a
   membership for every property the profile holds, claim pending invites
2. Reports conflicts (profile already linked to a different user) as data
3. Applies a plan inside the caller's transaction

Planning is idempotent: re-running it after a successful apply yields no
operations for the profiles that were resolved.
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from models import (
     Invite,
     InviteStatus,
     OwnerProfile,
     OwnershipRole,
     PropertyMembershipRole,
     User,
)
from schemas.backfill import (
     BackfillConflict,
     BackfillMembership,
     BackfillOperation,
     BackfillOwnerProfile,
     BackfillPlan,
     BackfillUser,
     ClaimInviteOperation,
     CreateMembershipOperation,
     LinkOwnerOperation,
)
from services.membership_service import upsert_membership

logger = logging.getLogger(__name__)


def ownership_role_to_membership_role(role: OwnershipRole) -> PropertyMembershipRole:
     """Caretakers manage a property; every other ownership role owns it."""
     if role == OwnershipRole.CARETAKER:
          return PropertyMembershipRole.MANAGER
     return PropertyMembershipRole.OWNER


def describe_backfill_operation(operation: BackfillOperation) -> str:
     """One human-readable sentence per operation."""
     if operation.type == "link-owner":
          return f"Link ownerProfile#{operation.owner_profile_id} → user {operation.user_id}"
     if operation.type == "create-membership":
          return (
               f"Create membership (ownerProfile#{operation.owner_profile_id} → "
               f"property#{operation.property_id}) as {operation.role.value}"
          )
     if operation.type == "claim-invite":
          return f"Mark invite#{operation.invite_id} as CLAIMED"
     return "Unknown operation"


def plan_membership_backfill(
     owner_profiles: Iterable[BackfillOwnerProfile],
     users: Iterable[BackfillUser]
) -> BackfillPlan:
     """
     Compute the operations that reconcile owner profiles with user accounts.

     Profiles are matched to users by case-insensitive email. Each profile is
     planned independently:
     - no matching user: skipped
     - linked to a different user: one conflict, zero operations
     - otherwise: link-owner (if unlinked), then membership upserts for
       ownerships, then repairs of memberships not linked to the user, then
       per pending invite an optional membership upsert and a claim

     Existing membership roles win over ownership-derived roles.
     """
     users_by_email: Dict[str, BackfillUser] = {user.email.lower(): user for user in users}
     operations: List[BackfillOperation] = []
     conflicts: List[BackfillConflict] = []

     linked_profiles = 0
     memberships_created = 0
     invites_claimed = 0

     for profile in owner_profiles:
          matching_user = users_by_email.get(profile.email.lower())
          if matching_user is None:
               continue

          if profile.user_id and profile.user_id != matching_user.id:
               conflicts.append(BackfillConflict(
                    owner_profile_id=profile.id,
                    email=profile.email,
                    reason=f"OwnerProfile.userId ({profile.user_id}) does not match User.id ({matching_user.id})",
               ))
               continue

          if not profile.user_id:
               operations.append(LinkOwnerOperation(owner_profile_id=profile.id, user_id=matching_user.id))
               linked_profiles += 1

          membership_by_property: Dict[int, BackfillMembership] = {
               membership.property_id: membership for membership in profile.memberships
          }
          touched_properties: Set[int] = set()

          def create_membership(property_id: int, role: PropertyMembershipRole) -> None:
               nonlocal memberships_created
               operations.append(CreateMembershipOperation(
                    owner_profile_id=profile.id,
                    property_id=property_id,
                    user_id=matching_user.id,
                    role=role,
               ))
               memberships_created += 1
               touched_properties.add(property_id)
               membership_by_property[property_id] = BackfillMembership(
                    property_id=property_id,
                    user_id=matching_user.id,
                    role=role,
               )

          for ownership in profile.ownerships:
               existing = membership_by_property.get(ownership.property_id)
               desired_role = existing.role if existing else ownership_role_to_membership_role(ownership.role)
               if existing and existing.user_id == matching_user.id and existing.role == desired_role:
                    continue
               create_membership(ownership.property_id, desired_role)

          # Memberships attached to the profile but not yet to its user
          for membership in profile.memberships:
               if membership.property_id in touched_properties:
                    continue
               if membership.user_id == matching_user.id:
                    continue
               create_membership(membership.property_id, membership.role)

          for invite in profile.invites:
               if invite.status != InviteStatus.PENDING:
                    continue

               if invite.property_id not in touched_properties:
                    existing = membership_by_property.get(invite.property_id)
                    if (
                         existing is None
                         or existing.user_id != matching_user.id
                         or existing.role != invite.role
                    ):
                         create_membership(invite.property_id, invite.role)

               operations.append(ClaimInviteOperation(invite_id=invite.id, user_id=matching_user.id))
               invites_claimed += 1

     return BackfillPlan(
          operations=operations,
          conflicts=conflicts,
          linked_profiles=linked_profiles,
          memberships_created=memberships_created,
          invites_claimed=invites_claimed,
     )


def load_backfill_snapshot(db: Session) -> Tuple[List[BackfillOwnerProfile], List[BackfillUser]]:
     """
     Load every owner profile (with ownerships, memberships and PENDING
     invites) and every user as planner input.
     """
     users = [
          BackfillUser.model_validate(user)
          for user in db.execute(select(User).order_by(User.id)).scalars()
     ]

     profiles = db.execute(
          select(OwnerProfile)
          .options(
               selectinload(OwnerProfile.ownerships),
               selectinload(OwnerProfile.memberships),
               selectinload(OwnerProfile.invites.and_(Invite.status == InviteStatus.PENDING)),
          )
          .order_by(OwnerProfile.id)
          .execution_options(populate_existing=True)
     ).scalars().all()

     return [BackfillOwnerProfile.model_validate(profile) for profile in profiles], users


def apply_backfill_operations(
     db: Session,
     operations: Sequence[BackfillOperation],
     now: Optional[datetime] = None
) -> None:
     """
     Apply planned operations in order inside the caller's transaction.

     Conflicts are not re-checked: callers must not apply a plan that has
     any. A failed write raises and the caller's transaction rolls back.

     Raises:
          ValueError: If a referenced owner profile or invite does not exist,
               or the operation type is unknown.
     """
     if now is None:
          now = datetime.utcnow()

     for operation in operations:
          if operation.type == "link-owner":
               profile = db.get(OwnerProfile, operation.owner_profile_id)
               if profile is None:
                    raise ValueError(f"OwnerProfile with ID {operation.owner_profile_id} not found")
               profile.user_id = operation.user_id
          elif operation.type == "create-membership":
               # Pending ORM changes must reach the database before the upsert
               db.flush()
               upsert_membership(
                    db,
                    owner_profile_id=operation.owner_profile_id,
                    property_id=operation.property_id,
                    user_id=operation.user_id,
                    role=operation.role,
               )
          elif operation.type == "claim-invite":
               invite = db.get(Invite, operation.invite_id)
               if invite is None:
                    raise ValueError(f"Invite with ID {operation.invite_id} not found")
               invite.status = InviteStatus.CLAIMED
               invite.claimed_at = now
               invite.claimed_by_id = operation.user_id
          else:
               raise ValueError(f"Unknown backfill operation: {operation!r}")
          logger.debug("Applied %s", describe_backfill_operation(operation))

     db.flush()
     # Upserts bypass the identity map; drop cached membership collections
     db.expire_all()
     logger.info("Applied %d backfill operations", len(operations))
