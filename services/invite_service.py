# services/invite_service.py
"""
Invite Service - claim a single invite for a signed-in user.

The per-user counterpart of the backfill's invite handling: verifies the
invite belongs to the user, upserts the membership it grants and marks it
CLAIMED. Runs inside the caller's transaction; any error propagates so the
caller rolls back.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models import Invite, InviteStatus
from schemas.invite import InviteClaimResult
from services.membership_service import get_membership, upsert_membership

logger = logging.getLogger(__name__)


class InviteClaimError(Exception):
     """Invite claim rejected; status is the HTTP-style status code."""

     def __init__(self, message: str, status: int):
          super().__init__(message)
          self.message = message
          self.status = status


def claim_invite_by_token(
     db: Session,
     token: str,
     user_id: str,
     email: str,
     now: Optional[datetime] = None
) -> InviteClaimResult:
     """
     Claim the invite identified by token for user_id.

     Claiming again as the same user is a no-op that reports already_claimed.

     Raises:
          InviteClaimError: 400 blank token/email, 404 unknown token, 403 email
               mismatch, 410 revoked, 409 claimed by another user.
     """
     if not token.strip():
          raise InviteClaimError("Token is required", 400)
     if not email.strip():
          raise InviteClaimError("Email is required", 400)

     invite = db.execute(select(Invite).where(Invite.token == token)).scalar_one_or_none()
     if invite is None:
          raise InviteClaimError("Invite not found", 404)

     if invite.email.lower() != email.lower():
          raise InviteClaimError("Invite does not belong to the current user", 403)

     if invite.status == InviteStatus.REVOKED:
          raise InviteClaimError("Invite has been revoked", 410)

     if (
          invite.status == InviteStatus.CLAIMED
          and invite.claimed_by_id
          and invite.claimed_by_id != user_id
     ):
          raise InviteClaimError("Invite already claimed by another user", 409)

     upsert_membership(
          db,
          owner_profile_id=invite.owner_profile_id,
          property_id=invite.property_id,
          user_id=user_id,
          role=invite.role,
     )

     already_claimed = invite.status == InviteStatus.CLAIMED and invite.claimed_by_id == user_id
     if not already_claimed:
          invite.mark_as_claimed(user_id, now)
          db.flush()
          logger.info("Invite %s claimed by user %s", invite.id, user_id)

     membership = get_membership(db, invite.owner_profile_id, invite.property_id)
     return InviteClaimResult(
          membership_id=membership.id,
          owner_profile_id=membership.owner_profile_id,
          property_id=membership.property_id,
          user_id=membership.user_id,
          role=membership.role,
          already_claimed=already_claimed,
     )
