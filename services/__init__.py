# services/__init__.py
from .backfill_service import (
     ownership_role_to_membership_role,
     describe_backfill_operation,
     plan_membership_backfill,
     load_backfill_snapshot,
     apply_backfill_operations,
)
from .invite_service import InviteClaimError, claim_invite_by_token
from .membership_service import upsert_membership, get_membership

__all__ = [
     "ownership_role_to_membership_role",
     "describe_backfill_operation",
     "plan_membership_backfill",
     "load_backfill_snapshot",
     "apply_backfill_operations",
     "InviteClaimError",
     "claim_invite_by_token",
     "upsert_membership",
     "get_membership",
]
