from .backfill import (
     BackfillUser,
     BackfillOwnership,
     BackfillMembership,
     BackfillInvite,
     BackfillOwnerProfile,
     LinkOwnerOperation,
     CreateMembershipOperation,
     ClaimInviteOperation,
     BackfillOperation,
     BackfillConflict,
     BackfillPlan,
     BackfillSummary,
     BackfillReport,
)
from .invite import InviteClaimResult

__all__ = [
     "BackfillUser",
     "BackfillOwnership",
     "BackfillMembership",
     "BackfillInvite",
     "BackfillOwnerProfile",
     "LinkOwnerOperation",
     "CreateMembershipOperation",
     "ClaimInviteOperation",
     "BackfillOperation",
     "BackfillConflict",
     "BackfillPlan",
     "BackfillSummary",
     "BackfillReport",
     "InviteClaimResult",
]
