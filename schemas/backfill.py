"""
Pydantic schemas for the membership backfill.

Input views are read-only snapshots of users and owner profiles; they
validate straight from ORM rows (from_attributes). Operations form a
closed union discriminated by ``type``.
"""
from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, Field, ConfigDict

from models.invite import InviteStatus
from models.membership import PropertyMembershipRole
from models.ownership import OwnershipRole


class _Snapshot(BaseModel):
     model_config = ConfigDict(from_attributes=True, frozen=True)


class BackfillUser(_Snapshot):
     id: str
     email: str


class BackfillOwnership(_Snapshot):
     property_id: int
     role: OwnershipRole


class BackfillMembership(_Snapshot):
     property_id: int
     user_id: Optional[str] = None
     role: PropertyMembershipRole


class BackfillInvite(_Snapshot):
     id: int
     property_id: int
     status: InviteStatus
     role: PropertyMembershipRole


class BackfillOwnerProfile(_Snapshot):
     id: int
     email: str
     user_id: Optional[str] = None
     ownerships: List[BackfillOwnership] = Field(default_factory=list)
     memberships: List[BackfillMembership] = Field(default_factory=list)
     invites: List[BackfillInvite] = Field(default_factory=list)


class LinkOwnerOperation(BaseModel):
     """Set OwnerProfile.user_id."""
     model_config = ConfigDict(frozen=True)

     type: Literal["link-owner"] = "link-owner"
     owner_profile_id: int
     user_id: str


class CreateMembershipOperation(BaseModel):
     """Upsert the membership keyed by (owner_profile_id, property_id)."""
     model_config = ConfigDict(frozen=True)

     type: Literal["create-membership"] = "create-membership"
     owner_profile_id: int
     property_id: int
     user_id: str
     role: PropertyMembershipRole


class ClaimInviteOperation(BaseModel):
     """Mark an invite CLAIMED by user_id."""
     model_config = ConfigDict(frozen=True)

     type: Literal["claim-invite"] = "claim-invite"
     invite_id: int
     user_id: str


BackfillOperation = Annotated[
     Union[LinkOwnerOperation, CreateMembershipOperation, ClaimInviteOperation],
     Field(discriminator="type"),
]


class BackfillConflict(BaseModel):
     """An owner profile whose linked user disagrees with its email match."""
     owner_profile_id: int
     email: str
     reason: str


class BackfillPlan(BaseModel):
     """Result of planning: operations to apply plus blocking conflicts."""
     operations: List[BackfillOperation] = Field(default_factory=list)
     conflicts: List[BackfillConflict] = Field(default_factory=list)
     linked_profiles: int = 0
     memberships_created: int = 0
     invites_claimed: int = 0


class BackfillSummary(BaseModel):
     mode: Literal["dry-run", "apply"]
     owner_profiles: int
     linked_profiles: int
     memberships_created: int
     invites_claimed: int
     conflicts: int


class BackfillReport(BaseModel):
     """Combined machine-readable output of the backfill script."""
     summary: BackfillSummary
     operations: List[BackfillOperation]
     conflicts: List[BackfillConflict]

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "summary": {
                         "mode": "dry-run",
                         "owner_profiles": 1,
                         "linked_profiles": 1,
                         "memberships_created": 1,
                         "invites_claimed": 0,
                         "conflicts": 0
                    },
                    "operations": [
                         {"type": "link-owner", "owner_profile_id": 1, "user_id": "user-1"},
                         {
                              "type": "create-membership",
                              "owner_profile_id": 1,
                              "property_id": 10,
                              "user_id": "user-1",
                              "role": "OWNER"
                         }
                    ],
                    "conflicts": []
               }
          }
     )
