"""
Pydantic schemas for invite claiming.
"""
from pydantic import BaseModel, ConfigDict

from models.membership import PropertyMembershipRole


class InviteClaimResult(BaseModel):
     """Membership granted by a claimed invite."""
     membership_id: int
     owner_profile_id: int
     property_id: int
     user_id: str
     role: PropertyMembershipRole
     already_claimed: bool = False

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "membership_id": 12,
                    "owner_profile_id": 3,
                    "property_id": 10,
                    "user_id": "0f8e6a2c-7d4b-4a0e-9c1b-2f3e4d5c6b7a",
                    "role": "OWNER",
                    "already_claimed": False
               }
          }
     )
