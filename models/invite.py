import enum
from datetime import datetime
from typing import Optional
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base
from .membership import PropertyMembershipRole


class InviteStatus(str, enum.Enum):
     """Lifecycle of an invite. PENDING -> CLAIMED happens at most once."""
     PENDING = "PENDING"
     CLAIMED = "CLAIMED"
     REVOKED = "REVOKED"


class Invite(Base):
     """
     Invite model - a pending grant of access to a property for an owner profile.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     token = Column(String(128), unique=True, nullable=False)
     email = Column(String(255), nullable=False, index=True)

     # Foreign keys
     owner_profile_id = Column(
          Integer,
          ForeignKey("owner_profiles.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     property_id = Column(
          Integer,
          ForeignKey("properties.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     role = Column(
          Enum(PropertyMembershipRole, name="property_membership_role", create_constraint=True),
          default=PropertyMembershipRole.OWNER,
          nullable=False
     )
     status = Column(
          Enum(InviteStatus, name="invite_status", create_constraint=True),
          default=InviteStatus.PENDING,
          nullable=False,
          index=True
     )

     claimed_at = Column(DateTime, nullable=True)
     claimed_by_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     owner_profile = relationship("OwnerProfile", back_populates="invites")
     property = relationship("Property", back_populates="invites")

     def __repr__(self):
          return f"<Invite(id={self.id}, property_id={self.property_id}, status='{self.status.value}')>"

     def mark_as_claimed(self, user_id: str, now: Optional[datetime] = None) -> None:
          """Mark the invite as claimed by user_id, keeping an earlier claimed_at."""
          self.status = InviteStatus.CLAIMED
          if self.claimed_at is None:
               self.claimed_at = now or datetime.utcnow()
          self.claimed_by_id = user_id
