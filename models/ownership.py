import enum
from sqlalchemy import Column, Integer, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class OwnershipRole(str, enum.Enum):
     """Role an owner profile holds in a property's title."""
     OWNER = "OWNER"
     CARETAKER = "CARETAKER"


class Ownership(Base):
     """
     Ownership model - a share of a property held by an owner profile.

     Tied to the profile, not to a user: access for a signed-in user is
     granted through Membership.
     """
     __table_args__ = (
          UniqueConstraint("owner_profile_id", "property_id", name="uq_ownerships_owner_profile_property"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
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
          Enum(OwnershipRole, name="ownership_role", create_constraint=True),
          default=OwnershipRole.OWNER,
          nullable=False
     )

     # Basis points (10000 = 100%)
     share_bps = Column(Integer, default=0, nullable=False)
     voting_power = Column(Integer, default=1, nullable=False)

     # Relationships
     owner_profile = relationship("OwnerProfile", back_populates="ownerships")
     property = relationship("Property", back_populates="ownerships")

     def __repr__(self):
          return f"<Ownership(owner_profile_id={self.owner_profile_id}, property_id={self.property_id}, role='{self.role.value}')>"
