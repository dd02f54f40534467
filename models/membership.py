import enum
from sqlalchemy import Column, Integer, String, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class PropertyMembershipRole(str, enum.Enum):
     """Authorization role a user holds for a property."""
     OWNER = "OWNER"
     MANAGER = "MANAGER"


class Membership(TimestampMixin, Base):
     """
     Membership model - the access-control link between a user and a property.

     Keyed by (owner_profile_id, property_id): all writes go through an
     upsert on that constraint.
     """
     __table_args__ = (
          UniqueConstraint("owner_profile_id", "property_id", name="uq_memberships_owner_profile_property"),
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
     user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
     role = Column(
          Enum(PropertyMembershipRole, name="property_membership_role", create_constraint=True),
          default=PropertyMembershipRole.OWNER,
          nullable=False
     )

     # Relationships
     owner_profile = relationship("OwnerProfile", back_populates="memberships")
     property = relationship("Property", back_populates="memberships")
     user = relationship("User", back_populates="memberships")

     def __repr__(self):
          return f"<Membership(id={self.id}, property_id={self.property_id}, user_id={self.user_id!r}, role='{self.role.value}')>"
