"""
OwnerProfile model - a human owner, independent of authentication.

A profile exists before its owner ever signs in. Once the owner has an
identity-provider account, user_id links the two (at most one user per
profile). Ownerships, memberships and invites all hang off the profile.
"""
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class OwnerProfile(TimestampMixin, Base):
     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), nullable=False, index=True)
     first_name = Column(String(100), nullable=True)
     last_name = Column(String(100), nullable=True)
     user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

     # Relationships
     user = relationship("User", back_populates="owner_profiles")
     ownerships = relationship(
          "Ownership",
          back_populates="owner_profile",
          cascade="all, delete-orphan",
          order_by="Ownership.id",
     )
     memberships = relationship(
          "Membership",
          back_populates="owner_profile",
          cascade="all, delete-orphan",
          order_by="Membership.id",
     )
     invites = relationship(
          "Invite",
          back_populates="owner_profile",
          cascade="all, delete-orphan",
          order_by="Invite.id",
     )

     def __repr__(self):
          return f"<OwnerProfile(id={self.id}, email='{self.email}', user_id={self.user_id!r})>"
