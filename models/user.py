from sqlalchemy import Column, String, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


class User(Base):
     """
     User model - mirror of an identity-provider account.
     The id is the provider's stable subject id; email is the join key
     used to attach owner profiles.
     """
     __tablename__ = "users"

     id = Column(String(36), primary_key=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     first_name = Column(String(100), nullable=True)
     last_name = Column(String(100), nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     owner_profiles = relationship("OwnerProfile", back_populates="user")
     memberships = relationship("Membership", back_populates="user")

     def __repr__(self):
          return f"<User(id='{self.id}', email='{self.email}')>"
