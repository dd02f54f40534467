from .base import Base
from .user import User
from .property import Property
from .owner_profile import OwnerProfile
from .ownership import Ownership, OwnershipRole
from .membership import Membership, PropertyMembershipRole
from .invite import Invite, InviteStatus

__all__ = [
     "Base",
     "User",
     "Property",
     "OwnerProfile",
     "Ownership",
     "OwnershipRole",
     "Membership",
     "PropertyMembershipRole",
     "Invite",
     "InviteStatus",
]
