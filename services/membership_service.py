# services/membership_service.py
"""
Membership writes keyed by the (owner_profile_id, property_id) natural key.

All membership writes go through the database's native upsert so that two
concurrent runs can never insert duplicate rows for the same key.
"""
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models import Membership, PropertyMembershipRole


def _insert_for(db: Session):
     """Return the dialect-specific insert() construct that supports ON CONFLICT."""
     dialect = db.get_bind().dialect.name
     if dialect == "postgresql":
          from sqlalchemy.dialects.postgresql import insert
     elif dialect == "sqlite":
          from sqlalchemy.dialects.sqlite import insert
     else:
          raise NotImplementedError(f"Membership upsert is not supported on '{dialect}'")
     return insert


def upsert_membership(
     db: Session,
     owner_profile_id: int,
     property_id: int,
     user_id: str,
     role: PropertyMembershipRole
) -> None:
     """
     Insert a membership, or update user_id/role of the existing one.

     Idempotent: applying the same values twice leaves identical state.
     """
     insert = _insert_for(db)
     stmt = insert(Membership).values(
          owner_profile_id=owner_profile_id,
          property_id=property_id,
          user_id=user_id,
          role=role,
     )
     stmt = stmt.on_conflict_do_update(
          index_elements=["owner_profile_id", "property_id"],
          set_={
               "user_id": stmt.excluded.user_id,
               "role": stmt.excluded.role,
               "updated_at": func.now(),
          },
     )
     db.execute(stmt)


def get_membership(db: Session, owner_profile_id: int, property_id: int) -> Membership:
     """Fetch the membership for a natural key, bypassing stale identity-map state."""
     return db.execute(
          select(Membership)
          .where(
               Membership.owner_profile_id == owner_profile_id,
               Membership.property_id == property_id,
          )
          .execution_options(populate_existing=True)
     ).scalar_one()
