"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from models import (
    Base,
    Invite,
    InviteStatus,
    Membership,
    OwnerProfile,
    Ownership,
    OwnershipRole,
    Property,
    PropertyMembershipRole,
    User,
)


@pytest.fixture(scope="function")
def db_session() -> Session:
    """
    Create a fresh in-memory SQLite database session for each test.

    SQLite supports INSERT ... ON CONFLICT, so membership upserts run as they
    would on PostgreSQL.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_session):
    """Session-context factory bound to the test session, for the CLI."""

    @contextmanager
    def factory():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    return factory


@pytest.fixture
def seed(db_session):
    """Builders for persisted rows; each flushes so ids are assigned."""

    class Seed:
        def user(self, id="user-1", email="owner@example.com"):
            user = User(id=id, email=email)
            db_session.add(user)
            db_session.flush()
            return user

        def property(self, id, name=None):
            prop = Property(id=id, name=name or f"Cottage {id}", slug=f"cottage-{id}")
            db_session.add(prop)
            db_session.flush()
            return prop

        def owner_profile(self, email="owner@example.com", user_id=None, id=None):
            profile = OwnerProfile(id=id, email=email, user_id=user_id)
            db_session.add(profile)
            db_session.flush()
            return profile

        def ownership(self, profile, property_id, role=OwnershipRole.OWNER):
            ownership = Ownership(
                owner_profile_id=profile.id,
                property_id=property_id,
                role=role,
                share_bps=5000,
            )
            db_session.add(ownership)
            db_session.flush()
            return ownership

        def membership(self, profile, property_id, user_id=None, role=PropertyMembershipRole.OWNER):
            membership = Membership(
                owner_profile_id=profile.id,
                property_id=property_id,
                user_id=user_id,
                role=role,
            )
            db_session.add(membership)
            db_session.flush()
            return membership

        def invite(
            self,
            profile,
            property_id,
            token="invite-token",
            email=None,
            role=PropertyMembershipRole.OWNER,
            status=InviteStatus.PENDING,
            claimed_by_id=None,
        ):
            invite = Invite(
                token=token,
                email=email or profile.email,
                owner_profile_id=profile.id,
                property_id=property_id,
                role=role,
                status=status,
                claimed_by_id=claimed_by_id,
            )
            db_session.add(invite)
            db_session.flush()
            return invite

    return Seed()
