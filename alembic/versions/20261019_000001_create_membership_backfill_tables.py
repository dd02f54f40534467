"""Create owner profile, membership and invite tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

This migration creates the tables the membership backfill reads and writes:
users, properties, owner_profiles, ownerships, memberships and invites.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the backfill tables."""
    membership_role = sa.Enum('OWNER', 'MANAGER', name='property_membership_role')

    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug', name='uq_properties_slug'),
    )

    op.create_table(
        'owner_profiles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['user_id'],
            ['users.id'],
            name='fk_owner_profiles_user_id',
            ondelete='SET NULL'
        ),
    )
    op.create_index('ix_owner_profiles_email', 'owner_profiles', ['email'])
    op.create_index('ix_owner_profiles_user_id', 'owner_profiles', ['user_id'])

    op.create_table(
        'ownerships',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_profile_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column(
            'role',
            sa.Enum('OWNER', 'CARETAKER', name='ownership_role'),
            nullable=False,
            server_default='OWNER'
        ),
        sa.Column('share_bps', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('voting_power', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['owner_profile_id'],
            ['owner_profiles.id'],
            name='fk_ownerships_owner_profile_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_ownerships_property_id',
            ondelete='CASCADE'
        ),
        sa.UniqueConstraint('owner_profile_id', 'property_id', name='uq_ownerships_owner_profile_property'),
    )
    op.create_index('ix_ownerships_owner_profile_id', 'ownerships', ['owner_profile_id'])
    op.create_index('ix_ownerships_property_id', 'ownerships', ['property_id'])

    op.create_table(
        'memberships',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_profile_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.Column('role', membership_role, nullable=False, server_default='OWNER'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['owner_profile_id'],
            ['owner_profiles.id'],
            name='fk_memberships_owner_profile_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_memberships_property_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['user_id'],
            ['users.id'],
            name='fk_memberships_user_id',
            ondelete='SET NULL'
        ),
        # Natural key for membership upserts
        sa.UniqueConstraint('owner_profile_id', 'property_id', name='uq_memberships_owner_profile_property'),
    )
    op.create_index('ix_memberships_owner_profile_id', 'memberships', ['owner_profile_id'])
    op.create_index('ix_memberships_property_id', 'memberships', ['property_id'])
    op.create_index('ix_memberships_user_id', 'memberships', ['user_id'])

    op.create_table(
        'invites',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('token', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('owner_profile_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        # Type already created with the memberships table
        sa.Column(
            'role',
            postgresql.ENUM('OWNER', 'MANAGER', name='property_membership_role', create_type=False),
            nullable=False,
            server_default='OWNER'
        ),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'CLAIMED', 'REVOKED', name='invite_status'),
            nullable=False,
            server_default='PENDING'
        ),
        sa.Column('claimed_at', sa.DateTime(), nullable=True),
        sa.Column('claimed_by_id', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['owner_profile_id'],
            ['owner_profiles.id'],
            name='fk_invites_owner_profile_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_invites_property_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['claimed_by_id'],
            ['users.id'],
            name='fk_invites_claimed_by_id',
            ondelete='SET NULL'
        ),
        sa.UniqueConstraint('token', name='uq_invites_token'),
    )
    op.create_index('ix_invites_owner_profile_id', 'invites', ['owner_profile_id'])
    op.create_index('ix_invites_property_id', 'invites', ['property_id'])
    op.create_index('ix_invites_email', 'invites', ['email'])
    op.create_index('ix_invites_status', 'invites', ['status'])


def downgrade() -> None:
    """Drop the backfill tables."""
    op.drop_index('ix_invites_status', table_name='invites')
    op.drop_index('ix_invites_email', table_name='invites')
    op.drop_index('ix_invites_property_id', table_name='invites')
    op.drop_index('ix_invites_owner_profile_id', table_name='invites')
    op.drop_table('invites')

    op.drop_index('ix_memberships_user_id', table_name='memberships')
    op.drop_index('ix_memberships_property_id', table_name='memberships')
    op.drop_index('ix_memberships_owner_profile_id', table_name='memberships')
    op.drop_table('memberships')

    op.drop_index('ix_ownerships_property_id', table_name='ownerships')
    op.drop_index('ix_ownerships_owner_profile_id', table_name='ownerships')
    op.drop_table('ownerships')

    op.drop_index('ix_owner_profiles_user_id', table_name='owner_profiles')
    op.drop_index('ix_owner_profiles_email', table_name='owner_profiles')
    op.drop_table('owner_profiles')

    op.drop_table('properties')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    # Drop the enum types
    op.execute("DROP TYPE IF EXISTS invite_status")
    op.execute("DROP TYPE IF EXISTS property_membership_role")
    op.execute("DROP TYPE IF EXISTS ownership_role")
