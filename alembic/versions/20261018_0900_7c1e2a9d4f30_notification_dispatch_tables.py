"""notification dispatch tables

Revision ID: 7c1e2a9d4f30
Revises:
Create Date: 2026-10-18 09:00:00.000000+00:00

"""
from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '7c1e2a9d4f30'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _created_at() -> sa.Column:
    return sa.Column(
        'created_at',
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
        comment='Timestamp of record creation',
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        'updated_at',
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
        comment='Timestamp of last update',
    )


def _uuid_pk() -> sa.Column:
    return sa.Column(
        'id',
        sa.Uuid(),
        nullable=False,
        comment='UUID v7 primary key (time-sortable)',
    )


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        'profiles',
        sa.Column(
            'id',
            sa.String(length=255),
            nullable=False,
            comment='Recipient identity (auth user id)',
        ),
        sa.Column('email', sa.String(length=320), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_profiles')),
    )

    op.create_table(
        'patient_accounts',
        _uuid_pk(),
        sa.Column(
            'user_id',
            sa.String(length=255),
            nullable=False,
            comment='Recipient identity of the patient',
        ),
        sa.Column(
            'practice_id',
            sa.String(length=255),
            nullable=True,
            comment='Owning practice (organization)',
        ),
        sa.Column(
            'phone',
            sa.String(length=32),
            nullable=True,
            comment='Phone captured at intake; fallback when the profile has none',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_patient_accounts')),
    )
    op.create_index(
        op.f('ix_patient_accounts_user_id'), 'patient_accounts', ['user_id'], unique=True
    )
    op.create_index(
        op.f('ix_patient_accounts_practice_id'), 'patient_accounts', ['practice_id'], unique=False
    )

    op.create_table(
        'practice_accounts',
        _uuid_pk(),
        sa.Column(
            'user_id',
            sa.String(length=255),
            nullable=False,
            comment='Recipient identity of the practice member',
        ),
        sa.Column(
            'practice_id',
            sa.String(length=255),
            nullable=True,
            comment='Practice (organization) the member belongs to',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_practice_accounts')),
    )
    op.create_index(
        op.f('ix_practice_accounts_user_id'), 'practice_accounts', ['user_id'], unique=True
    )
    op.create_index(
        op.f('ix_practice_accounts_practice_id'), 'practice_accounts', ['practice_id'], unique=False
    )

    op.create_table(
        'notification_preferences',
        _uuid_pk(),
        sa.Column('user_id', sa.String(length=255), nullable=False, comment='Recipient identity'),
        sa.Column(
            'event_type',
            sa.String(length=100),
            nullable=False,
            comment='Canonical preference key (e.g. appointment_reminders)',
        ),
        sa.Column('email_enabled', sa.Boolean(), nullable=False),
        sa.Column('sms_enabled', sa.Boolean(), nullable=False),
        sa.Column('in_app_enabled', sa.Boolean(), nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_notification_preferences')),
        sa.UniqueConstraint(
            'user_id', 'event_type', name=op.f('uq_notification_preferences_user_id')
        ),
    )
    op.create_index(
        op.f('ix_notification_preferences_user_id'),
        'notification_preferences',
        ['user_id'],
        unique=False,
    )

    op.create_table(
        'practice_automation_settings',
        _uuid_pk(),
        sa.Column(
            'practice_id',
            sa.String(length=255),
            nullable=False,
            comment='Practice (organization) identity',
        ),
        sa.Column('enable_email_notifications', sa.Boolean(), nullable=False),
        sa.Column('enable_sms_notifications', sa.Boolean(), nullable=False),
        _created_at(),
        _updated_at(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_practice_automation_settings')),
        sa.UniqueConstraint(
            'practice_id', name=op.f('uq_practice_automation_settings_practice_id')
        ),
    )

    op.create_table(
        'notifications',
        _uuid_pk(),
        sa.Column('user_id', sa.String(length=255), nullable=False, comment='Recipient identity'),
        sa.Column(
            'notification_type',
            sa.String(length=100),
            nullable=False,
            comment='Event kind as supplied by the caller',
        ),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('severity', sa.String(length=20), nullable=False),
        sa.Column(
            'metadata',
            postgresql.JSONB(astext_type=sa.Text()).with_variant(sa.JSON(), 'sqlite'),
            nullable=False,
            comment='Caller-supplied metadata',
        ),
        sa.Column('action_url', sa.String(length=2048), nullable=True),
        sa.Column('entity_type', sa.String(length=100), nullable=True),
        sa.Column('entity_id', sa.String(length=255), nullable=True),
        sa.Column('read', sa.Boolean(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_notifications')),
    )
    op.create_index(op.f('ix_notifications_user_id'), 'notifications', ['user_id'], unique=False)
    op.create_index('ix_notifications_user_id_read', 'notifications', ['user_id', 'read'], unique=False)
    op.create_index(
        'ix_notifications_entity', 'notifications', ['entity_type', 'entity_id'], unique=False
    )

    op.create_table(
        'notification_delivery_logs',
        _uuid_pk(),
        sa.Column(
            'notification_id',
            sa.Uuid(),
            nullable=True,
            comment='In-app notification of the same dispatch, when one was written',
        ),
        sa.Column(
            'user_id',
            sa.String(length=255),
            nullable=True,
            comment='Recipient identity; empty for guest deliveries',
        ),
        sa.Column('channel', sa.String(length=20), nullable=False, comment='email, sms, in_app'),
        sa.Column('status', sa.String(length=20), nullable=False, comment='sent, failed, skipped'),
        sa.Column('external_id', sa.String(length=255), nullable=True, comment='Provider message id'),
        sa.Column('error_message', sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(
            ['notification_id'],
            ['notifications.id'],
            name=op.f('fk_notification_delivery_logs_notification_id_notifications'),
            ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_notification_delivery_logs')),
    )
    op.create_index(
        op.f('ix_notification_delivery_logs_notification_id'),
        'notification_delivery_logs',
        ['notification_id'],
        unique=False,
    )
    op.create_index(
        op.f('ix_notification_delivery_logs_user_id'),
        'notification_delivery_logs',
        ['user_id'],
        unique=False,
    )
    op.create_index(
        'ix_notification_delivery_logs_channel_status',
        'notification_delivery_logs',
        ['channel', 'status'],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index('ix_notification_delivery_logs_channel_status', table_name='notification_delivery_logs')
    op.drop_index(op.f('ix_notification_delivery_logs_user_id'), table_name='notification_delivery_logs')
    op.drop_index(
        op.f('ix_notification_delivery_logs_notification_id'), table_name='notification_delivery_logs'
    )
    op.drop_table('notification_delivery_logs')
    op.drop_index('ix_notifications_entity', table_name='notifications')
    op.drop_index('ix_notifications_user_id_read', table_name='notifications')
    op.drop_index(op.f('ix_notifications_user_id'), table_name='notifications')
    op.drop_table('notifications')
    op.drop_table('practice_automation_settings')
    op.drop_index(op.f('ix_notification_preferences_user_id'), table_name='notification_preferences')
    op.drop_table('notification_preferences')
    op.drop_index(op.f('ix_practice_accounts_practice_id'), table_name='practice_accounts')
    op.drop_index(op.f('ix_practice_accounts_user_id'), table_name='practice_accounts')
    op.drop_table('practice_accounts')
    op.drop_index(op.f('ix_patient_accounts_practice_id'), table_name='patient_accounts')
    op.drop_index(op.f('ix_patient_accounts_user_id'), table_name='patient_accounts')
    op.drop_table('patient_accounts')
    op.drop_table('profiles')
