"""create_gym_collections

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema - Create the gym collections."""

    user_role_enum = sa.Enum('admin', 'trainer', name='user_role_enum')
    check_in_method_enum = sa.Enum('qr', 'manual', name='check_in_method_enum')
    payment_status_enum = sa.Enum(
        'pending', 'completed', 'failed', 'refunded', name='payment_status_enum'
    )

    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('role', user_role_enum, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'packages',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('features', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'members',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('member_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=False),
        sa.Column('package_id', sa.Uuid(), nullable=False),
        sa.Column('package_name', sa.String(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expiry_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_members_member_id', 'members', ['member_id'])
    op.create_index('ix_members_package_id', 'members', ['package_id'])
    op.create_index('ix_members_expiry_date', 'members', ['expiry_date'])

    op.create_table(
        'trainers',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('specialization', sa.String(), nullable=False),
        sa.Column('bio', sa.Text(), nullable=False),
        sa.Column('hourly_rate', sa.Float(), nullable=False),
        sa.Column('availability', sa.JSON(), nullable=False),
        sa.Column('avatar', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('join_date', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_trainers_user_id', 'trainers', ['user_id'])
    op.create_index('ix_trainers_is_active', 'trainers', ['is_active'])

    op.create_table(
        'classes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('trainer_id', sa.Uuid(), nullable=False),
        sa.Column('class_name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('start_time', sa.String(length=5), nullable=False),
        sa.Column('end_time', sa.String(length=5), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('enrolled', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('is_recurring', sa.Boolean(), nullable=True),
        sa.Column('recurring_days', sa.JSON(), nullable=True),
        sa.Column('created_by', sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_classes_trainer_id', 'classes', ['trainer_id'])
    op.create_index('ix_classes_date', 'classes', ['date'])

    op.create_table(
        'attendance',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('member_id', sa.Uuid(), nullable=False),
        sa.Column('member_name', sa.String(), nullable=True),
        sa.Column('member_id_number', sa.String(), nullable=True),
        sa.Column('class_id', sa.Uuid(), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('check_in_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('check_out_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('check_in_method', check_in_method_enum, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_attendance_member_id', 'attendance', ['member_id'])
    op.create_index('ix_attendance_class_id', 'attendance', ['class_id'])
    op.create_index('ix_attendance_date', 'attendance', ['date'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('member_id', sa.Uuid(), nullable=False),
        sa.Column('package_id', sa.Uuid(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('payment_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('payment_method', sa.String(length=32), nullable=False),
        sa.Column('transaction_id', sa.String(), nullable=True),
        sa.Column('status', payment_status_enum, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_payments_member_id', 'payments', ['member_id'])
    op.create_index('ix_payments_package_id', 'payments', ['package_id'])
    op.create_index('ix_payments_payment_date', 'payments', ['payment_date'])


def downgrade() -> None:
    """Downgrade schema - Drop the gym collections."""
    for table in ('payments', 'attendance', 'classes', 'trainers', 'members', 'packages', 'users'):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_name in ('payment_status_enum', 'check_in_method_enum', 'user_role_enum'):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)
