"""create_hydrosleep_tables

Revision ID: f1a2b3c4d5e6
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = 'f1a2b3c4d5e6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('user',
        sa.Column('id', sqlmodel.sql.sqltypes.GUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('display_name', sa.String(), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('profile_image_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    op.create_table('goal',
        sa.Column('id', sqlmodel.sql.sqltypes.GUID(), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.GUID(), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('label', sa.String(), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_goal_user_id', 'goal', ['user_id'])

    op.create_table('waterlog',
        sa.Column('id', sqlmodel.sql.sqltypes.GUID(), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.GUID(), nullable=False),
        sa.Column('day', sa.Date(), nullable=False),
        sa.Column('amount_ml', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'day', name='uq_water_log_user_day'),
    )
    op.create_index('ix_waterlog_user_id', 'waterlog', ['user_id'])
    op.create_index('ix_waterlog_day', 'waterlog', ['day'])

    op.create_table('sleepentry',
        sa.Column('id', sqlmodel.sql.sqltypes.GUID(), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.GUID(), nullable=False),
        sa.Column('day', sa.Date(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('rested_percent', sa.Float(), nullable=False),
        sa.Column('rem_percent', sa.Float(), nullable=False),
        sa.Column('deep_sleep_percent', sa.Float(), nullable=False),
        sa.Column('notes', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'day', name='uq_sleep_entry_user_day'),
    )
    op.create_index('ix_sleepentry_user_id', 'sleepentry', ['user_id'])
    op.create_index('ix_sleepentry_day', 'sleepentry', ['day'])


def downgrade() -> None:
    op.drop_index('ix_sleepentry_day', table_name='sleepentry')
    op.drop_index('ix_sleepentry_user_id', table_name='sleepentry')
    op.drop_table('sleepentry')
    op.drop_index('ix_waterlog_day', table_name='waterlog')
    op.drop_index('ix_waterlog_user_id', table_name='waterlog')
    op.drop_table('waterlog')
    op.drop_index('ix_goal_user_id', table_name='goal')
    op.drop_table('goal')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_table('user')
