"""Create strava_activities table

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'strava_activities',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),

        # Partition
        sa.Column('athlete_id', sa.String(20), nullable=False),
        sa.Column('athlete_name', sa.String(255), nullable=True),

        # Identity within the partition
        sa.Column('strava_id', sa.BigInteger(), nullable=False),

        # Activity info
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('activity_type', sa.String(50), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),

        # Core metrics
        sa.Column('distance_m', sa.Float(), nullable=False),
        sa.Column('moving_time_s', sa.Integer(), nullable=False),
        sa.Column('avg_heartrate', sa.Float(), nullable=True),

        # Bookkeeping
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),

        sa.UniqueConstraint('athlete_id', 'strava_id', name='uq_strava_activities_athlete_strava'),
    )
    op.create_index('ix_strava_activities_athlete_id', 'strava_activities', ['athlete_id'])
    op.create_index(
        'ix_strava_activities_athlete_start',
        'strava_activities',
        ['athlete_id', 'start_date'],
    )


def downgrade() -> None:
    op.drop_index('ix_strava_activities_athlete_start', table_name='strava_activities')
    op.drop_index('ix_strava_activities_athlete_id', table_name='strava_activities')
    op.drop_table('strava_activities')
