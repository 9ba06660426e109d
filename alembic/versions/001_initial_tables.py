"""Initial tables: sports, competitions, participants, events, event participants, standings

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Sports
    op.create_table(
        'sports',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('key', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('key'),
    )

    # Competitions
    op.create_table(
        'competitions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sport_id', sa.Integer(), nullable=False),
        sa.Column('external_id', sa.String(length=100), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('format', sa.String(length=50), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['sport_id'], ['sports.id']),
        sa.UniqueConstraint('sport_id', 'external_id', name='uq_competitions_sport_external'),
    )
    op.create_index('ix_competitions_sport_id', 'competitions', ['sport_id'])

    # Participants (teams, drivers, constructors)
    op.create_table(
        'participants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sport_id', sa.Integer(), nullable=False),
        sa.Column('external_id', sa.String(length=100), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('participant_type', sa.String(length=20), nullable=False),
        sa.Column('short_name', sa.String(length=50), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['sport_id'], ['sports.id']),
        sa.UniqueConstraint('sport_id', 'external_id', name='uq_participants_sport_external'),
    )
    op.create_index('ix_participants_sport_id', 'participants', ['sport_id'])

    # Events
    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sport_id', sa.Integer(), nullable=False),
        sa.Column('competition_id', sa.Integer(), nullable=False),
        sa.Column('external_id', sa.String(length=100), nullable=True),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.Column('round', sa.String(length=20), nullable=True),
        sa.Column('stage', sa.String(length=50), nullable=True),
        sa.Column('starts_at_utc', sa.DateTime(timezone=True), nullable=False),
        sa.Column('venue', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('metadata', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['sport_id'], ['sports.id']),
        sa.ForeignKeyConstraint(['competition_id'], ['competitions.id']),
        sa.UniqueConstraint('competition_id', 'external_id', name='uq_events_competition_external'),
    )
    op.create_index('ix_events_sport_id', 'events', ['sport_id'])
    op.create_index('ix_events_competition_id', 'events', ['competition_id'])
    op.create_index('ix_events_season', 'events', ['season'])

    # Event participants
    op.create_table(
        'event_participants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('participant_id', sa.Integer(), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('score', sa.Integer(), nullable=True),
        sa.Column('result_position', sa.Integer(), nullable=True),
        sa.Column('outcome', sa.String(length=10), nullable=True),
        sa.Column('metadata', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['participant_id'], ['participants.id']),
        sa.UniqueConstraint(
            'event_id', 'participant_id', 'role',
            name='uq_event_participants_event_participant_role',
        ),
    )
    op.create_index('ix_event_participants_event_id', 'event_participants', ['event_id'])
    op.create_index('ix_event_participants_participant_id', 'event_participants', ['participant_id'])

    # Standings
    op.create_table(
        'standings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('competition_id', sa.Integer(), nullable=False),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.Column('participant_id', sa.Integer(), nullable=False),
        sa.Column('rank', sa.Integer(), nullable=False),
        sa.Column('points', sa.Float(), nullable=False, server_default='0'),
        sa.Column('played', sa.Integer(), nullable=True),
        sa.Column('wins', sa.Integer(), nullable=True),
        sa.Column('draws', sa.Integer(), nullable=True),
        sa.Column('losses', sa.Integer(), nullable=True),
        sa.Column('scored', sa.Integer(), nullable=True),
        sa.Column('conceded', sa.Integer(), nullable=True),
        sa.Column('diff', sa.Integer(), nullable=True),
        sa.Column('metadata', postgresql.JSONB(), nullable=False, server_default='{}'),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['competition_id'], ['competitions.id']),
        sa.ForeignKeyConstraint(['participant_id'], ['participants.id']),
        sa.UniqueConstraint(
            'competition_id', 'season', 'participant_id',
            name='uq_standings_competition_season_participant',
        ),
    )
    op.create_index('ix_standings_competition_id', 'standings', ['competition_id'])


def downgrade() -> None:
    op.drop_index('ix_standings_competition_id', table_name='standings')
    op.drop_table('standings')
    op.drop_index('ix_event_participants_participant_id', table_name='event_participants')
    op.drop_index('ix_event_participants_event_id', table_name='event_participants')
    op.drop_table('event_participants')
    op.drop_index('ix_events_season', table_name='events')
    op.drop_index('ix_events_competition_id', table_name='events')
    op.drop_index('ix_events_sport_id', table_name='events')
    op.drop_table('events')
    op.drop_index('ix_participants_sport_id', table_name='participants')
    op.drop_table('participants')
    op.drop_index('ix_competitions_sport_id', table_name='competitions')
    op.drop_table('competitions')
    op.drop_table('sports')
