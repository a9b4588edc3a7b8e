"""Add feedback.submission_id and feedback_analytics

Revision ID: 002_add_submission_grouping
Revises: 001_initial_schema
Create Date: 2026-09-20 09:30:00.000000

Rows inserted before this revision keep submission_id NULL and are grouped
by (event_id, created_at, respondent) when read.
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002_add_submission_grouping'
down_revision = '001_initial_schema'
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.add_column('feedback', sa.Column('submission_id', sa.String(length=36), nullable=True))
    op.create_index('ix_feedback_submission_id', 'feedback', ['submission_id'])

    op.create_table('feedback_analytics',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('event_title', sa.String(length=200), nullable=True),
        sa.Column('total_feedback', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('avg_rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('positive_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('neutral_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('negative_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_feedback_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('refreshed_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_feedback_analytics_id', 'feedback_analytics', ['id'])
    op.create_index('ix_feedback_analytics_event_id', 'feedback_analytics', ['event_id'], unique=True)

def downgrade() -> None:
    op.drop_index('ix_feedback_analytics_event_id', table_name='feedback_analytics')
    op.drop_index('ix_feedback_analytics_id', table_name='feedback_analytics')
    op.drop_table('feedback_analytics')

    op.drop_index('ix_feedback_submission_id', table_name='feedback')
    op.drop_column('feedback', 'submission_id')
