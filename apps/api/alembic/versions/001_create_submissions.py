"""create submissions table

Revision ID: 001
Revises:
Create Date: 2025-09-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'submissions',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('character', sa.Text(), server_default='Deniusth', nullable=False),
        sa.Column('username', sa.Text(), nullable=False),
        sa.Column('cause', sa.Text(), nullable=False),
        sa.Column('probability', sa.Integer(), nullable=False),
        sa.Column('era', sa.Text(), server_default='AF', nullable=False),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('month_index', sa.Integer(), nullable=False),
        sa.Column('month_name', sa.Text(), nullable=False),
        sa.Column('day_of_month', sa.Integer(), nullable=False),
        sa.Column('day_of_week_index', sa.Integer(), nullable=False),
        sa.Column('day_of_week_name', sa.Text(), nullable=False),
        sa.CheckConstraint('probability >= 0 AND probability <= 100', name='ck_submissions_probability'),
        sa.CheckConstraint('year BETWEEN 0 AND 100000', name='ck_submissions_year'),
        sa.CheckConstraint('month_index BETWEEN 1 AND 16', name='ck_submissions_month_index'),
        sa.CheckConstraint('day_of_month BETWEEN 1 AND 32', name='ck_submissions_day_of_month'),
        sa.CheckConstraint('day_of_week_index BETWEEN 1 AND 8', name='ck_submissions_day_of_week_index'),
    )
    op.create_index('idx_submissions_character', 'submissions', ['character'])
    op.create_index('idx_submissions_month', 'submissions', ['month_index'])
    op.create_index('idx_submissions_created', 'submissions', [sa.text('created_at DESC')])


def downgrade() -> None:
    op.drop_index('idx_submissions_created', table_name='submissions')
    op.drop_index('idx_submissions_month', table_name='submissions')
    op.drop_index('idx_submissions_character', table_name='submissions')
    op.drop_table('submissions')
