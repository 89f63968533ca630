"""create schools table

Revision ID: create_schools_table
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'create_schools_table'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    # create_all() may already have built the table on a fresh install
    conn = op.get_bind()
    if sa.inspect(conn).has_table('schools'):
        return

    op.create_table(
        'schools',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(length=255), nullable=True),
        sa.Column('state', sa.String(length=255), nullable=True),
        sa.Column('contact', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('image', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

def downgrade():
    op.drop_table('schools')
