"""Create nodes table

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'nodes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('code', sa.String(50), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('city_id', sa.Integer(), nullable=True),
        sa.Column('is_tollbooth', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_nodes_city_id', 'nodes', ['city_id'])
    op.create_index('ix_nodes_deleted_at', 'nodes', ['deleted_at'])


def downgrade() -> None:
    op.drop_index('ix_nodes_deleted_at', table_name='nodes')
    op.drop_index('ix_nodes_city_id', table_name='nodes')
    op.drop_table('nodes')
