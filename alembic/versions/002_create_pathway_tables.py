"""Create pathway, pathway option and pathway option toll tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-18

At most one live default option per pathway and one toll per position are
enforced with unique indexes; the default index is partial so soft-deleted
options and non-default options do not collide.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Pathways table
    op.create_table(
        'pathways',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('origin_node_id', sa.Integer(), sa.ForeignKey('nodes.id'), nullable=False),
        sa.Column('destination_node_id', sa.Integer(), sa.ForeignKey('nodes.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('code', sa.String(50), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_sellable', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_empty_trip', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_pathways_origin_node_id', 'pathways', ['origin_node_id'])
    op.create_index('ix_pathways_destination_node_id', 'pathways', ['destination_node_id'])
    op.create_index('ix_pathways_active', 'pathways', ['active'])
    op.create_index('ix_pathways_deleted_at', 'pathways', ['deleted_at'])

    # Pathway options table
    op.create_table(
        'pathway_options',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('pathway_id', sa.Integer(), sa.ForeignKey('pathways.id'), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('distance_km', sa.Float(), nullable=True),
        sa.Column('typical_time_min', sa.Integer(), nullable=True),
        sa.Column('avg_speed_kmh', sa.Float(), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_pass_through', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('pass_through_time_min', sa.Integer(), nullable=True),
        sa.Column('sequence', sa.Integer(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_pathway_options_pathway_id', 'pathway_options', ['pathway_id'])
    op.create_index('ix_pathway_options_sequence', 'pathway_options', ['sequence'])
    op.create_index('ix_pathway_options_deleted_at', 'pathway_options', ['deleted_at'])
    op.create_index(
        'uq_pathway_options_single_default',
        'pathway_options',
        ['pathway_id'],
        unique=True,
        postgresql_where=sa.text('is_default = true AND deleted_at IS NULL'),
    )

    # Pathway option tolls table
    op.create_table(
        'pathway_option_tolls',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('pathway_option_id', sa.Integer(), sa.ForeignKey('pathway_options.id'), nullable=False),
        sa.Column('node_id', sa.Integer(), sa.ForeignKey('nodes.id'), nullable=False),
        sa.Column('sequence', sa.Integer(), nullable=False),
        sa.Column('pass_time_min', sa.Integer(), nullable=False),
        sa.Column('distance', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
    )
    op.create_index('ix_pathway_option_tolls_pathway_option_id', 'pathway_option_tolls', ['pathway_option_id'])
    op.create_index('ix_pathway_option_tolls_node_id', 'pathway_option_tolls', ['node_id'])
    op.create_index(
        'uq_pathway_option_tolls_option_sequence',
        'pathway_option_tolls',
        ['pathway_option_id', 'sequence'],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index('uq_pathway_option_tolls_option_sequence', table_name='pathway_option_tolls')
    op.drop_index('ix_pathway_option_tolls_node_id', table_name='pathway_option_tolls')
    op.drop_index('ix_pathway_option_tolls_pathway_option_id', table_name='pathway_option_tolls')
    op.drop_table('pathway_option_tolls')

    op.drop_index('uq_pathway_options_single_default', table_name='pathway_options')
    op.drop_index('ix_pathway_options_deleted_at', table_name='pathway_options')
    op.drop_index('ix_pathway_options_sequence', table_name='pathway_options')
    op.drop_index('ix_pathway_options_pathway_id', table_name='pathway_options')
    op.drop_table('pathway_options')

    op.drop_index('ix_pathways_deleted_at', table_name='pathways')
    op.drop_index('ix_pathways_active', table_name='pathways')
    op.drop_index('ix_pathways_destination_node_id', table_name='pathways')
    op.drop_index('ix_pathways_origin_node_id', table_name='pathways')
    op.drop_table('pathways')
