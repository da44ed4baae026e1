"""create pets, walks, walk_points

Revision ID: 3f2a9c1d7e44
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7e44'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'pets',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=60), nullable=False),
        sa.Column('species', sa.String(length=10), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('breed', sa.String(length=50), nullable=False),
        sa.Column('owner_id', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_pets_owner_id', 'pets', ['owner_id'])

    op.create_table(
        'walks',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('pet_id', sa.Uuid(), nullable=False),
        sa.Column('owner_id', sa.String(), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('finished_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('distance_m', sa.Float(), nullable=True),
        sa.Column('duration_s', sa.Integer(), nullable=True),
        sa.Column('avg_speed_kmh', sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(['pet_id'], ['pets.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_walks_pet_id', 'walks', ['pet_id'])
    # One active walk per pet
    op.create_index(
        'uq_walks_one_active_per_pet',
        'walks',
        ['pet_id'],
        unique=True,
        postgresql_where=sa.text('finished_at IS NULL'),
        sqlite_where=sa.text('finished_at IS NULL'),
    )

    op.create_table(
        'walk_points',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('walk_id', sa.Uuid(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('elevation', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['walk_id'], ['walks.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_walk_points_id', 'walk_points', ['id'])
    op.create_index('ix_walk_points_walk_id_timestamp', 'walk_points', ['walk_id', 'timestamp'])


def downgrade() -> None:
    op.drop_index('ix_walk_points_walk_id_timestamp', table_name='walk_points')
    op.drop_index('ix_walk_points_id', table_name='walk_points')
    op.drop_table('walk_points')
    op.drop_index('uq_walks_one_active_per_pet', table_name='walks')
    op.drop_index('ix_walks_pet_id', table_name='walks')
    op.drop_table('walks')
    op.drop_index('ix_pets_owner_id', table_name='pets')
    op.drop_table('pets')
