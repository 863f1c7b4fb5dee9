"""Initial schema: users, boards, members, ordered columns and tasks

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-19 10:12:44.512308

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('role', sa.Enum('ADMIN', 'USER', name='userrole'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'boards',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('owner_id', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_boards_owner_id', 'boards', ['owner_id'])

    op.create_table(
        'board_members',
        sa.Column('board_id', sa.String(length=50), nullable=False),
        sa.Column('user_id', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('board_id', 'user_id'),
        sa.UniqueConstraint('board_id', 'user_id', name='unique_board_member'),
    )

    op.create_table(
        'columns',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('board_id', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=25), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_columns_board_order', 'columns', ['board_id', 'order'])

    op.create_table(
        'tasks',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('column_id', sa.String(length=50), nullable=False),
        sa.Column('board_id', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('priority', sa.Enum('LOW', 'MEDIUM', 'HIGH', name='priority'), nullable=False),
        sa.Column('assignee_id', sa.String(length=50), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['assignee_id'], ['users.id']),
        sa.ForeignKeyConstraint(['board_id'], ['boards.id']),
        sa.ForeignKeyConstraint(['column_id'], ['columns.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tasks_board_id', 'tasks', ['board_id'])
    op.create_index('ix_tasks_column_order', 'tasks', ['column_id', 'order'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_tasks_column_order', table_name='tasks')
    op.drop_index('ix_tasks_board_id', table_name='tasks')
    op.drop_table('tasks')
    op.drop_index('ix_columns_board_order', table_name='columns')
    op.drop_table('columns')
    op.drop_table('board_members')
    op.drop_index('ix_boards_owner_id', table_name='boards')
    op.drop_table('boards')
    op.drop_table('users')
