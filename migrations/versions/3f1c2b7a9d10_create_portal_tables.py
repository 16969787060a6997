"""create portal tables

Revision ID: 3f1c2b7a9d10
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2b7a9d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp())
    )

    op.create_table(
        'assignments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('files', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp())
    )

    op.create_table(
        'resources',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('link', sa.String(length=2048), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp())
    )

    op.create_table(
        'weeks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('week_id', sa.String(length=50), nullable=False, unique=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('links', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp())
    )

    # comment parents are checked in application code, no foreign keys
    for table, parent_column in (
        ('assignment_comments', sa.Column('assignment_id', sa.Integer(), nullable=False)),
        ('resource_comments', sa.Column('resource_id', sa.Integer(), nullable=False)),
        ('week_comments', sa.Column('week_id', sa.String(length=50), nullable=False)),
    ):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), primary_key=True),
            parent_column,
            sa.Column('author', sa.String(length=100), nullable=False),
            sa.Column('text', sa.Text(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp())
        )
        op.create_index(f'ix_{table}_{parent_column.name}', table, [parent_column.name])


def downgrade():
    for table in ('week_comments', 'resource_comments', 'assignment_comments'):
        op.drop_table(table)
    op.drop_table('weeks')
    op.drop_table('resources')
    op.drop_table('assignments')
    op.drop_table('users')
