"""Create files table

Revision ID: initial_migration
Revises: 
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel

from core.models import new_uuid

# revision identifiers, used by Alembic.
revision: str = 'initial_migration'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'files',
        sa.Column('id', sa.Uuid(), server_default=new_uuid(), nullable=False),
        sa.Column(
            'url',
            sqlmodel.sql.sqltypes.AutoString(length=2000),
            nullable=False
        ),
        sa.Column(
            'is_confirmed',
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        op.f('ix_files_deleted_at'),
        'files',
        ['deleted_at'],
        unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f('ix_files_deleted_at'), table_name='files')
    op.drop_table('files')
