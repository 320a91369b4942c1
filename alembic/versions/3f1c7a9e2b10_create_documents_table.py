"""Create documents table for owner-scoped entity collections

Revision ID: 3f1c7a9e2b10
Revises:
Create Date: 2026-10-12 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c7a9e2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the documents table."""
    op.create_table(
        'documents',
        sa.Column('path', sa.String(length=1024), nullable=False),
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('owner_id', sa.String(length=255), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('path', 'id'),
    )
    op.create_index('ix_documents_owner_path', 'documents', ['owner_id', 'path'], unique=False)


def downgrade() -> None:
    """Drop the documents table."""
    op.drop_index('ix_documents_owner_path', table_name='documents')
    op.drop_table('documents')
