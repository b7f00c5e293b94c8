"""initial

Revision ID: 001
Revises:
Create Date: 2024-05-22 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Content object index
    op.create_table('content_objects',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('obj_class', sa.String(length=100), nullable=False),
        sa.Column('type_facet', sa.String(length=100), nullable=True),
        sa.Column('display', sa.String(length=20), nullable=True),
        sa.Column('permalink', sa.String(length=255), nullable=True),
        sa.Column('search_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('brand_name', sa.String(length=255), nullable=True),
        sa.Column('internal_description', sa.Text(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('keywords', sa.Text(), nullable=True),
        sa.Column('subject', sa.Text(), nullable=True),
        sa.Column('body', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_content_objects_obj_class'), 'content_objects', ['obj_class'], unique=False)
    op.create_index(op.f('ix_content_objects_type_facet'), 'content_objects', ['type_facet'], unique=False)
    op.create_index(op.f('ix_content_objects_permalink'), 'content_objects', ['permalink'], unique=False)

    # Object references (article -> author role -> author)
    op.create_table('content_links',
        sa.Column('source_id', sa.String(length=32), nullable=False),
        sa.Column('target_id', sa.String(length=32), nullable=False),
        sa.ForeignKeyConstraint(['source_id'], ['content_objects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['target_id'], ['content_objects.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('source_id', 'target_id')
    )
    op.create_index('idx_content_links_target', 'content_links', ['target_id'], unique=False)

    # Search synonyms
    op.create_table('synonyms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('word', sa.String(length=255), nullable=False),
        sa.Column('synonym', postgresql.ARRAY(sa.Text()), server_default='{}', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_synonyms_word'), 'synonyms', ['word'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_synonyms_word'), table_name='synonyms')
    op.drop_table('synonyms')
    op.drop_index('idx_content_links_target', table_name='content_links')
    op.drop_table('content_links')
    op.drop_index(op.f('ix_content_objects_permalink'), table_name='content_objects')
    op.drop_index(op.f('ix_content_objects_type_facet'), table_name='content_objects')
    op.drop_index(op.f('ix_content_objects_obj_class'), table_name='content_objects')
    op.drop_table('content_objects')
