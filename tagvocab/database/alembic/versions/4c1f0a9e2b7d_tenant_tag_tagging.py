"""tenant, tag and tagging

Revision ID: 4c1f0a9e2b7d
Revises:
Create Date: 2026-10-19 10:12:31.204118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '4c1f0a9e2b7d'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _service_object_columns() -> list:
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
        sa.Column('data_origin', sa.Text(), nullable=True),
        sa.Column('meta_data', sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql'), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'tenant',
        *_service_object_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tenant')),
        sa.UniqueConstraint('name', name='uq_tenant_name'),
    )
    op.create_table(
        'tag',
        *_service_object_columns(),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('name_key', sa.String(length=510), nullable=False),
        sa.Column('taggings_count', sa.Integer(), server_default='0', nullable=False),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenant.id'],
                                name=op.f('fk_tag_tenant_id_tenant'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tag')),
        sa.UniqueConstraint('tenant_id', 'name_key', name='uq_tag_tenant_name_key'),
    )
    op.create_index('ix_tag_tenant_taggings_count', 'tag', ['tenant_id', 'taggings_count'], unique=False)
    op.create_table(
        'tagging',
        *_service_object_columns(),
        sa.Column('tag_id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('taggable_type', sa.String(length=128), nullable=False),
        sa.Column('taggable_id', sa.Uuid(), nullable=False),
        sa.Column('context', sa.String(length=128), server_default='tags', nullable=False),
        sa.ForeignKeyConstraint(['tag_id'], ['tag.id'],
                                name=op.f('fk_tagging_tag_id_tag'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenant.id'],
                                name=op.f('fk_tagging_tenant_id_tenant'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_tagging')),
        sa.UniqueConstraint('tag_id', 'taggable_type', 'taggable_id', 'context',
                            name='uq_tagging_tag_taggable_context'),
    )
    op.create_index('ix_tagging_taggable', 'tagging', ['taggable_type', 'taggable_id'], unique=False)
    op.create_index('ix_tagging_context', 'tagging', ['context'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_tagging_context', table_name='tagging')
    op.drop_index('ix_tagging_taggable', table_name='tagging')
    op.drop_table('tagging')
    op.drop_index('ix_tag_tenant_taggings_count', table_name='tag')
    op.drop_table('tag')
    op.drop_table('tenant')
