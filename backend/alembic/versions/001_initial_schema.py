"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

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
    op.execute("CREATE TYPE deliverytype AS ENUM ('AEM_EDGE', 'AEM_CS', 'OTHER')")

    op.create_table(
        'sites',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('base_url', sa.String(2048), nullable=False),
        sa.Column('name', sa.String(255)),
        sa.Column('delivery_type', postgresql.ENUM('AEM_EDGE', 'AEM_CS', 'OTHER',
                                                   name='deliverytype', create_type=False),
                  nullable=False, server_default='OTHER'),
        sa.Column('is_live', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('config', postgresql.JSONB, nullable=False,
                  server_default='{"slack": {}, "handlers": {}}'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(),
                  nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(),
                  nullable=False),
    )
    op.create_index('ix_sites_id', 'sites', ['id'])
    op.create_index('ix_sites_base_url', 'sites', ['base_url'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_sites_base_url', table_name='sites')
    op.drop_index('ix_sites_id', table_name='sites')
    op.drop_table('sites')
    op.execute("DROP TYPE deliverytype")
