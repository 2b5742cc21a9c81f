"""create_countries_and_registrations

Revision ID: create_countries_registrations
Revises:
Create Date: 2025-01-15 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'create_countries_registrations'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('countries',
        sa.Column('country_code', sa.String(length=10), nullable=False),
        sa.Column('country_name', sa.String(length=100), nullable=False),
        sa.Column('count', sa.Integer(), server_default='1', nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint('count >= 0', name='ck_countries_count_non_negative'),
        sa.PrimaryKeyConstraint('country_code')
    )

    op.create_table('registrations',
        sa.Column('id', sa.BigInteger().with_variant(sa.Integer(), 'sqlite'), autoincrement=True, nullable=False),
        sa.Column('nullifier', sa.String(length=255), nullable=False),
        sa.Column('country_code', sa.String(length=10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['country_code'], ['countries.country_code']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('nullifier')
    )
    op.create_index(op.f('ix_registrations_country_code'), 'registrations', ['country_code'], unique=False)

def downgrade():
    op.drop_index(op.f('ix_registrations_country_code'), table_name='registrations')
    op.drop_table('registrations')
    op.drop_table('countries')
