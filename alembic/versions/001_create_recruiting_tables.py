"""Create users, companies, positions and interviews tables

Revision ID: 001_create_recruiting_tables
Revises: 
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_create_recruiting_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the recruiting tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'companies',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('website', sa.String(length=2048), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('logo', sa.String(length=2048), nullable=True),
        sa.Column('company_size', sa.String(length=30), nullable=True),
        sa.Column('overview', sa.Text(), nullable=True),
        sa.Column('founded_year', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_companies_name', 'companies', ['name'], unique=True)

    op.create_table(
        'positions',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('responsibilities', sa.JSON(), nullable=False),
        sa.Column('requirements', sa.JSON(), nullable=False),
        sa.Column('skills', sa.JSON(), nullable=False),
        sa.Column('opening_positions', sa.Integer(), nullable=False),
        sa.Column('salary_min', sa.Integer(), nullable=True),
        sa.Column('salary_max', sa.Integer(), nullable=True),
        sa.Column('work_arrangement', sa.String(length=20), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('company_id', sa.String(length=32), nullable=False),
        sa.Column('interview_start', sa.DateTime(timezone=True), nullable=False),
        sa.Column('interview_end', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_positions_company_id', 'positions', ['company_id'])
    op.create_index('idx_positions_company_title', 'positions', ['company_id', 'title'])

    op.create_table(
        'interviews',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('user_id', sa.String(length=32), nullable=False),
        sa.Column('company_id', sa.String(length=32), nullable=False),
        sa.Column('position_id', sa.String(length=32), nullable=False),
        sa.Column('interview_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['company_id'], ['companies.id']),
        sa.ForeignKeyConstraint(['position_id'], ['positions.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_interviews_user_id', 'interviews', ['user_id'])
    op.create_index('ix_interviews_company_id', 'interviews', ['company_id'])
    op.create_index('ix_interviews_position_id', 'interviews', ['position_id'])
    op.create_index('idx_interviews_user_date', 'interviews', ['user_id', 'interview_date'])


def downgrade() -> None:
    """Drop the recruiting tables."""
    op.drop_index('idx_interviews_user_date', table_name='interviews')
    op.drop_index('ix_interviews_position_id', table_name='interviews')
    op.drop_index('ix_interviews_company_id', table_name='interviews')
    op.drop_index('ix_interviews_user_id', table_name='interviews')
    op.drop_table('interviews')

    op.drop_index('idx_positions_company_title', table_name='positions')
    op.drop_index('ix_positions_company_id', table_name='positions')
    op.drop_table('positions')

    op.drop_index('ix_companies_name', table_name='companies')
    op.drop_table('companies')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
