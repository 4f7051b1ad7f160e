"""Initial migration - create reports, admins and report_events

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create reports table
    op.create_table(
        'reports',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tracking_code', sa.String(length=8), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('photo_url', sa.String(length=500), nullable=True),
        sa.Column('has_location', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('neighborhood', sa.String(length=100), nullable=True),
        sa.Column('reporter_name', sa.String(length=255), nullable=True),
        sa.Column('reporter_email', sa.String(length=255), nullable=True),
        sa.Column('reporter_phone', sa.String(length=50), nullable=True),
        sa.Column('status', sa.Enum('NEW', 'IN_PROGRESS', 'RESOLVED', name='reportstatus'), nullable=False),
        sa.Column('admin_note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_reports_tracking_code', 'reports', ['tracking_code'], unique=True)
    op.create_index('ix_reports_neighborhood', 'reports', ['neighborhood'], unique=False)
    op.create_index('ix_reports_status', 'reports', ['status'], unique=False)

    # Create admins table
    op.create_table(
        'admins',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('is_super_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['admins.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_admins_email', 'admins', ['email'], unique=True)

    # Create report_events table
    op.create_table(
        'report_events',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('report_id', sa.Integer(), nullable=False),
        sa.Column('event_type', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('payload', sa.JSON(), nullable=True),
        sa.Column('created_by', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['report_id'], ['reports.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_report_events_report_id', 'report_events', ['report_id'], unique=False)
    op.create_index('ix_report_events_event_type', 'report_events', ['event_type'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_report_events_event_type', table_name='report_events')
    op.drop_index('ix_report_events_report_id', table_name='report_events')
    op.drop_table('report_events')

    op.drop_index('ix_admins_email', table_name='admins')
    op.drop_table('admins')

    op.drop_index('ix_reports_status', table_name='reports')
    op.drop_index('ix_reports_neighborhood', table_name='reports')
    op.drop_index('ix_reports_tracking_code', table_name='reports')
    op.drop_table('reports')

    sa.Enum(name='reportstatus').drop(op.get_bind(), checkfirst=True)
