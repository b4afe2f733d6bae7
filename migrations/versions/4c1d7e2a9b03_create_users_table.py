"""create_users_table

Revision ID: 4c1d7e2a9b03
Revises:
Create Date: 2026-10-19 09:12:31.402817

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d7e2a9b03'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users table holding caregiver and client profiles."""
    op.create_table('users',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('external_auth_id', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('user_type', sa.String(length=20), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('display_name', sa.String(length=255), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('profile_photo_url', sa.String(length=500), nullable=True),
        sa.Column('primary_phone', sa.String(length=20), nullable=True),
        sa.Column('wechat_id', sa.String(length=100), nullable=True),
        sa.Column('wechat_qr_code_url', sa.String(length=500), nullable=True),
        sa.Column('xiaohongshu_handle', sa.String(length=100), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('province', sa.String(length=100), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True, server_default='China'),
        sa.Column('service_areas', sa.Text(), nullable=True),
        sa.Column('current_location', sa.String(length=255), nullable=True),
        sa.Column('willing_to_relocate', sa.Boolean(), nullable=True, server_default=sa.false()),
        sa.Column('years_of_experience', sa.Integer(), nullable=True),
        sa.Column('languages', sa.Text(), nullable=True),
        sa.Column('specializations', sa.Text(), nullable=True),
        sa.Column('certifications', sa.Text(), nullable=True),
        sa.Column('services_offered', sa.Text(), nullable=True),
        sa.Column('hourly_rate', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('about_me', sa.Text(), nullable=True),
        sa.Column('professional_experience', sa.Text(), nullable=True),
        sa.Column('education_background', sa.Text(), nullable=True),
        sa.Column('special_skills', sa.Text(), nullable=True),
        sa.Column('gallery_photos', sa.Text(), nullable=True),
        sa.Column('certificates_photos', sa.Text(), nullable=True),
        sa.Column('total_rating', sa.Numeric(precision=2, scale=1), nullable=False, server_default='0.0'),
        sa.Column('total_reviews', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('profile_completion_percentage', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('verification_status', sa.String(length=20), nullable=False, server_default='UNVERIFIED'),
        sa.Column('profile_views', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_active_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("user_type IN ('CAREGIVER', 'CLIENT', 'ADMIN')", name='ck_users_user_type'),
        sa.CheckConstraint(
            "verification_status IN ('UNVERIFIED', 'PENDING', 'VERIFIED')",
            name='ck_users_verification_status',
        ),
        sa.CheckConstraint(
            'profile_completion_percentage BETWEEN 0 AND 100',
            name='ck_users_completion_range',
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('external_auth_id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_users_user_type', 'users', ['user_type'], unique=False)
    op.create_index('ix_users_province', 'users', ['province'], unique=False)
    # Partial index for the caregiver search candidate scan
    op.create_index(
        'ix_users_active_caregivers',
        'users',
        ['is_featured', 'profile_completion_percentage'],
        unique=False,
        postgresql_where=sa.text("user_type = 'CAREGIVER' AND is_active"),
    )


def downgrade() -> None:
    """Drop the users table."""
    op.drop_index('ix_users_active_caregivers', table_name='users')
    op.drop_index('ix_users_province', table_name='users')
    op.drop_index('ix_users_user_type', table_name='users')
    op.drop_table('users')
