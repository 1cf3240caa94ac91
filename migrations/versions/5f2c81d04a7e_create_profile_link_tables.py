"""create_profile_link_tables

Revision ID: 5f2c81d04a7e
Revises:
Create Date: 2026-10-18 09:12:31.204417

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5f2c81d04a7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles, links and social_links tables with RLS."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=True),
        sa.Column('bio', sa.String(length=200), nullable=True),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('theme', sa.String(length=10), nullable=False, server_default='light'),
        sa.Column('background_style', sa.String(length=10), nullable=False, server_default='solid'),
        sa.Column('background_color', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("theme IN ('light', 'dark', 'auto')", name='ck_profiles_theme'),
        sa.CheckConstraint(
            "background_style IN ('solid', 'gradient', 'dots')",
            name='ck_profiles_background_style',
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
        sa.UniqueConstraint('username'),
    )
    # Public page lookups are case-insensitive
    op.execute("CREATE INDEX ix_profiles_username_lower ON profiles (lower(username));")

    op.create_table('links',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('type', sa.String(length=10), nullable=False, server_default='link'),
        sa.Column('link_type', sa.String(length=20), nullable=True, server_default='website'),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('currency', sa.String(length=3), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('gradient_style', sa.String(length=20), nullable=False, server_default='none'),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('clicks', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("type IN ('link', 'product')", name='ck_links_type'),
        sa.CheckConstraint('price IS NULL OR price >= 0', name='ck_links_price_non_negative'),
        sa.CheckConstraint('position >= 0', name='ck_links_position_non_negative'),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_links_profile_id', 'links', ['profile_id'], unique=False)
    op.create_index('ix_links_profile_position', 'links', ['profile_id', 'position'], unique=False)

    op.create_table('social_links',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('platform', sa.String(length=50), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_social_links_profile_id', 'social_links', ['profile_id'], unique=False)

    for table in ('profiles', 'links', 'social_links'):
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    # Profiles: anyone can read, only the owner can write
    op.execute("""
        CREATE POLICY profiles_select ON profiles
            FOR SELECT USING (true);
    """)
    op.execute("""
        CREATE POLICY profiles_insert ON profiles
            FOR INSERT WITH CHECK (user_id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY profiles_update ON profiles
            FOR UPDATE USING (user_id = (SELECT auth.uid()));
    """)

    # Links: active links are public, the owner sees and edits everything
    op.execute("""
        CREATE POLICY links_select ON links
            FOR SELECT USING (
                is_active
                OR profile_id IN (SELECT id FROM profiles WHERE user_id = (SELECT auth.uid()))
            );
    """)
    op.execute("""
        CREATE POLICY links_write ON links
            FOR ALL USING (
                profile_id IN (SELECT id FROM profiles WHERE user_id = (SELECT auth.uid()))
            );
    """)

    op.execute("""
        CREATE POLICY social_links_select ON social_links
            FOR SELECT USING (true);
    """)
    op.execute("""
        CREATE POLICY social_links_write ON social_links
            FOR ALL USING (
                profile_id IN (SELECT id FROM profiles WHERE user_id = (SELECT auth.uid()))
            );
    """)


def downgrade() -> None:
    """Drop social_links, links and profiles."""
    for table, policies in (
        ('social_links', ('social_links_write', 'social_links_select')),
        ('links', ('links_write', 'links_select')),
        ('profiles', ('profiles_update', 'profiles_insert', 'profiles_select')),
    ):
        for policy in policies:
            op.execute(f"DROP POLICY IF EXISTS {policy} ON {table};")

    op.drop_index('ix_social_links_profile_id', table_name='social_links')
    op.drop_table('social_links')
    op.drop_index('ix_links_profile_position', table_name='links')
    op.drop_index('ix_links_profile_id', table_name='links')
    op.drop_table('links')
    op.execute("DROP INDEX IF EXISTS ix_profiles_username_lower;")
    op.drop_table('profiles')
