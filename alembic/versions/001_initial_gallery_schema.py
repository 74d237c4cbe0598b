"""Initial gallery schema

Revision ID: 001_initial_gallery_schema
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_gallery_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
    ]


def upgrade():
    # Create events table
    op.create_table('events',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('event_name', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_events_id'), 'events', ['id'], unique=False)
    op.create_index(op.f('ix_events_slug'), 'events', ['slug'], unique=True)

    # Create photos table
    op.create_table('photos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('filename', sa.String(length=255), nullable=False),
        sa.Column('url', sa.String(length=500), nullable=True),
        sa.Column('thumbnail_url', sa.String(length=500), nullable=True),
        sa.Column('type', sa.String(length=20), nullable=False, server_default='single'),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.Column('requires_token', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('comment_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('like_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('favorite_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('feedback_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('average_rating', sa.Float(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_photos_id'), 'photos', ['id'], unique=False)
    op.create_index(op.f('ix_photos_event_id'), 'photos', ['event_id'], unique=False)
    op.create_index(op.f('ix_photos_category_id'), 'photos', ['category_id'], unique=False)

    # Create event_feedback_settings table
    op.create_table('event_feedback_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('feedback_enabled', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('allow_ratings', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('allow_likes', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('allow_comments', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('allow_favorites', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('require_name_email', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('moderate_comments', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('show_feedback_to_guests', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id')
    )
    op.create_index(op.f('ix_event_feedback_settings_id'), 'event_feedback_settings', ['id'], unique=False)

    # Create photo_feedback table, one row per guest and type on a photo
    op.create_table('photo_feedback',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=False),
        sa.Column('photo_id', sa.Integer(), nullable=False),
        sa.Column('guest_identifier', sa.String(length=255), nullable=False),
        sa.Column('feedback_type', sa.String(length=20), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('comment_text', sa.Text(), nullable=True),
        sa.Column('guest_name', sa.String(length=255), nullable=True),
        sa.Column('guest_email', sa.String(length=255), nullable=True),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.String(length=500), nullable=True),
        sa.Column('is_approved', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_hidden', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['photo_id'], ['photos.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'event_id', 'photo_id', 'guest_identifier', 'feedback_type',
            name='uq_photo_feedback_guest_type'
        )
    )
    op.create_index(op.f('ix_photo_feedback_id'), 'photo_feedback', ['id'], unique=False)
    op.create_index(op.f('ix_photo_feedback_event_id'), 'photo_feedback', ['event_id'], unique=False)
    op.create_index(op.f('ix_photo_feedback_photo_id'), 'photo_feedback', ['photo_id'], unique=False)
    op.create_index(op.f('ix_photo_feedback_guest_identifier'), 'photo_feedback', ['guest_identifier'], unique=False)

    # Create activity_logs table
    op.create_table('activity_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('activity_type', sa.String(length=100), nullable=False),
        sa.Column('event_id', sa.Integer(), nullable=True),
        sa.Column('actor', sa.String(length=255), nullable=True),
        sa.Column('details', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_activity_logs_id'), 'activity_logs', ['id'], unique=False)
    op.create_index(op.f('ix_activity_logs_activity_type'), 'activity_logs', ['activity_type'], unique=False)
    op.create_index(op.f('ix_activity_logs_event_id'), 'activity_logs', ['event_id'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_activity_logs_event_id'), table_name='activity_logs')
    op.drop_index(op.f('ix_activity_logs_activity_type'), table_name='activity_logs')
    op.drop_index(op.f('ix_activity_logs_id'), table_name='activity_logs')
    op.drop_table('activity_logs')
    op.drop_index(op.f('ix_photo_feedback_guest_identifier'), table_name='photo_feedback')
    op.drop_index(op.f('ix_photo_feedback_photo_id'), table_name='photo_feedback')
    op.drop_index(op.f('ix_photo_feedback_event_id'), table_name='photo_feedback')
    op.drop_index(op.f('ix_photo_feedback_id'), table_name='photo_feedback')
    op.drop_table('photo_feedback')
    op.drop_index(op.f('ix_event_feedback_settings_id'), table_name='event_feedback_settings')
    op.drop_table('event_feedback_settings')
    op.drop_index(op.f('ix_photos_category_id'), table_name='photos')
    op.drop_index(op.f('ix_photos_event_id'), table_name='photos')
    op.drop_index(op.f('ix_photos_id'), table_name='photos')
    op.drop_table('photos')
    op.drop_index(op.f('ix_events_slug'), table_name='events')
    op.drop_index(op.f('ix_events_id'), table_name='events')
    op.drop_table('events')
