"""Initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Artists table
    op.create_table(
        'artists',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('image_path', sa.String(1000)),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_artist_name')
    )
    op.create_index('ix_artists_id', 'artists', ['id'])
    op.create_index('ix_artists_name', 'artists', ['name'])

    # Albums table
    op.create_table(
        'albums',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('year', sa.Integer()),
        sa.Column('cover_path', sa.String(1000)),
        sa.Column('artist_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['artist_id'], ['artists.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('artist_id', 'title', name='uq_album_artist_title')
    )
    op.create_index('ix_albums_id', 'albums', ['id'])
    op.create_index('ix_albums_title', 'albums', ['title'])
    op.create_index('ix_albums_artist_id', 'albums', ['artist_id'])

    # Songs table
    op.create_table(
        'songs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('duration', sa.Float(), default=0.0),
        sa.Column('file_path', sa.String(1000), nullable=False),
        sa.Column('date_added', sa.DateTime(), nullable=False),
        sa.Column('is_liked', sa.Boolean(), nullable=False, default=False),
        sa.Column('artist_id', sa.Integer(), nullable=True),
        sa.Column('album_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['artist_id'], ['artists.id']),
        sa.ForeignKeyConstraint(['album_id'], ['albums.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('file_path', name='uq_song_file_path')
    )
    op.create_index('ix_songs_id', 'songs', ['id'])
    op.create_index('ix_songs_title', 'songs', ['title'])
    op.create_index('ix_songs_date_added', 'songs', ['date_added'])
    op.create_index('ix_songs_artist_id', 'songs', ['artist_id'])
    op.create_index('ix_songs_album_id', 'songs', ['album_id'])

    # Playlists
    op.create_table(
        'playlists',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_playlists_id', 'playlists', ['id'])

    op.create_table(
        'playlist_songs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('playlist_id', sa.Integer(), nullable=False),
        sa.Column('song_id', sa.Integer(), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False, default=0),
        sa.ForeignKeyConstraint(['playlist_id'], ['playlists.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['song_id'], ['songs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_playlist_songs_id', 'playlist_songs', ['id'])


def downgrade() -> None:
    op.drop_table('playlist_songs')
    op.drop_table('playlists')
    op.drop_table('songs')
    op.drop_table('albums')
    op.drop_table('artists')
