"""Playlist models (data shape only)."""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from songvault.database import Base


class Playlist(Base):
    """User-curated list of songs."""

    __tablename__ = "playlists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    entries = relationship(
        "PlaylistSong",
        back_populates="playlist",
        lazy="dynamic",
        order_by="PlaylistSong.order_index",
    )

    def __repr__(self):
        return f"<Playlist {self.name}>"


class PlaylistSong(Base):
    """Position of a song within a playlist."""

    __tablename__ = "playlist_songs"

    id = Column(Integer, primary_key=True, index=True)
    playlist_id = Column(Integer, ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False)
    song_id = Column(Integer, ForeignKey("songs.id", ondelete="CASCADE"), nullable=False)
    order_index = Column(Integer, nullable=False, default=0)

    playlist = relationship("Playlist", back_populates="entries")
    song = relationship("Song")

    def __repr__(self):
        return f"<PlaylistSong {self.playlist_id}:{self.order_index}>"
