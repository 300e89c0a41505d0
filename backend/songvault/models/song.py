"""Song model."""
from sqlalchemy import Column, Integer, String, Boolean, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from songvault.database import Base


class Song(Base):
    """Catalog entry for one audio source.

    ``file_path`` is either a filesystem path or a synthetic token for
    external sources (``YT:<video id>``) and doubles as the re-registration key.
    """

    __tablename__ = "songs"
    __table_args__ = (
        UniqueConstraint('file_path', name='uq_song_file_path'),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    duration = Column(Float, default=0.0)  # seconds
    file_path = Column(String(1000), nullable=False)
    date_added = Column(DateTime, nullable=False, index=True)
    is_liked = Column(Boolean, nullable=False, default=False)

    artist_id = Column(Integer, ForeignKey("artists.id"), nullable=True, index=True)
    album_id = Column(Integer, ForeignKey("albums.id"), nullable=True, index=True)

    artist = relationship("Artist", back_populates="songs")
    album = relationship("Album", back_populates="songs")

    def __repr__(self):
        return f"<Song {self.title}>"
