"""Album model."""
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from songvault.database import Base


class Album(Base):
    """Album, identified by (title, artist)."""

    __tablename__ = "albums"
    __table_args__ = (
        UniqueConstraint('artist_id', 'title', name='uq_album_artist_title'),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    year = Column(Integer)
    cover_path = Column(String(1000))
    artist_id = Column(Integer, ForeignKey("artists.id"), nullable=True, index=True)

    artist = relationship("Artist", back_populates="albums")
    songs = relationship("Song", back_populates="album", lazy="dynamic")

    def __repr__(self):
        return f"<Album {self.title}>"
