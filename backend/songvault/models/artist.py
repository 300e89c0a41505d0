"""Artist model."""
from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from songvault.database import Base


class Artist(Base):
    """Performer; name is the natural key (exact match)."""

    __tablename__ = "artists"
    __table_args__ = (
        UniqueConstraint('name', name='uq_artist_name'),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    image_path = Column(String(1000))

    # Dynamic: queried on demand, never loaded into the object graph
    albums = relationship("Album", back_populates="artist", lazy="dynamic")
    songs = relationship("Song", back_populates="artist", lazy="dynamic")

    def __repr__(self):
        return f"<Artist {self.name}>"
