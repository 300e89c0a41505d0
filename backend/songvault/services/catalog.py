"""Read-side song listings."""
from typing import List
from sqlalchemy.orm import Session, joinedload

from songvault.models.song import Song
from songvault.schemas.song import SongView

LIST_MODES = ("songs", "discover", "liked")


class CatalogQuery:
    """Flattened, display-ready song listings."""

    def __init__(self, db: Session):
        self.db = db

    def list_songs(self, mode: str = "songs") -> List[SongView]:
        """List songs for a browse mode.

        Modes (case-insensitive):
        - songs: all songs by title ascending (default, also for unknown modes)
        - discover: all songs, newest first
        - liked: liked songs only
        """
        query = self.db.query(Song).options(
            joinedload(Song.artist),
            joinedload(Song.album)
        )

        mode = (mode or "songs").lower()
        if mode == "discover":
            query = query.order_by(Song.date_added.desc(), Song.id.desc())
        elif mode == "liked":
            query = query.filter(Song.is_liked.is_(True)).order_by(Song.id)
        else:
            query = query.order_by(Song.title, Song.id)

        return [SongView.from_song(song) for song in query.all()]
