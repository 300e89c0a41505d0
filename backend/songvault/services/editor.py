"""Song metadata editing."""
import logging
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from songvault.models.song import Song
from songvault.schemas.song import EditedSong
from songvault.errors import InvalidInputError, NotFoundError
from songvault.services.identity import IdentityResolver, StagingScope, clean_name

logger = logging.getLogger(__name__)


class SongEditor:
    """Applies title/artist/album/liked edits and re-wires foreign keys."""

    def __init__(self, db: Session, resolver: Optional[IdentityResolver] = None):
        self.db = db
        self.resolver = resolver or IdentityResolver()

    def edit_song(
        self,
        song_id: int,
        title: Optional[str] = None,
        artist_name: Optional[str] = None,
        album_title: Optional[str] = None,
        is_liked: bool = False,
    ) -> EditedSong:
        """Update a song and return its flattened view.

        ``is_liked`` always overwrites; the other fields apply only when
        non-blank. The artist is resolved before the album because album
        identity depends on the artist. If the artist changes and no album
        title is given, the current album title is re-resolved under the new
        artist. A song without an artist cannot take an album unless the
        same edit also names an artist.

        Raises:
            InvalidInputError: If a name is too long, or an album is given
                for a song that has no artist
            NotFoundError: If no song has ``song_id``
            PersistenceError: If the commit fails; no field change survives
        """
        title = clean_name("Title", title)
        artist_name = clean_name("Artist name", artist_name)
        album_title = clean_name("Album title", album_title)

        song = self.db.query(Song).options(
            joinedload(Song.artist),
            joinedload(Song.album)
        ).filter(Song.id == song_id).first()

        if not song:
            raise NotFoundError(f"Song with ID {song_id} not found")

        if album_title and not artist_name and song.artist is None:
            raise InvalidInputError(f"Song {song_id} has no artist; an album requires an artist")

        scope = StagingScope(self.db)

        if title:
            song.title = title
        song.is_liked = is_liked

        current_artist_name = song.artist.name if song.artist else None
        artist_changed = False
        if artist_name and artist_name != current_artist_name:
            song.artist = self.resolver.resolve_artist(scope, artist_name)
            artist_changed = True
            logger.info(f"Song {song_id}: artist '{current_artist_name}' -> '{artist_name}'")

        if not album_title and artist_changed and song.album is not None:
            album_title = song.album.title

        if album_title:
            album = self.resolver.resolve_album(scope, album_title, song.artist)
            if album is not song.album:
                logger.info(f"Song {song_id}: album -> '{album_title}' by {song.artist.name}")
            song.album = album

        scope.commit()

        return EditedSong(
            id=song.id,
            title=song.title,
            artist=song.artist.name if song.artist else None,
            album=song.album.title if song.album else None,
            is_liked=song.is_liked,
        )
