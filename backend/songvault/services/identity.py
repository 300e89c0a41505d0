"""Artist/album identity resolution across committed and staged rows."""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from songvault.models.artist import Artist
from songvault.models.album import Album
from songvault.models.song import Song
from songvault.errors import ConflictingWriteError, InvalidInputError, PersistenceError

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255


def present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def check_name_length(label: str, value: str) -> str:
    if len(value) > MAX_NAME_LENGTH:
        raise InvalidInputError(f"{label} exceeds {MAX_NAME_LENGTH} characters")
    return value


def clean_name(label: str, value: Optional[str]) -> Optional[str]:
    """Return ``value`` when it is a usable name, None when it is blank.

    Raises:
        InvalidInputError: If the name is longer than MAX_NAME_LENGTH
    """
    if not present(value):
        return None
    return check_name_length(label, value)


class StagingScope:
    """Pending writes of one registrar or editor operation.

    Rows added here are held in the session without being flushed, so store
    queries cannot see them. The scope indexes them by natural key so later
    lookups in the same operation find them instead of staging a twin.
    """

    def __init__(self, db: Session):
        self.db = db
        self.artists: dict[str, Artist] = {}
        # Keyed by (title, artist object); the artist may not have an id yet
        self.albums: dict[tuple[str, Artist], Album] = {}
        self.songs: dict[str, Song] = {}

    def stage_artist(self, artist: Artist) -> Artist:
        self.db.add(artist)
        self.artists[artist.name] = artist
        return artist

    def stage_album(self, album: Album) -> Album:
        self.db.add(album)
        self.albums[(album.title, album.artist)] = album
        return album

    def stage_song(self, song: Song) -> Song:
        self.db.add(song)
        self.songs[song.file_path] = song
        return song

    def find_album(self, title: str, artist: Artist) -> Optional[Album]:
        album = self.albums.get((title, artist))
        if album is not None:
            return album
        # An artist loaded from the store may be a different instance per
        # lookup path; fall back to comparing committed ids.
        if artist.id is not None:
            for (staged_title, staged_artist), staged in self.albums.items():
                if staged_title == title and staged_artist.id == artist.id:
                    return staged
        return None

    def commit(self) -> None:
        """Commit every staged row at once, or none of them."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.discard()
            logger.warning(f"Commit rejected by constraint: {e.orig}")
            raise ConflictingWriteError("Conflicting row already saved", detail=str(e.orig)) from e
        except SQLAlchemyError as e:
            self.discard()
            logger.error(f"Commit failed: {e}")
            raise PersistenceError("Failed to save changes", detail=str(e)) from e
        self._clear()

    def discard(self) -> None:
        """Roll back the session and forget staged rows."""
        self.db.rollback()
        self._clear()

    def _clear(self) -> None:
        self.artists.clear()
        self.albums.clear()
        self.songs.clear()


class IdentityResolver:
    """Find-or-stage lookups for artists and albums.

    Committed rows always win; the staging scope is consulted only when the
    store has no match.
    """

    def __init__(self, clock=datetime.now):
        self.clock = clock

    def resolve_artist(self, scope: StagingScope, name: str) -> Artist:
        artist = scope.db.query(Artist).filter(Artist.name == name).first()
        if artist:
            return artist

        artist = scope.artists.get(name)
        if artist:
            return artist

        logger.debug(f"Staging new artist: {name}")
        return scope.stage_artist(Artist(name=name))

    def resolve_album(
        self,
        scope: StagingScope,
        title: str,
        artist: Artist,
        year: Optional[int] = None,
    ) -> Album:
        if artist.id is not None:
            album = scope.db.query(Album).filter(
                Album.title == title,
                Album.artist_id == artist.id
            ).first()
            if album:
                return album

        album = scope.find_album(title, artist)
        if album:
            return album

        logger.debug(f"Staging new album: {title} by {artist.name}")
        return scope.stage_album(Album(
            title=title,
            artist=artist,
            year=year or self.clock().year,
        ))
