"""Song registration service.

Turns parsed metadata into catalog rows: reuses the song when its file path
is already registered, otherwise resolves the artist and album and commits
everything the call staged in a single transaction.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePath
from typing import Optional, List

from sqlalchemy.orm import Session

from songvault.config import settings
from songvault.models.song import Song
from songvault.errors import ConflictingWriteError, InvalidInputError
from songvault.services.identity import IdentityResolver, StagingScope, check_name_length, present

logger = logging.getLogger(__name__)


@dataclass
class SongMetadata:
    """Parsed metadata handed over by an ingestion source."""
    title: Optional[str]
    artist_name: Optional[str]
    album_title: Optional[str]
    file_path: str
    duration: Optional[float] = None
    year: Optional[int] = None


@dataclass
class RegistrationResult:
    song: Song
    created: bool


class SongRegistrar:
    """Idempotent find-or-create of songs with their artist and album."""

    # One retry after losing a commit race; the second pass sees the winner's rows
    MAX_ATTEMPTS = 2

    def __init__(self, db: Session, resolver: Optional[IdentityResolver] = None, clock=datetime.now):
        self.db = db
        self.clock = clock
        self.resolver = resolver or IdentityResolver(clock=clock)

    def find_by_path(self, file_path: str) -> Optional[Song]:
        """Get a committed song by its file path."""
        return self.db.query(Song).filter(Song.file_path == file_path).first()

    def register_song(
        self,
        title: Optional[str],
        artist_name: Optional[str],
        album_title: Optional[str],
        file_path: str,
        duration: Optional[float] = None,
        year: Optional[int] = None,
    ) -> RegistrationResult:
        """Register one song.

        Returns the existing song unchanged when ``file_path`` is already in
        the catalog.

        Raises:
            InvalidInputError: If file_path is empty or a name is too long
            PersistenceError: If the commit fails; nothing is saved
        """
        entry = SongMetadata(
            title=title,
            artist_name=artist_name,
            album_title=album_title,
            file_path=file_path,
            duration=duration,
            year=year,
        )
        return self.register_many([entry])[0]

    def register_many(self, entries: List[SongMetadata]) -> List[RegistrationResult]:
        """Register several songs in one transaction.

        Artists and albums staged for an earlier entry are reused by later
        entries, and repeated file paths collapse into a single song.
        """
        entries = [self._apply_defaults(entry) for entry in entries]

        attempt = 1
        while True:
            try:
                return self._register_once(entries)
            except ConflictingWriteError:
                if attempt >= self.MAX_ATTEMPTS:
                    raise
                attempt += 1
                logger.info("Lost commit race to a concurrent registration, retrying")

    def _register_once(self, entries: List[SongMetadata]) -> List[RegistrationResult]:
        scope = StagingScope(self.db)
        results = []

        for entry in entries:
            existing = self.find_by_path(entry.file_path)
            if existing:
                logger.info(f"Song already registered: {entry.file_path} (id={existing.id})")
                results.append(RegistrationResult(song=existing, created=False))
                continue

            pending = scope.songs.get(entry.file_path)
            if pending is not None:
                results.append(RegistrationResult(song=pending, created=False))
                continue

            artist = self.resolver.resolve_artist(scope, entry.artist_name)
            album = self.resolver.resolve_album(scope, entry.album_title, artist, entry.year)

            song = Song(
                title=entry.title,
                duration=entry.duration or 0.0,
                file_path=entry.file_path,
                date_added=self.clock(),
                is_liked=False,
                artist=artist,
                album=album,
            )
            scope.stage_song(song)
            results.append(RegistrationResult(song=song, created=True))

        if scope.songs:
            new_artists = len(scope.artists)
            new_albums = len(scope.albums)
            new_songs = len(scope.songs)
            scope.commit()
            logger.info(
                f"Registered {new_songs} song(s), "
                f"{new_artists} new artist(s), {new_albums} new album(s)"
            )

        return results

    def _apply_defaults(self, entry: SongMetadata) -> SongMetadata:
        """Validate eagerly and fill in fallback names."""
        if not entry.file_path or not entry.file_path.strip():
            raise InvalidInputError("File path is required")

        title = entry.title if present(entry.title) else (PurePath(entry.file_path).stem or entry.file_path)
        artist_name = entry.artist_name if present(entry.artist_name) else settings.default_artist_name
        album_title = entry.album_title if present(entry.album_title) else settings.default_album_title

        for label, value in (("Title", title), ("Artist name", artist_name), ("Album title", album_title)):
            check_name_length(label, value)

        return SongMetadata(
            title=title,
            artist_name=artist_name,
            album_title=album_title,
            file_path=entry.file_path,
            duration=entry.duration,
            year=entry.year,
        )
