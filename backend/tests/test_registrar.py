"""Tests for song registration."""
from datetime import datetime
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from songvault.errors import ConflictingWriteError, InvalidInputError, PersistenceError
from songvault.models.artist import Artist
from songvault.models.album import Album
from songvault.models.song import Song
from songvault.services.identity import IdentityResolver
from songvault.services.registrar import SongMetadata, SongRegistrar


@pytest.fixture
def registrar(db, clock):
    return SongRegistrar(db, clock=clock)


class TestRegisterSong:
    """Single-song registration."""

    def test_creates_artist_album_and_song(self, db, registrar):
        result = registrar.register_song(
            "Karma Police", "Radiohead", "OK Computer", "/music/karma.flac", 264.0
        )

        assert result.created is True
        song = db.query(Song).filter(Song.id == result.song.id).one()
        assert song.title == "Karma Police"
        assert song.duration == 264.0
        assert song.is_liked is False
        assert song.date_added.date() == datetime(2024, 5, 1).date()
        assert song.album.year == 2024
        assert song.artist.name == "Radiohead"
        assert song.album.title == "OK Computer"
        assert song.album.artist_id == song.artist_id

    def test_same_path_twice_is_idempotent(self, db, registrar):
        first = registrar.register_song("Karma Police", "Radiohead", "OK Computer", "/music/karma.flac", 264.0)
        second = registrar.register_song("Different", "Someone Else", "Other", "/music/karma.flac", 1.0)

        assert second.created is False
        assert second.song.id == first.song.id
        assert db.query(Artist).count() == 1
        assert db.query(Album).count() == 1
        assert db.query(Song).count() == 1
        # Existing song untouched
        assert db.query(Song).one().title == "Karma Police"

    def test_artist_reused_across_songs(self, db, registrar):
        a = registrar.register_song("Airbag", "Radiohead", "OK Computer", "/music/airbag.flac", 284.0)
        b = registrar.register_song("Idioteque", "Radiohead", "Kid A", "/music/idioteque.flac", 309.0)

        artists = db.query(Artist).filter(Artist.name == "Radiohead").all()
        assert len(artists) == 1
        assert a.song.artist_id == artists[0].id
        assert b.song.artist_id == artists[0].id
        assert db.query(Album).count() == 2

    def test_album_scoped_by_artist(self, db, registrar):
        a = registrar.register_song("Song A", "Artist A", "Greatest Hits", "/music/a.mp3", 100.0)
        b = registrar.register_song("Song B", "Artist B", "Greatest Hits", "/music/b.mp3", 100.0)

        assert a.song.album_id != b.song.album_id
        albums = db.query(Album).filter(Album.title == "Greatest Hits").all()
        assert len(albums) == 2

    def test_missing_names_fall_back_to_defaults(self, db, registrar):
        result = registrar.register_song(None, "  ", "", "/music/untitled track.mp3")

        song = result.song
        assert song.title == "untitled track"
        assert song.artist.name == "Unknown Artist"
        assert song.album.title == "Unknown Album"
        assert song.duration == 0.0

    def test_empty_file_path_rejected_before_store_access(self, db, registrar):
        with patch.object(registrar, "find_by_path") as find:
            with pytest.raises(InvalidInputError):
                registrar.register_song("Title", "Artist", "Album", "")
            find.assert_not_called()

        assert db.query(Song).count() == 0

    def test_overlong_name_rejected(self, db, registrar):
        with pytest.raises(InvalidInputError):
            registrar.register_song("x" * 256, "Artist", "Album", "/music/long.mp3")

    def test_commit_failure_persists_nothing(self, db, registrar):
        failure = OperationalError("COMMIT", {}, Exception("disk I/O error"))
        with patch.object(db, "commit", side_effect=failure):
            with pytest.raises(PersistenceError) as exc_info:
                registrar.register_song("Airbag", "Radiohead", "OK Computer", "/music/airbag.flac", 284.0)

        assert "disk I/O error" in exc_info.value.detail
        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert db.query(Artist).count() == 0
        assert db.query(Album).count() == 0
        assert db.query(Song).count() == 0


class TestRegisterMany:
    """Multi-song registration in one transaction."""

    def test_staged_artist_and_album_shared_within_batch(self, db, registrar):
        results = registrar.register_many([
            SongMetadata("Mysterons", "Portishead", "Dummy", "/music/mysterons.flac", 306.0),
            SongMetadata("Sour Times", "Portishead", "Dummy", "/music/sour_times.flac", 254.0),
        ])

        assert [r.created for r in results] == [True, True]
        assert db.query(Artist).count() == 1
        assert db.query(Album).count() == 1
        assert results[0].song.album_id == results[1].song.album_id

    def test_duplicate_path_within_batch_collapses(self, db, registrar):
        results = registrar.register_many([
            SongMetadata("Roads", "Portishead", "Dummy", "/music/roads.flac", 305.0),
            SongMetadata("Roads (again)", "Portishead", "Dummy", "/music/roads.flac", 305.0),
        ])

        assert [r.created for r in results] == [True, False]
        assert results[0].song.id == results[1].song.id
        assert db.query(Song).count() == 1

    def test_mixes_existing_and_new(self, db, registrar):
        first = registrar.register_song("Roads", "Portishead", "Dummy", "/music/roads.flac", 305.0)

        results = registrar.register_many([
            SongMetadata("Roads", "Portishead", "Dummy", "/music/roads.flac", 305.0),
            SongMetadata("Glory Box", "Portishead", "Dummy", "/music/glory_box.flac", 306.0),
        ])

        assert results[0].created is False
        assert results[0].song.id == first.song.id
        assert results[1].created is True
        assert db.query(Album).count() == 1

    def test_invalid_entry_rejects_whole_batch(self, db, registrar):
        with pytest.raises(InvalidInputError):
            registrar.register_many([
                SongMetadata("Roads", "Portishead", "Dummy", "/music/roads.flac", 305.0),
                SongMetadata("Broken", "Portishead", "Dummy", "", 1.0),
            ])

        assert db.query(Song).count() == 0


class StaleArtistResolver(IdentityResolver):
    """Misses committed artists on its first lookup, like a concurrent request would."""

    def __init__(self, clock):
        super().__init__(clock=clock)
        self.stale_lookups = 1

    def resolve_artist(self, scope, name):
        if self.stale_lookups:
            self.stale_lookups -= 1
            return scope.stage_artist(Artist(name=name))
        return super().resolve_artist(scope, name)


class TestCommitRace:
    """First committer wins when two registrations stage the same artist."""

    def test_retries_against_winner(self, db, clock):
        db.add(Artist(name="Radiohead"))
        db.commit()

        registrar = SongRegistrar(db, resolver=StaleArtistResolver(clock), clock=clock)
        result = registrar.register_song("Airbag", "Radiohead", "OK Computer", "/music/airbag.flac", 284.0)

        assert result.created is True
        assert db.query(Artist).filter(Artist.name == "Radiohead").count() == 1
        assert result.song.artist.name == "Radiohead"

    def test_gives_up_after_max_attempts(self, db, clock):
        db.add(Artist(name="Radiohead"))
        db.commit()

        resolver = StaleArtistResolver(clock)
        resolver.stale_lookups = SongRegistrar.MAX_ATTEMPTS
        registrar = SongRegistrar(db, resolver=resolver, clock=clock)

        with pytest.raises(ConflictingWriteError):
            registrar.register_song("Airbag", "Radiohead", "OK Computer", "/music/airbag.flac", 284.0)

        assert db.query(Song).count() == 0
        assert db.query(Artist).count() == 1
