"""Pytest fixtures for Songvault tests."""
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import songvault.models  # noqa: F401
from songvault.main import app
from songvault.database import Base, get_db
from songvault.dependencies import get_tag_reader, get_video_info, get_upload_storage
from songvault.integrations.exiftool import ParsedTags
from songvault.integrations.ytdlp import VideoInfo
from songvault.models.artist import Artist
from songvault.models.album import Album
from songvault.models.song import Song
from songvault.services.storage import UploadStorage

# In-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    """Deterministic clock: each call is one minute after the previous."""
    start = datetime(2024, 5, 1, 12, 0, 0)
    calls = {"n": 0}

    def tick():
        value = start + timedelta(minutes=calls["n"])
        calls["n"] += 1
        return value

    return tick


@pytest.fixture
def tag_reader():
    """Mocked ExifToolClient returning fixed tags."""
    mock = MagicMock()
    mock.read_tags = AsyncMock(return_value=ParsedTags(
        title="Paranoid Android",
        artist="Radiohead",
        album="OK Computer",
        duration=383.4,
    ))
    return mock


@pytest.fixture
def video_info():
    """Mocked YtdlpClient."""
    mock = MagicMock()
    mock.get_info = AsyncMock(return_value=VideoInfo(
        title="Fetched Title",
        author="Fetched Channel",
        duration=212.0,
    ))
    return mock


@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def storage(upload_dir):
    return UploadStorage(upload_dir=upload_dir, max_bytes=1024 * 1024)


@pytest.fixture(scope="function")
def client(db, tag_reader, video_info, storage):
    """Create a test client with the test database and mocked collaborators."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_tag_reader] = lambda: tag_reader
    app.dependency_overrides[get_video_info] = lambda: video_info
    app.dependency_overrides[get_upload_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def audio_file(tmp_path):
    """An on-disk file standing in for an audio file (tags come from the mock)."""
    path = tmp_path / "library" / "02 - Paranoid Android.mp3"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"ID3" + b"\x00" * 128)
    return path


@pytest.fixture
def sample_catalog(db):
    """Two artists, two albums, three songs (two liked)."""
    radiohead = Artist(name="Radiohead")
    portishead = Artist(name="Portishead")
    db.add_all([radiohead, portishead])
    db.commit()

    ok_computer = Album(title="OK Computer", year=1997, artist_id=radiohead.id)
    dummy = Album(title="Dummy", year=1994, artist_id=portishead.id)
    db.add_all([ok_computer, dummy])
    db.commit()

    songs = [
        Song(
            title="Karma Police",
            duration=264.0,
            file_path="/music/radiohead/karma_police.flac",
            date_added=datetime(2024, 1, 1, 10, 0),
            is_liked=True,
            artist_id=radiohead.id,
            album_id=ok_computer.id,
        ),
        Song(
            title="Airbag",
            duration=284.5,
            file_path="/music/radiohead/airbag.flac",
            date_added=datetime(2024, 3, 1, 10, 0),
            is_liked=False,
            artist_id=radiohead.id,
            album_id=ok_computer.id,
        ),
        Song(
            title="Roads",
            duration=305.9,
            file_path="/music/portishead/roads.flac",
            date_added=datetime(2024, 2, 1, 10, 0),
            is_liked=True,
            artist_id=portishead.id,
            album_id=dummy.id,
        ),
    ]
    db.add_all(songs)
    db.commit()

    return {
        "artists": {"radiohead": radiohead, "portishead": portishead},
        "albums": {"ok_computer": ok_computer, "dummy": dummy},
        "songs": {s.title: s for s in songs},
    }


@pytest.fixture
def session_factory(db):
    """Session factory bound to the test database, for code that opens its own sessions."""
    return TestingSessionLocal
