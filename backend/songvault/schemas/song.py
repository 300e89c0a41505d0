"""Song schemas."""
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List

from songvault.utils.formatting import format_duration


class SongView(BaseModel):
    """Flattened song listing row.

    Artist and album are inlined as display strings, never nested objects.
    """
    id: int
    title: str
    artist: Optional[str] = None
    album: Optional[str] = None
    duration_formatted: str
    file_path: str
    is_liked: bool = False
    date_added: datetime

    @classmethod
    def from_song(cls, song):
        """Build the view from a Song ORM object with artist/album loaded."""
        return cls(
            id=song.id,
            title=song.title,
            artist=song.artist.name if song.artist else None,
            album=song.album.title if song.album else None,
            duration_formatted=format_duration(song.duration),
            file_path=song.file_path,
            is_liked=bool(song.is_liked),
            date_added=song.date_added,
        )


class EditedSong(BaseModel):
    """Post-edit view of a song."""
    id: int
    title: str
    artist: Optional[str] = None
    album: Optional[str] = None
    is_liked: bool


class SongEditRequest(BaseModel):
    """Edit payload; only ``id`` and ``is_liked`` are always applied."""
    id: int
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    is_liked: bool = False


class SongEditResponse(BaseModel):
    message: str
    data: EditedSong


class ExternalImportRequest(BaseModel):
    """Video-platform import. Missing title/author are fetched from the platform."""
    video_id: str = ""
    title: Optional[str] = None
    author: Optional[str] = None
    duration_sec: Optional[float] = Field(None, ge=0)


class LocalPathRequest(BaseModel):
    file_path: str = ""


class BatchImportItem(BaseModel):
    """Already-parsed metadata for one song."""
    file_path: str
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    duration: Optional[float] = Field(None, ge=0)
    year: Optional[int] = None


class BatchImportRequest(BaseModel):
    songs: List[BatchImportItem]


class RegistrationResponse(BaseModel):
    message: str
    id: int
    is_new: bool
    title: Optional[str] = None
    path: Optional[str] = None


class BatchImportResponse(BaseModel):
    items: List[RegistrationResponse]
    created: int
