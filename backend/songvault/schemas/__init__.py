"""Pydantic schemas for API request/response validation."""
from songvault.schemas.song import (
    SongView,
    EditedSong,
    SongEditRequest,
    SongEditResponse,
    ExternalImportRequest,
    LocalPathRequest,
    BatchImportRequest,
    BatchImportItem,
    RegistrationResponse,
    BatchImportResponse,
)
from songvault.schemas.common import ErrorResponse

__all__ = [
    "SongView",
    "EditedSong",
    "SongEditRequest",
    "SongEditResponse",
    "ExternalImportRequest",
    "LocalPathRequest",
    "BatchImportRequest",
    "BatchImportItem",
    "RegistrationResponse",
    "BatchImportResponse",
    "ErrorResponse",
]
