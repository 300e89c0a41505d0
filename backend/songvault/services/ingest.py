"""Ingestion sources: local files, uploads and video-platform imports.

Each entry point gathers metadata from its collaborator, applies the
source's fallback names and hands off to the registrar.
"""
import logging
from pathlib import Path
from typing import BinaryIO, Optional

from sqlalchemy.orm import Session

from songvault.config import settings
from songvault.errors import InvalidInputError, NotFoundError
from songvault.integrations.exiftool import ExifToolClient
from songvault.integrations.ytdlp import YtdlpClient
from songvault.services.registrar import RegistrationResult, SongRegistrar
from songvault.services.storage import UploadStorage

logger = logging.getLogger(__name__)


class IngestService:
    """Registers songs from the three supported sources."""

    def __init__(
        self,
        db: Session,
        tag_reader: Optional[ExifToolClient] = None,
        video_info: Optional[YtdlpClient] = None,
        storage: Optional[UploadStorage] = None,
        registrar: Optional[SongRegistrar] = None,
    ):
        self.db = db
        self.tag_reader = tag_reader or ExifToolClient()
        self.video_info = video_info or YtdlpClient()
        self.storage = storage or UploadStorage()
        self.registrar = registrar or SongRegistrar(db)

    async def register_local_path(self, file_path: str) -> RegistrationResult:
        """Register a file that already sits on the server's disk.

        Raises:
            InvalidInputError: If no path is given
            NotFoundError: If the file does not exist
            SourceUnreadableError: If its tags cannot be read
        """
        if not file_path or not file_path.strip():
            raise InvalidInputError("File path must not be empty")

        path = Path(file_path)
        if not path.is_file():
            raise NotFoundError(f"File not found at path: {file_path}")

        existing = self.registrar.find_by_path(file_path)
        if existing:
            return RegistrationResult(song=existing, created=False)

        tags = await self.tag_reader.read_tags(path)

        return self.registrar.register_song(
            title=tags.title or path.stem,
            artist_name=tags.artist or settings.default_artist_name,
            album_title=tags.album or settings.default_album_title,
            file_path=file_path,
            duration=tags.duration,
        )

    async def register_upload(self, filename: Optional[str], stream: BinaryIO) -> RegistrationResult:
        """Store an uploaded file and register it.

        If anything fails after the bytes are written, the stored file is
        deleted before the error propagates.

        Raises:
            InvalidInputError: If the file is missing, empty, too large or
                has an unsupported extension
            SourceUnreadableError: If its tags cannot be read
        """
        if not filename:
            raise InvalidInputError("No file uploaded")

        ext = Path(filename).suffix.lower()
        if ext not in settings.allowed_upload_extensions:
            raise InvalidInputError(
                f"Unsupported file type. Allowed: {', '.join(settings.allowed_upload_extensions)}"
            )

        stored = self.storage.save(filename, stream)

        try:
            tags = await self.tag_reader.read_tags(stored)
            return self.registrar.register_song(
                title=tags.title or Path(filename).stem,
                artist_name=tags.artist or settings.default_artist_name,
                album_title=tags.album or settings.upload_album_title,
                file_path=str(stored),
                duration=tags.duration,
            )
        except Exception:
            logger.warning(f"Registration of upload {filename} failed, removing {stored}")
            self.storage.discard(stored)
            raise

    async def register_external(
        self,
        video_id: str,
        title: Optional[str] = None,
        author: Optional[str] = None,
        duration: Optional[float] = None,
    ) -> RegistrationResult:
        """Register a video-platform song under the external imports album.

        Title and author are fetched from the platform when not supplied.

        Raises:
            InvalidInputError: If no video id is given
            SourceUnreadableError: If a needed metadata fetch fails
        """
        if not video_id or not video_id.strip():
            raise InvalidInputError("Invalid data or empty video id")

        file_path = f"{settings.external_path_prefix}{video_id}"

        existing = self.registrar.find_by_path(file_path)
        if existing:
            return RegistrationResult(song=existing, created=False)

        if not title or not author:
            info = await self.video_info.get_info(video_id)
            title = title or info.title
            author = author or info.author
            if duration is None:
                duration = info.duration

        return self.registrar.register_song(
            title=title,
            artist_name=author or settings.default_artist_name,
            album_title=settings.external_album_title,
            file_path=file_path,
            duration=duration,
        )
