"""FastAPI dependencies for external collaborators."""
from fastapi import Depends
from sqlalchemy.orm import Session

from songvault.database import get_db
from songvault.integrations.exiftool import ExifToolClient
from songvault.integrations.ytdlp import YtdlpClient
from songvault.services.ingest import IngestService
from songvault.services.storage import UploadStorage


def get_tag_reader() -> ExifToolClient:
    return ExifToolClient()


def get_video_info() -> YtdlpClient:
    return YtdlpClient()


def get_upload_storage() -> UploadStorage:
    return UploadStorage()


def get_ingest_service(
    db: Session = Depends(get_db),
    tag_reader: ExifToolClient = Depends(get_tag_reader),
    video_info: YtdlpClient = Depends(get_video_info),
    storage: UploadStorage = Depends(get_upload_storage),
) -> IngestService:
    """Ingest service wired to the request's session and collaborators."""
    return IngestService(db, tag_reader=tag_reader, video_info=video_info, storage=storage)
