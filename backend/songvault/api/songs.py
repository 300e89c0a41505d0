"""Song catalog endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from songvault.database import get_db
from songvault.dependencies import get_ingest_service
from songvault.schemas.song import (
    SongView,
    SongEditRequest,
    SongEditResponse,
    ExternalImportRequest,
    LocalPathRequest,
    BatchImportRequest,
    BatchImportResponse,
    RegistrationResponse,
)
from songvault.services.catalog import CatalogQuery
from songvault.services.editor import SongEditor
from songvault.services.ingest import IngestService
from songvault.services.registrar import SongMetadata, SongRegistrar

router = APIRouter()


@router.get("/list", response_model=List[SongView])
def list_songs(
    mode: str = Query("songs", description="songs, discover or liked"),
    db: Session = Depends(get_db),
):
    """List songs. ``discover`` shows newest first, ``liked`` only liked songs."""
    return CatalogQuery(db).list_songs(mode)


@router.post("/add-youtube", response_model=RegistrationResponse)
async def add_youtube_song(
    req: ExternalImportRequest,
    response: Response,
    ingest: IngestService = Depends(get_ingest_service),
):
    """Register a video-platform song by its video id."""
    result = await ingest.register_external(
        req.video_id,
        title=req.title,
        author=req.author,
        duration=req.duration_sec,
    )

    if not result.created:
        return RegistrationResponse(message="Song already exists.", id=result.song.id, is_new=False)

    response.status_code = status.HTTP_201_CREATED
    return RegistrationResponse(message="Saved", id=result.song.id, is_new=True, title=result.song.title)


@router.post("/add-local-path", response_model=RegistrationResponse)
async def add_local_path(
    req: LocalPathRequest,
    ingest: IngestService = Depends(get_ingest_service),
):
    """Register a file that already exists on the server's disk."""
    result = await ingest.register_local_path(req.file_path)

    if not result.created:
        return RegistrationResponse(message="Song already registered.", id=result.song.id, is_new=False)

    return RegistrationResponse(
        message="Registered!",
        id=result.song.id,
        is_new=True,
        title=result.song.title,
    )


@router.post("/upload", response_model=RegistrationResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    ingest: IngestService = Depends(get_ingest_service),
):
    """Upload an audio file (mp3, flac, m4a), store it and register it."""
    filename = file.filename if file else None
    stream = file.file if file else None
    result = await ingest.register_upload(filename, stream)

    return RegistrationResponse(
        message="File uploaded and saved!",
        id=result.song.id,
        is_new=result.created,
        title=result.song.title,
        path=result.song.file_path,
    )


@router.post("/import-batch", response_model=BatchImportResponse)
def import_batch(
    req: BatchImportRequest,
    db: Session = Depends(get_db),
):
    """Register already-parsed songs in a single transaction."""
    registrar = SongRegistrar(db)
    results = registrar.register_many([
        SongMetadata(
            title=item.title,
            artist_name=item.artist,
            album_title=item.album,
            file_path=item.file_path,
            duration=item.duration,
            year=item.year,
        )
        for item in req.songs
    ])

    items = [
        RegistrationResponse(
            message="Registered" if r.created else "Song already registered.",
            id=r.song.id,
            is_new=r.created,
            title=r.song.title,
        )
        for r in results
    ]
    return BatchImportResponse(items=items, created=sum(1 for r in results if r.created))


@router.put("/edit", response_model=SongEditResponse)
def edit_song(
    req: SongEditRequest,
    db: Session = Depends(get_db),
):
    """Edit title, artist, album and liked state of a song."""
    editor = SongEditor(db)
    data = editor.edit_song(
        req.id,
        title=req.title,
        artist_name=req.artist,
        album_title=req.album,
        is_liked=req.is_liked,
    )
    return SongEditResponse(message="Song updated!", data=data)
