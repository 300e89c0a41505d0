"""API routes."""
from fastapi import APIRouter
from songvault.api import songs
from songvault.schemas.common import ErrorResponse

api_router = APIRouter()

api_router.include_router(
    songs.router,
    prefix="/music",
    tags=["music"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
