"""Songvault API - Main application entry point."""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from songvault.api import api_router
from songvault.api.health import router as health_router
from songvault import __version__
from songvault.config import settings
from songvault.errors import (
    CatalogError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
    SourceUnreadableError,
)
from songvault.logging_config import setup_logging

setup_logging()

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidInputError: 400,
    NotFoundError: 404,
    SourceUnreadableError: 400,
    PersistenceError: 500,
}


app = FastAPI(
    title="Songvault",
    description="Personal music catalog - register, organize, browse",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    """Map catalog failures to status codes with a structured body."""
    status_code = 500
    for error_type, code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            status_code = code
            break

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.detail})")

    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Report store failures outside a commit as persistence failures."""
    error = PersistenceError("Database operation failed", detail=str(exc))
    logger.error(f"{request.method} {request.url.path} failed: {error.message} ({error.detail})")
    return JSONResponse(status_code=ERROR_STATUS[PersistenceError], content=error.to_dict())


app.include_router(api_router, prefix="/api")

# Health routes (not under /api prefix)
app.include_router(health_router)


@app.get("/")
def root():
    """Root endpoint - API info."""
    return {
        "name": "Songvault",
        "version": __version__,
        "docs": "/docs",
    }
