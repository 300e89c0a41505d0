"""Health check endpoints for monitoring."""
from pathlib import Path
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text

from songvault.database import get_db
from songvault.config import settings
from songvault import __version__


router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns status of the database and the upload directory.
    """
    status = {
        "status": "healthy",
        "version": __version__,
        "checks": {}
    }

    try:
        db.execute(text("SELECT 1"))
        status["checks"]["database"] = "ok"
    except Exception as e:
        status["checks"]["database"] = f"error: {str(e)}"
        status["status"] = "unhealthy"

    upload_path = Path(settings.upload_dir)
    if upload_path.exists() and upload_path.is_dir():
        status["checks"]["upload_dir"] = "ok"
    else:
        status["checks"]["upload_dir"] = "not accessible"
        if status["status"] == "healthy":
            status["status"] = "degraded"

    return status


@router.get("/ready")
def readiness_check(db: Session = Depends(get_db)):
    """Readiness check - can the service reach its database?"""
    try:
        db.execute(text("SELECT 1"))
        return {"ready": True}
    except Exception:
        return {"ready": False}


@router.get("/live")
def liveness_check():
    """Liveness check - is the process alive?"""
    return {"alive": True, "version": __version__}
