# fleet/routers/health.py
"""
System health check endpoint.
Returns status of backend + DB + file storage.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from fleet.database import get_db
from fleet.services.file_storage import FileStorage, get_storage
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(db: Session = Depends(get_db), storage: FileStorage = Depends(get_storage)):
    """
    Returns:
    - Backend status
    - Database connectivity
    - Whether the upload directory is writable
    """
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "storage": "unknown",
    }

    # Check database
    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except Exception as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    # Check storage
    if storage.is_writable():
        result["storage"] = "ok"
    else:
        result["storage"] = "not writable"
        result["status"] = "degraded"

    return result
