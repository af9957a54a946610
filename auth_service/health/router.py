# auth_service/health/router.py
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from auth_service.core.errors import STORE_ERRORS
from auth_service.db.session import Database, get_database

log = logging.getLogger("uvicorn")

router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health(database: Database = Depends(get_database)):
    """SELECT 1 contra la DB: conectada o no, sin más diagnóstico."""
    try:
        await database.ping()
    except STORE_ERRORS as e:
        log.warning(f"⚠️ Health check failed: {e!r}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "database": "disconnected",
                "error": str(e),
            },
        )
    return {
        "status": "healthy",
        "database": "connected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
