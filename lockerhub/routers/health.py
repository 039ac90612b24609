"""
System health check endpoint.
Returns status of backend + store.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text

from lockerhub.database import LockerStore, get_store
from lockerhub.utils.clock import utcnow

router = APIRouter()


@router.get("/health", summary="System health check")
async def health_check(store: LockerStore = Depends(get_store)):
    result = {
        "status": "ok",
        "timestamp": utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
    }

    try:
        with store.transaction() as db:
            db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except Exception as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result
