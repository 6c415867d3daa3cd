"""
System health check endpoint.
Returns status of backend + key-value storage.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from parking_ledger.dependencies import get_storage
from parking_ledger.services.storage_service import KeyValueStorage

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(storage: KeyValueStorage = Depends(get_storage)):
    result = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "backend": "ok",
        "storage": "unknown",
    }

    try:
        storage.ping()
        result["storage"] = "ok"
    except SQLAlchemyError as e:
        result["storage"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result
