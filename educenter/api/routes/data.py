"""
Data API.

The whole center dataset is one document: GET returns it, POST applies one
operation to it and returns the updated document.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from educenter.api.deps import get_snapshot_service
from educenter.domain.errors import DomainError
from educenter.ports.store import StoreBusyError
from educenter.services.snapshot import SnapshotService

logger = logging.getLogger(__name__)

router = APIRouter()

NO_CACHE = "no-cache, no-store, must-revalidate"
RESTORE_OP = "restoreData"


def _failed(e: DomainError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"Operation failed: {e.message}",
    )


def _busy(e: StoreBusyError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("/data")
def get_data(
    response: Response,
    service: SnapshotService = Depends(get_snapshot_service),
) -> dict[str, Any]:
    """Full snapshot. Seeds the default dataset on first read."""
    response.headers["Cache-Control"] = NO_CACHE
    return service.load().to_wire()


@router.post("/data")
def post_data(
    operation: Any = Body(...),
    service: SnapshotService = Depends(get_snapshot_service),
) -> dict[str, Any]:
    """Apply one ``{op, payload}`` operation and return the new snapshot."""
    try:
        if isinstance(operation, dict) and operation.get("op") == RESTORE_OP:
            return service.restore(operation.get("payload")).to_wire()
        return service.apply(operation).to_wire()
    except DomainError as e:
        raise _failed(e) from e
    except StoreBusyError as e:
        logger.error("Store busy: %s", e)
        raise _busy(e) from e


@router.post("/reset")
def reset_data(service: SnapshotService = Depends(get_snapshot_service)) -> dict[str, str]:
    service.reset()
    return {"message": "Data reset successfully"}
