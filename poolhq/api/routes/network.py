"""Pool network statistics endpoint."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from poolhq.api.deps import get_pool_stats_source
from poolhq.services.pool_client import PoolApiError, PoolStatsSource

LOGGER = logging.getLogger(__name__)

UNABLE_TO_RETRIEVE_STATS = "Unable to retrieve stats"

router = APIRouter(prefix="/network")


@router.get("/stats", summary="Pool statistics for the selected network")
def get_pool_stats(source: PoolStatsSource = Depends(get_pool_stats_source)) -> dict[str, Any]:
    try:
        return source.get_pool_stats()
    except PoolApiError as exc:
        LOGGER.warning("pool stats unavailable", extra={"error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=UNABLE_TO_RETRIEVE_STATS
        ) from exc


__all__ = ["UNABLE_TO_RETRIEVE_STATS", "get_pool_stats", "router"]
