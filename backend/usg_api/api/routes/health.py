from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_settings
from usg_api.core.config import Settings

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check(settings: Settings = Depends(get_settings)) -> JSONResponse:
    return JSONResponse(
        content={
            "status": "ok",
            "message": "USG API is running",
            "database": settings.database_type.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    )
