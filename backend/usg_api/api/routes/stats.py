from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_datastore
from usg_api.api.responses import success
from usg_api.services.datastore import Datastore

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/automated")
async def automated_stats(datastore: Datastore = Depends(get_datastore)) -> JSONResponse:
    stats = await datastore.get_automated_stats()
    return success(stats.model_dump(by_alias=True))
