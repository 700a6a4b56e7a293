from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_feedback_repo
from usg_api.api.responses import success
from usg_api.core.constants import NOTIFICATION_LOOKBACK_HOURS
from usg_api.repositories.feedback import FeedbackRepository

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("")
async def new_feedback(
    since: Optional[datetime] = Query(None, description="ISO timestamp of the last check"),
    repo: FeedbackRepository = Depends(get_feedback_repo),
) -> JSONResponse:
    """Feedback created at or after ``since`` (default: the last 24 hours)."""
    if since is None:
        since = datetime.now(timezone.utc) - timedelta(hours=NOTIFICATION_LOOKBACK_HOURS)
    elif since.tzinfo is None:
        since = since.replace(tzinfo=timezone.utc)
    return success(await repo.get_new_since(since))
