from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_feedback_repo
from usg_api.api.responses import success
from usg_api.core.exceptions import NotFoundError, RecordNotFoundError
from usg_api.core.logging import get_logger
from usg_api.models.feedback import FeedbackCreate, FeedbackUpdate
from usg_api.repositories.feedback import FeedbackRepository

logger = get_logger(__name__)

router = APIRouter(prefix="/api/feedback", tags=["feedback"])


@router.get("")
async def list_feedback(
    repo: FeedbackRepository = Depends(get_feedback_repo),
) -> JSONResponse:
    """Every submission, newest first (admin only)."""
    return success(await repo.get_all())


@router.post("")
async def submit_feedback(
    payload: FeedbackCreate,
    repo: FeedbackRepository = Depends(get_feedback_repo),
) -> JSONResponse:
    """Record a public submission and return it with its reference number."""
    record = await repo.create_with_reference(payload.to_record())
    return success(
        record,
        message="Feedback submitted successfully",
        status_code=201,
    )


@router.get("/track/{reference_number}")
async def track_feedback(
    reference_number: str,
    repo: FeedbackRepository = Depends(get_feedback_repo),
) -> JSONResponse:
    try:
        record = await repo.find_by_reference(reference_number)
    except RecordNotFoundError:
        raise NotFoundError("Feedback") from None
    return success(record)


@router.put("/{id}")
async def update_feedback(
    id: str,
    payload: FeedbackUpdate,
    repo: FeedbackRepository = Depends(get_feedback_repo),
) -> JSONResponse:
    return success(await repo.update(id, payload.to_record()))


@router.delete("/{id}")
async def delete_feedback(
    id: str,
    repo: FeedbackRepository = Depends(get_feedback_repo),
) -> JSONResponse:
    await repo.delete(id)
    return success(message="Feedback deleted")
