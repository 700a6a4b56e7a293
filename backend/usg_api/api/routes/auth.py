from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from usg_api.api.dependencies import get_auth_service, get_current_user
from usg_api.api.responses import success
from usg_api.models.auth import AuthUser
from usg_api.services.auth import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me")
async def whoami(
    user: AuthUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Identity behind the bearer token and whether it may use admin routes."""
    return success({**user.model_dump(), "isAdmin": auth_service.is_admin(user)})
