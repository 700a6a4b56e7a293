"""JSON envelope helpers.

Every response body has the shape ``{"success": bool, ...}``: successful
calls carry ``data`` (and sometimes ``message``), failures carry ``error``.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse


def success(
    data: Any = None,
    *,
    message: Optional[str] = None,
    status_code: int = 200,
) -> JSONResponse:
    content: dict[str, Any] = {"success": True}
    if data is not None:
        content["data"] = jsonable_encoder(data, by_alias=True)
    if message:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def failure(
    status_code: int,
    error: str,
    *,
    headers: Optional[dict[str, str]] = None,
    **extra: Any,
) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": error}
    content.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=status_code, content=content, headers=headers)
