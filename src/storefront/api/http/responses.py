"""JSON envelope used by every ``/api`` endpoint.

Successful responses carry ``{"success": true, "data": ...}`` plus optional
metadata such as ``count`` or ``source``; failures carry
``{"success": false, "error": "...", "details": ...}``.
"""

from datetime import UTC, datetime
from typing import Any

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse


def timestamp() -> str:
    return datetime.now(UTC).isoformat()


def success_response(
    data: Any = None,
    *,
    status_code: int = 200,
    message: str | None = None,
    headers: dict[str, str] | None = None,
    **meta: Any,
) -> JSONResponse:
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    body.update(meta)
    body.setdefault("timestamp", timestamp())
    return JSONResponse(
        status_code=status_code, content=jsonable_encoder(body), headers=headers
    )


def error_response(
    status_code: int,
    error: str,
    *,
    details: Any = None,
    headers: dict[str, str] | None = None,
    **meta: Any,
) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "error": error}
    if details is not None:
        body["details"] = details
    body.update(meta)
    body.setdefault("timestamp", timestamp())
    return JSONResponse(
        status_code=status_code, content=jsonable_encoder(body), headers=headers
    )
