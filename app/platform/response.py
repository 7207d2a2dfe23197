from typing import Any, Dict, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    *,
    data: Optional[Any] = None,
    message: str = "Operation successful",
    status_code: int = status.HTTP_200_OK,
    errors: Optional[Dict[str, str]] = None,
    redirect: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Single envelope for everything the browser receives.

    ``status`` is "success" below 400 and "error" otherwise. Field-level
    validation messages go under ``data.errors`` so forms can show them
    next to the offending input; ``redirect`` tells the page where to go next.
    """
    status_str = "success" if status_code < 400 else "error"
    body = jsonable_encoder(data) if data is not None else {}

    if errors or redirect:
        if not isinstance(body, dict):
            body = {"result": body}
        if errors:
            body["errors"] = errors
        if redirect:
            body["redirect"] = redirect

    return JSONResponse(
        status_code=status_code,
        content={
            "status_code": status_code,
            "status": status_str,
            "message": message,
            "data": body,
        },
        headers=headers,
    )
