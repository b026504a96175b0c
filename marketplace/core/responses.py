"""JSON envelope responses shared by the API routers."""

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)

COUPONS_CACHE_CONTROL = "public, s-maxage=30, stale-while-revalidate=60"
STORES_CACHE_CONTROL = "public, s-maxage=60, stale-while-revalidate=120"

BACKEND_ERROR_MESSAGE = "Failed to fetch data"
WRITE_ERROR_MESSAGE = "Failed to save changes"


def envelope_response(
    payload: BaseModel, status_code: int = 200, cache_control: str | None = None
) -> JSONResponse:
    """Serialize an envelope model with camelCase keys."""
    headers = {"Cache-Control": cache_control} if cache_control else None
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


def error_response(message: str, status_code: int = 500, **empty: Any) -> JSONResponse:
    """``{success: false, error, ...}`` with the empty result keys of the route."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, **empty},
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer malformed request bodies with a 400 envelope."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    logger.info("Rejected %s %s: %s", request.method, request.url.path, messages)
    return error_response("; ".join(messages) or "Invalid request", status_code=400)
