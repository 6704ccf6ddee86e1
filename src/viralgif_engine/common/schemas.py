"""Shared Pydantic schemas and response envelopes."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

from viralgif_engine.common.exceptions import ViralGifError


def _now() -> datetime:
    return datetime.now(timezone.utc)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    service: str = "viralgif-engine"
    environment: str = "development"


class ErrorBody(BaseModel):
    message: str
    code: str
    status_code: int

    model_config = {"extra": "allow"}


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorBody
    timestamp: datetime = Field(default_factory=_now)


class SuccessResponse(BaseModel):
    success: bool = True
    data: Any
    timestamp: datetime = Field(default_factory=_now)


def error_payload(
    message: str,
    code: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the JSON body for an error response."""
    body = ErrorBody(message=message, code=code, status_code=status_code, **(details or {}))
    return ErrorResponse(error=body).model_dump(mode="json")


def error_response(exc: ViralGifError, redact_internal: bool = False) -> JSONResponse:
    """Render a ViralGifError as the standard error envelope."""
    message = exc.message
    if redact_internal and exc.status_code >= 500 and exc.status_code != 503:
        message = "An unexpected error occurred"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(message, exc.code, exc.status_code, exc.details()),
    )
