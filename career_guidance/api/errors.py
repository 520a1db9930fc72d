"""Translate pipeline failures into HTTP responses."""
from __future__ import annotations

from fastapi import HTTPException, status

from career_guidance.db.store import RecordNotFoundError, StoreError
from career_guidance.errors import (
    CareerGuidanceError,
    SchemaViolationError,
    UpstreamUnavailableError,
    ValidationError,
)


def to_http_exception(exc: Exception) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": str(exc),
                "missing_fields": exc.missing_fields,
                "invalid_fields": exc.invalid_fields,
            },
        )
    if isinstance(exc, SchemaViolationError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": str(exc), "error": type(exc).__name__},
        )
    if isinstance(exc, UpstreamUnavailableError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    if isinstance(exc, RecordNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, StoreError):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to access records")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


GUIDANCE_ERRORS = (CareerGuidanceError, StoreError)
