"""Failure taxonomy shared by the guidance stages.

Every stage either returns a fully valid entity or raises one of these.
Nothing here is retried automatically; callers surface the error and let the
user try again.
"""
from __future__ import annotations


class CareerGuidanceError(RuntimeError):
    pass


class ValidationError(CareerGuidanceError):
    """Caller-supplied input is incomplete (e.g. an unanswered intake step)."""

    def __init__(self, message: str, missing_fields: list[str] | None = None, invalid_fields: list[str] | None = None):
        super().__init__(message)
        self.missing_fields = list(missing_fields or [])
        self.invalid_fields = list(invalid_fields or [])


class SchemaViolationError(CareerGuidanceError):
    """Inference output could not be parsed into the stage's schema."""


class ProfileSynthesisError(SchemaViolationError):
    pass


class InvalidMatchError(SchemaViolationError):
    pass


class RoadmapBuildError(SchemaViolationError):
    pass


class InvalidAdjustmentError(SchemaViolationError):
    pass


class UpstreamUnavailableError(CareerGuidanceError):
    """The inference capability failed, timed out or is not configured."""
