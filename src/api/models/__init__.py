"""API Pydantic models."""

from .responses import (
    EligibilityModel,
    ErrorCodes,
    ErrorResponse,
    EventListResponse,
    EventRecordModel,
    EventViewResponse,
    GrantRequestResponse,
    HealthResponse,
    SubmissionListResponse,
    SubmissionModel,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "EventRecordModel",
    "SubmissionModel",
    "EventListResponse",
    "SubmissionListResponse",
    "EligibilityModel",
    "EventViewResponse",
    "GrantRequestResponse",
]
