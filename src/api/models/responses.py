"""Pydantic response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    upstream_configured: bool
    notifications_configured: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class EventRecordModel(BaseModel):
    id: str
    code: str
    status: str
    organizer_name: str = ""
    owner_external_id: str = ""


class SubmissionModel(BaseModel):
    id: str
    event_record_id: str
    name: str
    email: str
    status: str
    website: str
    decision_reason: str


class EventListResponse(BaseModel):
    records: list[EventRecordModel]


class SubmissionListResponse(BaseModel):
    records: list[SubmissionModel]
    event_status: str
    event: EventRecordModel


class EligibilityModel(BaseModel):
    amount: int
    approved_count: int
    enabled: bool
    reason_label: str


class EventViewResponse(BaseModel):
    event: EventRecordModel
    query: str
    status_filter: str
    page: int
    total_pages: int
    total_matches: int
    records: list[SubmissionModel]
    counts: dict[str, int]
    eligibility: EligibilityModel


class GrantRequestResponse(BaseModel):
    success: bool
    message: str
    requested_at: str  # ISO 8601 UTC


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    UPSTREAM_BAD_RESPONSE = "UPSTREAM_BAD_RESPONSE"
    NOTIFICATION_FAILED = "NOTIFICATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
