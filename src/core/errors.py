"""
Error taxonomy shared by services and the API layer.

Each error carries the HTTP status and error code the API responds with, so
services can raise them without knowing about FastAPI.
"""


class DashboardError(Exception):
    """Base class for expected, caller-visible failures."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class Unauthenticated(DashboardError):
    status_code = 401
    code = "UNAUTHORIZED"


class Forbidden(DashboardError):
    status_code = 403
    code = "FORBIDDEN"


class ValidationError(DashboardError):
    """Bad client input. Always raised before any side effect."""

    status_code = 400
    code = "VALIDATION_ERROR"


class NotFound(DashboardError):
    status_code = 404
    code = "NOT_FOUND"


class UpstreamTimeout(DashboardError):
    status_code = 504
    code = "UPSTREAM_TIMEOUT"


class UpstreamShapeError(DashboardError):
    """Upstream answered with something that is not a usable record payload."""

    status_code = 502
    code = "UPSTREAM_BAD_RESPONSE"


class UpstreamError(DashboardError):
    """Upstream answered with a non-2xx status; the status is passed through."""

    code = "UPSTREAM_ERROR"

    def __init__(self, message: str, status_code: int, details: list[str] | None = None):
        super().__init__(message, details)
        self.status_code = status_code


class NotificationError(DashboardError):
    status_code = 500
    code = "NOTIFICATION_FAILED"


class ConfigurationError(DashboardError):
    status_code = 500
    code = "INTERNAL_ERROR"
