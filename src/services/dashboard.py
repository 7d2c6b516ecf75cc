"""
Event view assembly: fetch, filter, paginate and compute grant state.

load_event_view returns a FetchResult instead of raising, so the caller can
render either the view or a failure with a retry option.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from core.errors import (
    ConfigurationError,
    DashboardError,
    NotFound,
    UpstreamError,
    UpstreamShapeError,
    UpstreamTimeout,
)
from models.records import (
    CooldownMarker,
    Eligibility,
    EventRecord,
    StatusFilter,
    Submission,
)
from services.filtering import (
    clamp_page,
    compute_eligibility,
    filter_submissions,
    page_count,
    paginate,
    status_counts,
)
from services.submissions import fetch_submissions


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    BAD_RESPONSE = "bad_response"
    UPSTREAM = "upstream"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


@dataclass
class EventView:
    event: EventRecord
    query: str
    status_filter: StatusFilter
    page: int
    total_pages: int
    total_matches: int
    rows: list[Submission]
    filtered: list[Submission]
    counts: dict[str, int]
    eligibility: Eligibility


@dataclass
class FetchResult:
    ok: bool
    data: EventView | None = None
    error: ErrorKind | None = None
    message: str = ""
    details: list[str] = field(default_factory=list)


def error_kind(exc: DashboardError) -> ErrorKind:
    if isinstance(exc, NotFound):
        return ErrorKind.NOT_FOUND
    if isinstance(exc, UpstreamTimeout):
        return ErrorKind.TIMEOUT
    if isinstance(exc, UpstreamShapeError):
        return ErrorKind.BAD_RESPONSE
    if isinstance(exc, UpstreamError):
        return ErrorKind.UPSTREAM
    if isinstance(exc, ConfigurationError):
        return ErrorKind.CONFIGURATION
    return ErrorKind.UNKNOWN


def build_event_view(
    event: EventRecord,
    submissions: list[Submission],
    query: str = "",
    status_filter: StatusFilter | str = StatusFilter.ALL,
    page: int = 1,
    marker: CooldownMarker | None = None,
    now: datetime | None = None,
    previous_query: str | None = None,
    previous_status: StatusFilter | str | None = None,
) -> EventView:
    """
    Assemble one page of the event view.

    A changed query or status filter (relative to previous_*) sends the
    viewer back to page 1. The page is then clamped to the filtered set.
    """
    status_filter = StatusFilter(status_filter)
    if previous_query is not None and previous_query != query:
        page = 1
    if previous_status is not None and StatusFilter(previous_status) is not status_filter:
        page = 1

    filtered = filter_submissions(submissions, query, status_filter)
    page = clamp_page(page, len(filtered))

    return EventView(
        event=event,
        query=query,
        status_filter=status_filter,
        page=page,
        total_pages=page_count(len(filtered)),
        total_matches=len(filtered),
        rows=paginate(filtered, page),
        filtered=filtered,
        counts=status_counts(submissions),
        eligibility=compute_eligibility(
            submissions, event["status"], marker, now or datetime.now(timezone.utc)
        ),
    )


async def load_event_view(
    code: str,
    query: str = "",
    status_filter: StatusFilter | str = StatusFilter.ALL,
    page: int = 1,
    marker: CooldownMarker | None = None,
    now: datetime | None = None,
) -> FetchResult:
    """Fetch an event's submissions and build its view."""
    try:
        event, submissions = await fetch_submissions(code)
    except DashboardError as e:
        return FetchResult(ok=False, error=error_kind(e), message=e.message, details=e.details)

    view = build_event_view(
        event, submissions, query=query, status_filter=status_filter,
        page=page, marker=marker, now=now,
    )
    return FetchResult(ok=True, data=view)
