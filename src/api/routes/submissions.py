"""Submission endpoints for a single event."""

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from api.dependencies import get_identity
from api.models.responses import EventViewResponse, SubmissionListResponse
from core.authorization import require_authenticated
from models.records import Identity, StatusFilter
from services.cooldown import marker_from_value
from services.dashboard import build_event_view
from services.export import export_filename, submissions_to_csv
from services.filtering import filter_submissions
from services.submissions import fetch_submissions

router = APIRouter(prefix="/v1")


# Any signed-in user may read an event's submissions; the event code is
# not checked against the caller's own events.
@router.get("/websites/{code}", response_model=SubmissionListResponse)
async def list_submissions(
    request: Request,
    code: str,
    identity: Identity = Depends(get_identity),
):
    """All submissions for an event, in upstream order."""
    require_authenticated(identity)
    event, submissions = await fetch_submissions(code)
    request.state.record_count = len(submissions)
    return {"records": submissions, "event_status": event["status"], "event": event}


@router.get("/events/{code}/view", response_model=EventViewResponse)
async def event_view(
    request: Request,
    code: str,
    query: Annotated[str, Query(max_length=200)] = "",
    status: StatusFilter = StatusFilter.ALL,
    page: Annotated[int, Query(ge=1)] = 1,
    grant_requested_at: Annotated[
        str | None, Query(description="Locally stored grant request time (ISO 8601)")
    ] = None,
    previous_query: str | None = None,
    previous_status: StatusFilter | None = None,
    identity: Identity = Depends(get_identity),
):
    """
    One page of an event's filtered submissions plus grant button state.

    The client passes its locally stored cooldown timestamp; the server keeps
    no cooldown state.
    """
    require_authenticated(identity)
    event, submissions = await fetch_submissions(code)
    view = build_event_view(
        event,
        submissions,
        query=query,
        status_filter=status,
        page=page,
        marker=marker_from_value(event["code"], grant_requested_at),
        now=datetime.now(timezone.utc),
        previous_query=previous_query,
        previous_status=previous_status,
    )
    request.state.record_count = len(view.rows)
    return {
        "event": view.event,
        "query": view.query,
        "status_filter": view.status_filter.value,
        "page": view.page,
        "total_pages": view.total_pages,
        "total_matches": view.total_matches,
        "records": view.rows,
        "counts": view.counts,
        "eligibility": asdict(view.eligibility),
    }


@router.get("/events/{code}/export")
async def export_submissions(
    request: Request,
    code: str,
    query: Annotated[str, Query(max_length=200)] = "",
    status: StatusFilter = StatusFilter.ALL,
    identity: Identity = Depends(get_identity),
):
    """Filtered submissions as a CSV attachment."""
    require_authenticated(identity)
    event, submissions = await fetch_submissions(code)
    filtered = filter_submissions(submissions, query, status)
    request.state.record_count = len(filtered)
    filename = export_filename(event["code"] or code, datetime.now(timezone.utc).date())
    return Response(
        content=submissions_to_csv(filtered),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
