"""Event code listing endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies import get_authorizer, get_identity
from api.models.responses import EventListResponse
from core.authorization import ALL_EVENTS, AccessDecision, Authorizer, EventsOwnedBy
from models.records import Identity
from services.submissions import fetch_events

router = APIRouter(prefix="/v1/event-codes")


@router.get("/all", response_model=EventListResponse)
async def list_all_events(
    request: Request,
    identity: Identity = Depends(get_identity),
    authorizer: Authorizer = Depends(get_authorizer),
):
    """Every event. Admins only."""
    authorizer.decide(identity, ALL_EVENTS)
    events = await fetch_events()
    request.state.record_count = len(events)
    return {"records": events}


@router.get("/by-owner", response_model=EventListResponse)
async def list_events_by_owner(
    request: Request,
    external_id: Annotated[str, Query(min_length=1, description="Organizer Slack ID")],
    identity: Identity = Depends(get_identity),
    authorizer: Authorizer = Depends(get_authorizer),
):
    """
    Events owned by one organizer.

    Organizers may only list their own events; admins may list anyone's.
    """
    decision = authorizer.decide(identity, EventsOwnedBy(external_id))
    owner = identity.external_id if decision is AccessDecision.ALLOW_OWN else external_id
    events = await fetch_events(owner_external_id=owner)
    request.state.record_count = len(events)
    return {"records": events}
