"""Grant request endpoint."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from api.dependencies import get_identity, get_webhook_url
from api.models.responses import GrantRequestResponse
from models.records import Identity
from services.grants import submit_grant_request

router = APIRouter(prefix="/v1")


@router.post("/grant-request", response_model=GrantRequestResponse)
async def request_grant(
    payload: Annotated[dict[str, Any], Body()],
    _identity: Identity = Depends(get_identity),
    webhook_url: str = Depends(get_webhook_url),
):
    """
    Forward a grant request to the organizers' Slack channel.

    On success the client starts its 24h cooldown from requested_at.
    """
    result = await submit_grant_request(payload, webhook_url)
    return GrantRequestResponse(
        success=result.success,
        message=result.message,
        requested_at=result.requested_at.isoformat(),
    )
