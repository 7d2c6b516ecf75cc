"""
Grant request submission: validate, then forward to Slack.

Nothing is stored here; the Slack message is the only record of a request.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import httpx

from core.validation import validate_grant_request
from services.notifications import send_grant_notification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GrantSubmission:
    success: bool
    message: str
    requested_at: datetime


async def submit_grant_request(
    payload: Any,
    webhook_url: str,
    now: datetime | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GrantSubmission:
    """
    Validate a grant request and forward it.

    Validation finishes before any outbound call. When no webhook is
    configured the request is still accepted.

    Raises:
        ValidationError: bad payload, nothing was sent
        NotificationError: webhook call failed, the request as a whole failed
    """
    grant = validate_grant_request(payload)
    requested_at = now or datetime.now(timezone.utc)

    if not webhook_url:
        logger.warning(
            "Grant request for %s received but no Slack webhook is configured",
            grant.event_code,
        )
        return GrantSubmission(
            success=True,
            message="Grant request received (Slack notifications not configured)",
            requested_at=requested_at,
        )

    await send_grant_notification(grant, webhook_url, transport=transport)
    return GrantSubmission(
        success=True,
        message="Grant request submitted successfully",
        requested_at=requested_at,
    )
