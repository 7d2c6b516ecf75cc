"""
Slack webhook notifications for grant requests.
"""

import asyncio
import logging

import httpx

from core.config import GRANT_PER_APPROVAL, UPSTREAM_TIMEOUT_SECONDS
from core.errors import NotificationError
from models.records import GrantRequest

logger = logging.getLogger(__name__)


def format_amount(amount: float) -> str:
    """15.0 -> "15", 12.5 -> "12.50"."""
    if float(amount).is_integer():
        return f"{int(amount)}"
    return f"{amount:.2f}"


def format_grant_message(grant: GrantRequest) -> dict:
    """Build the Block Kit message for a grant request."""
    blocks = [
        {
            "type": "header",
            "text": {
                "type": "plain_text",
                "text": "🧋 New Boba Grant Request",
                "emoji": True,
            },
        },
        {
            "type": "section",
            "fields": [
                {"type": "mrkdwn", "text": f"*Event Code:*\n{grant.event_code}"},
                {"type": "mrkdwn", "text": f"*Total Amount:*\n${format_amount(grant.amount)}"},
                {"type": "mrkdwn", "text": f"*Organizer:*\n{grant.organizer_name}"},
                {"type": "mrkdwn", "text": f"*Email:*\n{grant.organizer_email}"},
                {
                    "type": "mrkdwn",
                    "text": f"*Approved Submissions:*\n{grant.approved_count} × ${GRANT_PER_APPROVAL}",
                },
                {"type": "mrkdwn", "text": f"*Payment Method:*\n{grant.payment_method}"},
            ],
        },
    ]

    if grant.additional_info:
        blocks.append(
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": f"*Additional Info:*\n{grant.additional_info}",
                },
            }
        )

    blocks.append({"type": "divider"})
    return {"blocks": blocks}


async def send_grant_notification(
    grant: GrantRequest,
    webhook_url: str,
    timeout: float = UPSTREAM_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """
    Post the grant request to the Slack webhook. No retries.

    Raises:
        NotificationError: transport failure, timeout or non-2xx answer
    """
    message = format_grant_message(grant)

    try:
        async with asyncio.timeout(timeout):
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                resp = await client.post(webhook_url, json=message)
    except (httpx.TimeoutException, TimeoutError):
        logger.error("Slack notification for %s timed out", grant.event_code)
        raise NotificationError("Failed to send notification", details=["Slack webhook timed out"])
    except httpx.HTTPError as e:
        logger.error("Error sending Slack notification for %s: %s", grant.event_code, e)
        raise NotificationError("Failed to send notification")

    if resp.is_error:
        logger.error(
            "Failed to send Slack notification (%s): %s", resp.status_code, resp.text
        )
        raise NotificationError("Failed to send Slack notification")

    logger.info("Sent grant request notification for %s", grant.event_code)
