"""
Identity lookup against the Hack Club auth service.
"""

import asyncio
import logging

import httpx

from core import config
from core.errors import Unauthenticated, UpstreamTimeout
from models.records import Identity

logger = logging.getLogger(__name__)


def identity_from_profile(data: dict) -> Identity:
    """Map a /api/v1/me response body to an Identity."""
    profile = data.get("identity")
    if not isinstance(profile, dict) or not profile:
        profile = data
    first = profile.get("first_name") or ""
    last = profile.get("last_name") or ""
    name = f"{first} {last}".strip() or profile.get("name") or ""
    return Identity(
        id=str(profile.get("id") or profile.get("sub") or ""),
        name=name,
        email=profile.get("email") or "",
        external_id=profile.get("slack_id") or "",
    )


async def resolve_identity(
    token: str | None,
    url: str = config.IDENTITY_URL,
    timeout: float = config.UPSTREAM_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Identity:
    """
    Resolve a bearer token to the signed-in user's identity.

    Raises:
        Unauthenticated: token missing or rejected by the provider
        UpstreamTimeout: provider did not answer in time
    """
    if not token:
        raise Unauthenticated("Unauthorized")

    try:
        async with asyncio.timeout(timeout):
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                resp = await client.get(
                    url,
                    headers={
                        "Authorization": f"Bearer {token}",
                        "Accept": "application/json",
                    },
                )
    except (httpx.TimeoutException, TimeoutError):
        raise UpstreamTimeout(f"Identity lookup timed out after {timeout:g}s")
    except httpx.HTTPError as e:
        logger.error("Identity lookup failed: %s", e)
        raise Unauthenticated("Unauthorized")

    if resp.is_error:
        logger.info("Identity provider rejected token (%s)", resp.status_code)
        raise Unauthenticated("Unauthorized")

    try:
        data = resp.json()
    except ValueError:
        raise Unauthenticated("Unauthorized")

    identity = identity_from_profile(data if isinstance(data, dict) else {})
    if not identity.id:
        raise Unauthenticated("Unauthorized")
    return identity
