"""FastAPI dependencies for authentication and shared resources."""

from fastapi import Header

from core import config
from core.authorization import Authorizer
from core.identity import resolve_identity
from models.records import Identity

_authorizer: Authorizer | None = None


def get_authorizer() -> Authorizer:
    """Authorizer built once from the configured admin Slack IDs."""
    global _authorizer
    if _authorizer is None:
        _authorizer = Authorizer(config.ADMIN_SLACK_IDS)
    return _authorizer


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an "Authorization: Bearer <token>" header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_identity(
    authorization: str | None = Header(None, alias="Authorization"),
) -> Identity:
    """
    Resolve the caller's identity from the bearer token.

    Raises:
        Unauthenticated: 401 if the token is missing or rejected
    """
    return await resolve_identity(bearer_token(authorization))


def get_webhook_url() -> str:
    return config.SLACK_WEBHOOK_URL
