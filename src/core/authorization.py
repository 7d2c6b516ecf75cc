"""
Access decisions for event listings and submission reads.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from core.errors import Forbidden, Unauthenticated
from models.records import Identity


class AccessDecision(str, Enum):
    ALLOW_ALL = "ALLOW_ALL"
    ALLOW_OWN = "ALLOW_OWN"


@dataclass(frozen=True)
class EventsOwnedBy:
    external_id: str


class _AllEvents:
    def __repr__(self) -> str:
        return "ALL_EVENTS"


ALL_EVENTS = _AllEvents()

Resource = _AllEvents | EventsOwnedBy


class Authorizer:
    """Decides what a caller may list. The admin set is fixed at construction."""

    def __init__(self, admin_ids: Iterable[str]):
        self.admin_ids = frozenset(admin_ids)

    def is_admin(self, identity: Identity) -> bool:
        return bool(identity.external_id) and identity.external_id in self.admin_ids

    def decide(self, identity: Identity | None, resource: Resource) -> AccessDecision:
        """
        Decide access to an event listing.

        Raises:
            Unauthenticated: no identity
            Forbidden: non-admin asking for anything but their own events
        """
        if identity is None:
            raise Unauthenticated("Unauthorized")
        if self.is_admin(identity):
            return AccessDecision.ALLOW_ALL
        if (
            isinstance(resource, EventsOwnedBy)
            and identity.external_id
            and resource.external_id == identity.external_id
        ):
            return AccessDecision.ALLOW_OWN
        if resource is ALL_EVENTS:
            raise Forbidden("Forbidden: Admin access required")
        raise Forbidden("Forbidden: events belong to another organizer")


def require_authenticated(identity: Identity | None) -> Identity:
    """Submission reads only need a signed-in caller, not ownership."""
    if identity is None:
        raise Unauthenticated("Unauthorized")
    return identity
