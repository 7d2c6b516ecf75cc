"""
Data models for identities, event records, submissions and grant requests.

Upstream-shaped rows (events, submissions) are TypedDicts so they pass
straight through to JSON responses. Values computed by this service are
frozen dataclasses.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TypedDict


class SubmissionStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class StatusFilter(str, Enum):
    """Status filter choices on the event view."""
    ALL = "All"
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class EventStatus(str, Enum):
    ACTIVE = "Active"
    DEACTIVATED = "Deactivated"


class PaymentMethod(str, Enum):
    REIMBURSEMENT = "Reimbursement"
    HCB_ORG_TRANSFER = "HCB Org Transfer"
    GRANT_CARD = "Grant Card"


@dataclass(frozen=True)
class Identity:
    """Signed-in user as reported by the identity provider."""

    id: str
    name: str
    email: str
    external_id: str  # Slack ID


class EventRecord(TypedDict):
    """One workshop instance."""
    id: str
    code: str
    status: str
    organizer_name: str
    owner_external_id: str


class Submission(TypedDict):
    """One participant's website submission."""
    id: str
    event_record_id: str
    name: str
    email: str
    status: str
    website: str
    decision_reason: str


@dataclass(frozen=True)
class GrantRequest:
    """Validated and sanitized grant request, ready to forward."""

    event_code: str
    organizer_name: str
    organizer_email: str
    amount: float
    approved_count: int
    payment_method: str
    additional_info: str = ""


@dataclass(frozen=True)
class CooldownMarker:
    event_code: str
    requested_at: datetime


@dataclass(frozen=True)
class Eligibility:
    """Grant button state for an event."""

    amount: int
    approved_count: int
    enabled: bool
    reason_label: str
