"""
Grant request validation and sanitization.
"""

import html
import math
import re
from typing import Any

from core.config import (
    GRANT_PER_APPROVAL,
    MAX_ADDITIONAL_INFO_LENGTH,
    MAX_APPROVED_COUNT,
    MAX_EMAIL_LENGTH,
    MAX_EVENT_CODE_LENGTH,
    MAX_GRANT_AMOUNT,
    MAX_NAME_LENGTH,
    MIN_APPROVED_FOR_GRANT,
)
from core.errors import ValidationError
from models.records import GrantRequest, PaymentMethod

PAYMENT_METHODS = frozenset(method.value for method in PaymentMethod)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# (wire name, snake_case name)
REQUIRED_FIELDS = [
    ("eventCode", "event_code"),
    ("organizerName", "organizer_name"),
    ("organizerEmail", "organizer_email"),
    ("amount", "amount"),
    ("approvedCount", "approved_count"),
    ("paymentMethod", "payment_method"),
]


def sanitize_text(value: Any, max_length: int) -> str:
    """Truncate to max_length, then escape < > & ' " for outbound messages."""
    text = str(value).strip()[:max_length]
    return html.escape(text, quote=True)


def _get(payload: dict, wire_name: str, snake_name: str) -> Any:
    if wire_name in payload:
        return payload[wire_name]
    return payload.get(snake_name)


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value: Any) -> float:
    """Amount must be a number with 0 < amount <= MAX_GRANT_AMOUNT."""
    if isinstance(value, bool):
        raise ValidationError("invalid amount")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError("invalid amount")
    if not math.isfinite(amount) or not 0 < amount <= MAX_GRANT_AMOUNT:
        raise ValidationError("invalid amount")
    return amount


def parse_approved_count(value: Any) -> int:
    """Approved count must be an integer between the grant minimum and ceiling."""
    if isinstance(value, bool):
        raise ValidationError("invalid approved count")
    if isinstance(value, int):
        count = value
    elif isinstance(value, float) and value.is_integer():
        count = int(value)
    elif isinstance(value, str) and re.fullmatch(r"\s*\d+\s*", value):
        count = int(value)
    else:
        raise ValidationError("invalid approved count")
    if not MIN_APPROVED_FOR_GRANT <= count <= MAX_APPROVED_COUNT:
        raise ValidationError("invalid approved count")
    return count


def validate_grant_request(payload: Any) -> GrantRequest:
    """
    Validate a grant request payload and return a sanitized GrantRequest.

    Checks, in order:
    1. All required fields are present
    2. Organizer email looks like local@domain.tld
    3. Amount is a number in range
    4. Approved count is an integer in range
    5. Amount equals approved count times the per-approval grant
    6. Payment method is one of the supported methods

    Raises:
        ValidationError: on the first failing check
    """
    if not isinstance(payload, dict):
        raise ValidationError("missing field", details=["Request body must be a JSON object"])

    missing = [
        wire_name
        for wire_name, snake_name in REQUIRED_FIELDS
        if _is_missing(_get(payload, wire_name, snake_name))
    ]
    if missing:
        raise ValidationError("missing field", details=missing)

    email = str(_get(payload, "organizerEmail", "organizer_email")).strip()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("invalid email")

    amount = parse_amount(_get(payload, "amount", "amount"))
    approved_count = parse_approved_count(_get(payload, "approvedCount", "approved_count"))
    if amount != approved_count * GRANT_PER_APPROVAL:
        raise ValidationError(
            "invalid amount",
            details=[f"Expected {approved_count * GRANT_PER_APPROVAL} for {approved_count} approved"],
        )

    payment_method = _get(payload, "paymentMethod", "payment_method")
    if not isinstance(payment_method, str) or payment_method not in PAYMENT_METHODS:
        raise ValidationError("invalid payment method")

    additional_info = _get(payload, "additionalInfo", "additional_info") or ""

    return GrantRequest(
        event_code=sanitize_text(_get(payload, "eventCode", "event_code"), MAX_EVENT_CODE_LENGTH),
        organizer_name=sanitize_text(
            _get(payload, "organizerName", "organizer_name"), MAX_NAME_LENGTH
        ),
        organizer_email=sanitize_text(email, MAX_EMAIL_LENGTH),
        amount=amount,
        approved_count=approved_count,
        payment_method=payment_method,
        additional_info=sanitize_text(additional_info, MAX_ADDITIONAL_INFO_LENGTH),
    )
