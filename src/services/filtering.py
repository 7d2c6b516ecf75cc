"""
Submission filtering, pagination and grant eligibility for the event view.

Everything here is pure: callers pass in the submissions, the cooldown marker
and the current time.
"""

import math
from collections import Counter
from datetime import datetime, timedelta

from core.config import (
    GRANT_COOLDOWN_HOURS,
    GRANT_PER_APPROVAL,
    MIN_APPROVED_FOR_GRANT,
    PAGE_SIZE,
)
from models.records import (
    CooldownMarker,
    Eligibility,
    EventStatus,
    StatusFilter,
    Submission,
    SubmissionStatus,
)

COOLDOWN = timedelta(hours=GRANT_COOLDOWN_HOURS)


def _status(submission: Submission) -> str:
    return (submission.get("status") or "").strip().lower()


def _email(submission: Submission) -> str:
    return (submission.get("email") or "").strip().lower()


def matches_query(submission: Submission, query: str) -> bool:
    """Case-insensitive substring match on name, email or website."""
    if not query:
        return True
    needle = query.lower()
    return any(
        needle in (submission.get(field) or "").lower()
        for field in ("name", "email", "website")
    )


def approved_emails(submissions: list[Submission]) -> set[str]:
    """Emails with at least one approved submission."""
    approved = SubmissionStatus.APPROVED.value.lower()
    return {_email(s) for s in submissions if _status(s) == approved}


def filter_submissions(
    submissions: list[Submission],
    query: str = "",
    status_filter: StatusFilter | str = StatusFilter.ALL,
) -> list[Submission]:
    """
    Return the submissions matching a search query and status filter.

    The Rejected filter is a "needs attention" bucket: a row matches when it
    is itself rejected, or when no row sharing its email has been approved.
    Other filters compare status case-insensitively; All matches everything.
    Relative order is preserved.
    """
    wanted = StatusFilter(status_filter)
    with_approval = approved_emails(submissions) if wanted is StatusFilter.REJECTED else set()

    def status_matches(submission: Submission) -> bool:
        if wanted is StatusFilter.ALL:
            return True
        if wanted is StatusFilter.REJECTED:
            return (
                _status(submission) == SubmissionStatus.REJECTED.value.lower()
                or _email(submission) not in with_approval
            )
        return _status(submission) == wanted.value.lower()

    return [s for s in submissions if matches_query(s, query) and status_matches(s)]


def page_count(count: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(count / page_size)


def paginate(
    filtered: list[Submission], page_number: int, page_size: int = PAGE_SIZE
) -> list[Submission]:
    """Slice one page (1-based). Keeping page_number in range is the caller's job."""
    start = (page_number - 1) * page_size
    return filtered[start:start + page_size]


def clamp_page(page_number: int, count: int, page_size: int = PAGE_SIZE) -> int:
    """Keep a page number within [1, page_count] after the filtered set changes."""
    return max(1, min(page_number, page_count(count, page_size)))


def count_approved(submissions: list[Submission]) -> int:
    """Every approved row counts, including repeat emails."""
    approved = SubmissionStatus.APPROVED.value.lower()
    return sum(1 for s in submissions if _status(s) == approved)


def status_counts(submissions: list[Submission]) -> dict[str, int]:
    """Totals per known status, plus an overall total."""
    counts = Counter(_status(s) for s in submissions)
    totals = {status.value: counts.get(status.value.lower(), 0) for status in SubmissionStatus}
    totals["Total"] = len(submissions)
    return totals


def cooldown_remaining(marker: CooldownMarker | None, now: datetime) -> timedelta | None:
    """Time left on the grant cooldown, or None when no cooldown is active."""
    if marker is None:
        return None
    elapsed = now - marker.requested_at
    if elapsed >= COOLDOWN:
        return None
    return min(COOLDOWN - elapsed, COOLDOWN)


def grant_amount(approved_count: int) -> int:
    return approved_count * GRANT_PER_APPROVAL


def compute_eligibility(
    submissions: list[Submission],
    event_status: EventStatus | str,
    marker: CooldownMarker | None,
    now: datetime,
) -> Eligibility:
    """
    Decide whether the grant button is enabled and how it is labelled.

    Label priority: missing approvals, then deactivated event (grant already
    sent), then active cooldown, then "Request Grant".
    """
    approved_count = count_approved(submissions)
    remaining = cooldown_remaining(marker, now)
    deactivated = (
        str(getattr(event_status, "value", event_status)).strip().lower()
        == EventStatus.DEACTIVATED.value.lower()
    )

    if approved_count < MIN_APPROVED_FOR_GRANT:
        label = f"Need {MIN_APPROVED_FOR_GRANT - approved_count} more approved"
    elif deactivated:
        label = "Grant Sent"
    elif remaining is not None:
        hours = math.ceil(remaining / timedelta(hours=1))
        label = f"Requested ({hours}h cooldown)"
    else:
        label = "Request Grant"

    enabled = (
        approved_count >= MIN_APPROVED_FOR_GRANT and not deactivated and remaining is None
    )

    return Eligibility(
        amount=grant_amount(approved_count),
        approved_count=approved_count,
        enabled=enabled,
        reason_label=label,
    )
