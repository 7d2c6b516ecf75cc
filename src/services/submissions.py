"""
Event and submission fetching from the upstream base, plus normalization of
upstream records into EventRecord / Submission rows.
"""

import logging
from typing import Any

from core.airbridge_client import field_equals, get_airbridge_client
from core.config import (
    EVENT_CODES_TABLE,
    EVENT_FIELDS,
    SUBMISSION_FIELDS,
    WEBSITES_TABLE,
)
from core.errors import NotFound, UpstreamShapeError
from models.records import EventRecord, EventStatus, Submission, SubmissionStatus

logger = logging.getLogger(__name__)


def extract_records(payload: Any) -> list[dict]:
    """
    Find the list of records in an upstream payload.

    Accepts a bare list, or a mapping holding the list under "records" or
    "data".
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for container in ("records", "data"):
            records = payload.get(container)
            if isinstance(records, list):
                return records
    raise UpstreamShapeError("Unrecognized upstream payload")


def _fields(record: Any) -> dict:
    if not isinstance(record, dict):
        return {}
    fields = record.get("fields")
    return fields if isinstance(fields, dict) else record


def _pick(fields: dict, *names: str, default: str = "") -> str:
    """First non-empty value among the given field names."""
    for name in names:
        value = fields.get(name)
        # Linked-record fields come back as a list of record ids
        if isinstance(value, list):
            value = value[0] if value else None
        if value not in (None, ""):
            return str(value)
    return default


def _record_id(record: Any, fields: dict) -> str:
    if isinstance(record, dict) and record.get("id"):
        return str(record["id"])
    return _pick(fields, "id")


def normalize_event_records(payload: Any) -> list[EventRecord]:
    """Map upstream Event Codes records to EventRecord rows, order preserved."""
    events: list[EventRecord] = []
    for record in extract_records(payload):
        fields = _fields(record)
        events.append(
            {
                "id": _record_id(record, fields),
                "code": _pick(fields, "Event Code", "code"),
                "status": _pick(fields, "Status", "status", default=EventStatus.ACTIVE.value),
                "organizer_name": _pick(fields, "Organizer Name", "organizerName"),
                "owner_external_id": _pick(fields, "Slack ID", "slackId"),
            }
        )
    return events


def normalize_submissions(payload: Any, target_event_record_id: str) -> list[Submission]:
    """
    Map upstream Websites records to Submission rows belonging to one event.

    Records are matched on the event-record foreign key, never on the event
    code string. Upstream order is preserved.
    """
    submissions: list[Submission] = []
    for record in extract_records(payload):
        fields = _fields(record)
        event_record_id = _pick(fields, "Event Code", "eventRecordId")
        if event_record_id != target_event_record_id:
            continue
        submissions.append(
            {
                "id": _record_id(record, fields),
                "event_record_id": event_record_id,
                "name": _pick(fields, "Name", "name"),
                "email": _pick(fields, "Email", "email"),
                "status": _pick(
                    fields, "Status", "status", default=SubmissionStatus.PENDING.value
                ),
                "website": _pick(fields, "Playable URL", "website"),
                "decision_reason": _pick(
                    fields, "Decision Reason (to email)", "decisionReason"
                ),
            }
        )
    return submissions


async def fetch_events(owner_external_id: str | None = None) -> list[EventRecord]:
    """Fetch all events, or only those owned by one Slack ID."""
    formula = field_equals("Slack ID", owner_external_id) if owner_external_id else None
    payload = await get_airbridge_client().get_records(
        EVENT_CODES_TABLE, EVENT_FIELDS, filter_formula=formula
    )
    return normalize_event_records(payload)


async def fetch_event_by_code(code: str) -> EventRecord:
    """
    Resolve an event code to its event record.

    Raises:
        NotFound: no record has this exact code, or the match has no id
    """
    payload = await get_airbridge_client().get_records(
        EVENT_CODES_TABLE, EVENT_FIELDS, filter_formula=field_equals("Event Code", code)
    )
    events = normalize_event_records(payload)
    if not events:
        raise NotFound("Event code not found")
    event = events[0]
    if not event["id"]:
        raise NotFound("Event code ID missing")
    return event


async def fetch_submissions(code: str) -> tuple[EventRecord, list[Submission]]:
    """Fetch an event and every submission linked to it."""
    event = await fetch_event_by_code(code)
    payload = await get_airbridge_client().get_records(WEBSITES_TABLE, SUBMISSION_FIELDS)
    submissions = normalize_submissions(payload, event["id"])
    logger.info("Loaded %d submissions for event %s", len(submissions), event["code"])
    return event, submissions
