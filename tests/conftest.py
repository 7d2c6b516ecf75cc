"""
Pytest configuration and shared fixtures.
"""

import asyncio
import json
import sys
import time
from pathlib import Path
from urllib.parse import unquote

import httpx
import pytest
from faker import Faker

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core import config  # noqa: E402
from core.airbridge_client import AirbridgeClient, set_airbridge_client  # noqa: E402
from models.records import Identity  # noqa: E402

EVENT_RECORD_ID = "recEVENT1"
OTHER_EVENT_RECORD_ID = "recEVENT2"


@pytest.fixture(autouse=True)
def no_request_log(monkeypatch):
    """Keep tests from writing to the real request log database."""
    monkeypatch.setattr(config, "REQUEST_LOG_ENABLED", False)


@pytest.fixture
def make_submission():
    """Factory for Submission rows."""

    def _make(name, email, status="Pending", website="", decision_reason="", **extra):
        row = {
            "id": f"rec{name.replace(' ', '')}",
            "event_record_id": EVENT_RECORD_ID,
            "name": name,
            "email": email,
            "status": status,
            "website": website or f"https://{name.split()[0].lower()}.github.io/boba",
            "decision_reason": decision_reason,
        }
        row.update(extra)
        return row

    return _make


@pytest.fixture
def sample_submissions(make_submission):
    """Event ABC123: 3 approved, 1 pending, 1 rejected."""
    return [
        make_submission("Ada Lovelace", "ada@example.com", "Approved"),
        make_submission("Grace Hopper", "grace@example.com", "Approved"),
        make_submission("Alan Turing", "alan@example.com", "Approved"),
        make_submission("Linus Torvalds", "linus@example.com", "Pending"),
        make_submission(
            "Margaret Hamilton",
            "margaret@example.com",
            "Rejected",
            decision_reason="Site is not playable",
        ),
    ]


@pytest.fixture
def many_submissions(make_submission):
    """25 generated submissions with mixed statuses."""
    fake = Faker()
    Faker.seed(1234)
    statuses = ["Approved", "Pending", "Rejected"]
    return [
        make_submission(fake.name(), fake.unique.email(), statuses[i % 3])
        for i in range(25)
    ]


@pytest.fixture
def sample_event():
    return {
        "id": EVENT_RECORD_ID,
        "code": "ABC123",
        "status": "Active",
        "organizer_name": "Ada Lovelace",
        "owner_external_id": "U0OWNER",
    }


@pytest.fixture
def organizer():
    return Identity(id="usr_1", name="Ada Lovelace", email="ada@example.com", external_id="U0OWNER")


@pytest.fixture
def admin():
    return Identity(id="usr_2", name="Boba Admin", email="admin@example.com", external_id="U0ADMIN")


def upstream_event_record(record_id, code, status="Active", organizer="Ada Lovelace", slack_id="U0OWNER"):
    return {
        "id": record_id,
        "fields": {
            "Event Code": code,
            "Status": status,
            "Organizer Name": organizer,
            "Slack ID": slack_id,
        },
    }


def upstream_website_record(record_id, event_record_id, name, email, status=None, url="", reason=""):
    fields = {
        "Name": name,
        "Email": email,
        "Event Code": [event_record_id],
        "Playable URL": url,
        "Decision Reason (to email)": reason,
    }
    if status is not None:
        fields["Status"] = status
    return {"id": record_id, "fields": fields}


@pytest.fixture
def upstream_tables():
    """Records served by the fake Airbridge, keyed by table name."""
    return {
        "Event Codes": [
            upstream_event_record(EVENT_RECORD_ID, "ABC123"),
            upstream_event_record(OTHER_EVENT_RECORD_ID, "XYZ789", slack_id="U0OTHER"),
        ],
        "Websites": [
            upstream_website_record("rec1", EVENT_RECORD_ID, "Ada Lovelace", "ada@example.com", "Approved"),
            upstream_website_record("rec2", OTHER_EVENT_RECORD_ID, "Someone Else", "else@example.com", "Approved"),
            upstream_website_record("rec3", EVENT_RECORD_ID, "Grace Hopper", "grace@example.com", "Approved"),
            upstream_website_record("rec4", EVENT_RECORD_ID, "Alan Turing", "alan@example.com", "Approved"),
            upstream_website_record("rec5", EVENT_RECORD_ID, "Linus Torvalds", "linus@example.com"),
            upstream_website_record(
                "rec6", EVENT_RECORD_ID, "Margaret Hamilton", "margaret@example.com", "Rejected",
                reason="Site is not playable",
            ),
        ],
    }


def _apply_formula(records, formula):
    """Understand the {Field} = 'value' formulas the client sends."""
    if not formula:
        return records
    field_part, _, value_part = formula.partition(" = ")
    field_name = field_part.strip("{}")
    value = value_part[1:-1].replace("\\'", "'")
    return [r for r in records if r["fields"].get(field_name) == value]


@pytest.fixture
def upstream_requests():
    """Every request the fake Airbridge received."""
    return []


@pytest.fixture
def fake_airbridge(upstream_tables, upstream_requests):
    """Install an Airbridge client backed by an in-memory MockTransport."""

    def handler(request: httpx.Request) -> httpx.Response:
        upstream_requests.append(request)
        table = unquote(request.url.path.rsplit("/", 1)[-1])
        select = json.loads(request.url.params.get("select", "{}"))
        records = _apply_formula(upstream_tables.get(table, []), select.get("filterByFormula"))
        return httpx.Response(200, json={"records": records})

    client = AirbridgeClient(api_key="test-key", transport=httpx.MockTransport(handler))
    set_airbridge_client(client)
    yield client
    set_airbridge_client(None)


@pytest.fixture
def trickling_server():
    """
    Run a call against a local HTTP server that sends its 8-byte body one
    byte every 0.6s. Returns (raised error or None, elapsed seconds).
    """

    async def handle(reader, writer):
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(
                b"HTTP/1.1 200 OK\r\n"
                b"Content-Type: application/json\r\n"
                b"Content-Length: 8\r\n\r\n"
            )
            await writer.drain()
            for byte in b'{"a": 1}':
                await asyncio.sleep(0.6)
                writer.write(bytes([byte]))
                await writer.drain()
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    async def _run(make_call):
        server = await asyncio.start_server(handle, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        started = time.monotonic()
        try:
            await make_call(f"http://127.0.0.1:{port}")
        except Exception as e:
            return e, time.monotonic() - started
        finally:
            server.close()
        return None, time.monotonic() - started

    return _run
