"""Tests for CSV export and cooldown storage."""

import csv
import io
from datetime import date, datetime, timezone

import pytest

from models.records import StatusFilter
from services.cooldown import (
    CooldownStore,
    InMemoryCooldownStore,
    JsonFileCooldownStore,
    cooldown_key,
    marker_from_value,
)
from services.export import export_filename, submissions_to_csv
from services.filtering import filter_submissions


def test_csv_has_header_plus_one_line_per_row(sample_submissions):
    rows = filter_submissions(sample_submissions, "", StatusFilter.APPROVED)
    lines = submissions_to_csv(rows).split("\n")
    assert len(lines) == len(rows) + 1
    assert lines[0] == '"Name","Email","Status","Website","Decision Reason"'


def test_csv_fields_quoted_and_escaped(make_submission):
    row = make_submission(
        "Smith, Jo",
        "jo@example.com",
        "Rejected",
        website="https://jo.dev",
        decision_reason='Said "hi", then left',
    )
    text = submissions_to_csv([row])
    assert text.split("\n")[1] == (
        '"Smith, Jo","jo@example.com","Rejected","https://jo.dev","Said ""hi"", then left"'
    )
    parsed = list(csv.reader(io.StringIO(text)))
    assert parsed[1] == ["Smith, Jo", "jo@example.com", "Rejected", "https://jo.dev", 'Said "hi", then left']


def test_csv_line_breaks_inside_values_flattened(make_submission):
    rows = [
        make_submission("Jo", "jo@example.com", "Rejected", decision_reason="Broken link\r\nplease fix"),
        make_submission("Al", "al@example.com", "Pending", decision_reason="line one\nline two\rthree"),
    ]
    lines = submissions_to_csv(rows).split("\n")
    assert len(lines) == len(rows) + 1
    assert lines[1].endswith('"Broken link please fix"')
    assert lines[2].endswith('"line one line two three"')


def test_csv_empty_set_is_header_only():
    assert submissions_to_csv([]) == '"Name","Email","Status","Website","Decision Reason"'


def test_export_filename():
    assert export_filename("ABC123", date(2025, 11, 7)) == "workshop-ABC123-2025-11-07.csv"


def test_cooldown_key():
    assert cooldown_key("ABC123") == "grant-request-ABC123"


def test_marker_from_value():
    marker = marker_from_value("ABC123", "2025-11-07T10:00:00.000Z")
    assert marker.requested_at == datetime(2025, 11, 7, 10, 0, tzinfo=timezone.utc)
    assert marker_from_value("ABC123", "yesterday") is None
    assert marker_from_value("ABC123", None) is None


def test_naive_timestamp_taken_as_utc():
    marker = marker_from_value("ABC123", "2025-11-07T10:00:00")
    assert marker.requested_at.tzinfo is timezone.utc


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path) -> CooldownStore:
    if request.param == "memory":
        return InMemoryCooldownStore()
    return JsonFileCooldownStore(tmp_path / "cooldowns.json")


def test_store_records_per_event(store: CooldownStore):
    assert store.get("ABC123") is None
    requested_at = datetime(2025, 11, 7, 10, 0, tzinfo=timezone.utc)
    store.record("ABC123", requested_at)
    assert store.get("ABC123").requested_at == requested_at
    assert store.get("XYZ789") is None


def test_json_file_store_round_trips_through_disk(tmp_path):
    path = tmp_path / "state" / "cooldowns.json"
    requested_at = datetime(2025, 11, 7, 10, 0, tzinfo=timezone.utc)
    JsonFileCooldownStore(path).record("ABC123", requested_at)

    assert "grant-request-ABC123" in path.read_text()
    assert JsonFileCooldownStore(path).get("ABC123").requested_at == requested_at


def test_json_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "cooldowns.json"
    path.write_text("{not json")
    assert JsonFileCooldownStore(path).get("ABC123") is None
