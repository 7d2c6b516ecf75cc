"""
Grant cooldown markers.

Browsers keep the marker in local storage under "grant-request-<code>". The
stores here play that role for the CLI and for tests; the eligibility engine
never reads a store itself.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from core.config import COOLDOWN_KEY_PREFIX
from models.records import CooldownMarker

logger = logging.getLogger(__name__)


def cooldown_key(event_code: str) -> str:
    return f"{COOLDOWN_KEY_PREFIX}{event_code}"


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def marker_from_value(event_code: str, value: str | None) -> CooldownMarker | None:
    """Build a marker from a stored value; unreadable values count as absent."""
    requested_at = parse_timestamp(value)
    if requested_at is None:
        return None
    return CooldownMarker(event_code=event_code, requested_at=requested_at)


class CooldownStore(Protocol):
    def get(self, event_code: str) -> CooldownMarker | None: ...

    def record(self, event_code: str, requested_at: datetime) -> None: ...


class InMemoryCooldownStore:
    def __init__(self):
        self._values: dict[str, str] = {}

    def get(self, event_code: str) -> CooldownMarker | None:
        return marker_from_value(event_code, self._values.get(cooldown_key(event_code)))

    def record(self, event_code: str, requested_at: datetime) -> None:
        self._values[cooldown_key(event_code)] = requested_at.isoformat()


class JsonFileCooldownStore:
    """Key/value store persisted as a flat JSON object on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable cooldown file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, event_code: str) -> CooldownMarker | None:
        return marker_from_value(event_code, self._load().get(cooldown_key(event_code)))

    def record(self, event_code: str, requested_at: datetime) -> None:
        data = self._load()
        data[cooldown_key(event_code)] = requested_at.isoformat()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
