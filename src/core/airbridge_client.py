"""
Airbridge client setup with lazy initialization.

Airbridge exposes the spreadsheet base as JSON over HTTP. Every call is a
single GET bounded by UPSTREAM_TIMEOUT_SECONDS; nothing is retried.
"""

import asyncio
import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from core import config
from core.errors import ConfigurationError, UpstreamError, UpstreamShapeError, UpstreamTimeout

logger = logging.getLogger(__name__)


def quote_formula_value(value: str) -> str:
    """Quote a value for use inside a filterByFormula expression."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def field_equals(field_name: str, value: str) -> str:
    """Build an exact-match formula such as {Event Code} = 'ABC123'."""
    return f"{{{field_name}}} = {quote_formula_value(value)}"


class AirbridgeClient:
    """Thin async wrapper around the Airbridge record endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = config.AIRBRIDGE_BASE_URL,
        base_name: str = config.AIRBRIDGE_BASE_NAME,
        timeout: float = config.UPSTREAM_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.base_name = base_name
        self.timeout = timeout
        self.transport = transport

    def table_url(self, table: str) -> str:
        return f"{self.base_url}/{quote(self.base_name)}/{quote(table)}"

    async def get_records(
        self,
        table: str,
        fields: list[str],
        filter_formula: str | None = None,
    ) -> Any:
        """
        Fetch records from a table and return the decoded JSON payload.

        Raises:
            ConfigurationError: API key is not configured
            UpstreamTimeout: no answer within the timeout
            UpstreamShapeError: body is not JSON
            UpstreamError: non-2xx status from Airbridge
        """
        if not self.api_key:
            raise ConfigurationError("Missing AIRBRIDGE_API_KEY")

        select: dict[str, Any] = {"fields": fields}
        if filter_formula:
            select["filterByFormula"] = filter_formula
        params = {"select": json.dumps(select), "authKey": self.api_key}

        # httpx timeouts are per phase; the deadline bounds the whole call
        try:
            async with asyncio.timeout(self.timeout):
                async with httpx.AsyncClient(
                    timeout=self.timeout, transport=self.transport
                ) as client:
                    resp = await client.get(
                        self.table_url(table),
                        params=params,
                        headers={"Accept": "application/json"},
                    )
        except (httpx.TimeoutException, TimeoutError):
            logger.warning("Airbridge request to %s timed out", table)
            raise UpstreamTimeout(
                f"Upstream request timed out after {self.timeout:g}s"
            )
        except httpx.HTTPError as e:
            logger.error("Airbridge request to %s failed: %s", table, e)
            raise UpstreamError("Upstream request failed", status_code=502)

        try:
            payload = resp.json()
        except ValueError:
            logger.warning("Airbridge returned non-JSON body for %s", table)
            raise UpstreamShapeError("Bad JSON from upstream")

        if resp.is_error:
            logger.warning("Airbridge returned %s for %s", resp.status_code, table)
            raise UpstreamError("Upstream error", status_code=resp.status_code)

        return payload


_airbridge_client: AirbridgeClient | None = None


def get_airbridge_client() -> AirbridgeClient:
    """Get or create the Airbridge client (lazy initialization)."""
    global _airbridge_client
    if _airbridge_client is None:
        _airbridge_client = AirbridgeClient(api_key=config.AIRBRIDGE_API_KEY)
    return _airbridge_client


def set_airbridge_client(client: AirbridgeClient | None) -> None:
    """Replace the shared client (None resets to lazy creation)."""
    global _airbridge_client
    _airbridge_client = client
