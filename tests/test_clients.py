"""Tests for the Airbridge and identity provider clients."""

import asyncio
import json

import httpx
import pytest

from core.airbridge_client import AirbridgeClient, field_equals, quote_formula_value
from core.errors import (
    ConfigurationError,
    Unauthenticated,
    UpstreamError,
    UpstreamShapeError,
    UpstreamTimeout,
)
from core.identity import identity_from_profile, resolve_identity


def airbridge(handler, **kwargs):
    return AirbridgeClient(api_key="secret", transport=httpx.MockTransport(handler), **kwargs)


class TestAirbridgeClient:
    def test_request_shape(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"records": []})

        asyncio.run(
            airbridge(handler).get_records(
                "Event Codes", ["Event Code"], filter_formula="{Event Code} = 'A'"
            )
        )
        request = seen[0]
        assert request.url.path == "/v0.2/Boba Club Dashboard/Event Codes"
        assert request.url.params["authKey"] == "secret"
        assert json.loads(request.url.params["select"]) == {
            "fields": ["Event Code"],
            "filterByFormula": "{Event Code} = 'A'",
        }
        assert request.headers["accept"] == "application/json"

    def test_returns_decoded_payload(self):
        client = airbridge(lambda request: httpx.Response(200, json=[{"id": "r1"}]))
        assert asyncio.run(client.get_records("Websites", [])) == [{"id": "r1"}]

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(UpstreamTimeout, match="8s"):
            asyncio.run(airbridge(handler, timeout=8).get_records("Websites", []))

    def test_non_json_body(self):
        client = airbridge(lambda request: httpx.Response(200, text="gateway says no"))
        with pytest.raises(UpstreamShapeError):
            asyncio.run(client.get_records("Websites", []))

    def test_upstream_status_passed_through(self):
        client = airbridge(lambda request: httpx.Response(429, json={"error": "slow down"}))
        with pytest.raises(UpstreamError) as exc_info:
            asyncio.run(client.get_records("Websites", []))
        assert exc_info.value.status_code == 429

    def test_missing_key(self):
        with pytest.raises(ConfigurationError):
            asyncio.run(AirbridgeClient(api_key="").get_records("Websites", []))

    def test_formula_quoting_escapes_quotes(self):
        assert quote_formula_value("O'Brien") == "'O\\'Brien'"
        assert field_equals("Event Code", "x' OR '1'='1") == (
            "{Event Code} = 'x\\' OR \\'1\\'=\\'1'"
        )


class TestIdentity:
    def test_profile_mapping(self):
        identity = identity_from_profile(
            {
                "identity": {
                    "id": "ident_1",
                    "first_name": "Ada",
                    "last_name": "Lovelace",
                    "email": "ada@example.com",
                    "slack_id": "U0OWNER",
                }
            }
        )
        assert identity.name == "Ada Lovelace"
        assert identity.external_id == "U0OWNER"

    def test_profile_fallbacks(self):
        identity = identity_from_profile({"sub": "s1", "name": "Grace"})
        assert identity.id == "s1"
        assert identity.name == "Grace"
        assert identity.email == ""
        assert identity.external_id == ""

    def test_non_dict_identity_falls_back_to_top_level(self):
        identity = identity_from_profile({"identity": "oops", "id": "x1", "name": "Grace"})
        assert identity.id == "x1"
        assert identity.name == "Grace"

    def test_empty_identity_falls_back_to_top_level(self):
        assert identity_from_profile({"identity": {}, "sub": "s2"}).id == "s2"

    def test_resolve_sends_bearer_token(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"identity": {"id": "i1", "slack_id": "U1"}})

        identity = asyncio.run(
            resolve_identity("tok123", url="https://auth.test/me", transport=httpx.MockTransport(handler))
        )
        assert identity.external_id == "U1"
        assert seen[0].headers["authorization"] == "Bearer tok123"

    def test_rejected_token(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(401, json={}))
        with pytest.raises(Unauthenticated):
            asyncio.run(resolve_identity("bad", url="https://auth.test/me", transport=transport))

    def test_missing_token(self):
        with pytest.raises(Unauthenticated):
            asyncio.run(resolve_identity(None))

    def test_provider_timeout(self):
        def handler(request):
            raise httpx.ConnectTimeout("slow", request=request)

        with pytest.raises(UpstreamTimeout):
            asyncio.run(
                resolve_identity("tok", url="https://auth.test/me", transport=httpx.MockTransport(handler))
            )


class TestWholeCallDeadline:
    """A body that trickles in under the per-read timeout still hits the deadline."""

    def test_airbridge_slow_body(self, trickling_server):
        def make_call(base_url):
            client = AirbridgeClient(api_key="k", base_url=base_url, timeout=1.0)
            return client.get_records("Websites", [])

        error, elapsed = asyncio.run(trickling_server(make_call))
        assert isinstance(error, UpstreamTimeout)
        assert elapsed < 1.5

    def test_identity_slow_body(self, trickling_server):
        def make_call(base_url):
            return resolve_identity("tok", url=f"{base_url}/api/v1/me", timeout=1.0)

        error, elapsed = asyncio.run(trickling_server(make_call))
        assert isinstance(error, UpstreamTimeout)
        assert elapsed < 1.5
