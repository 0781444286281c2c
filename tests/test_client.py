"""
Tests for terraform_pinto.client.PintoClient

Uses responses to mock the Pinto REST API.
"""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from time import sleep
from urllib.parse import parse_qs, urlparse

import pytest
import requests
import responses as rsps_lib

from terraform_pinto import ClientCredentials, PintoClient, Record, RemoteError, Zone

BASE_URL = "https://pinto.example.com"
TOKEN_URL = "https://auth.pinto.example.com/connect/token"


def query(call) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(urlparse(call.request.url).query).items()}


def make_record(**kwargs) -> Record:
    defaults = dict(
        name="www",
        type="A",
        data="1.2.3.4",
        zone="env0.co.",
        class_="IN",
        ttl=300,
        environment="prod1",
        provider="digitalocean",
    )
    defaults.update(kwargs)
    return Record(**defaults)


# ── auth ──────────────────────────────────────────────────────────────────────


class TestAuth:
    @rsps_lib.activate
    def test_api_key_header(self):
        rsps_lib.add(rsps_lib.GET, f"{BASE_URL}/api/dns/zones", json=[])
        client = PintoClient(BASE_URL, api_key="secret-key")
        client.list_zones("digitalocean")
        request = rsps_lib.calls[0].request
        assert request.headers["X-Api-Key"] == "secret-key"
        assert "Authorization" not in request.headers

    @rsps_lib.activate
    def test_client_credentials_bearer(self, load_fixture):
        rsps_lib.add(rsps_lib.POST, TOKEN_URL, json=load_fixture("token.json"))
        rsps_lib.add(rsps_lib.GET, f"{BASE_URL}/api/dns/zones", json=[])
        creds = ClientCredentials.from_scope_string(
            TOKEN_URL, "machineclient", "s3cret", "openapigateway,nexus"
        )
        client = PintoClient(BASE_URL, credentials=creds)
        client.list_zones("digitalocean")

        token_form = parse_qs(rsps_lib.calls[0].request.body)
        assert token_form["grant_type"] == ["client_credentials"]
        assert token_form["client_id"] == ["machineclient"]
        assert token_form["scope"] == ["openapigateway nexus"]
        assert rsps_lib.calls[1].request.headers["Authorization"] == "Bearer test-bearer-token-abc123"

    @rsps_lib.activate
    def test_token_is_cached(self, load_fixture):
        rsps_lib.add(rsps_lib.POST, TOKEN_URL, json=load_fixture("token.json"))
        rsps_lib.add(rsps_lib.GET, f"{BASE_URL}/api/dns/zones", json=[])
        client = PintoClient(
            BASE_URL, credentials=ClientCredentials(TOKEN_URL, "machineclient", "s3cret")
        )
        client.list_zones("digitalocean")
        client.list_zones("digitalocean")
        token_calls = [c for c in rsps_lib.calls if c.request.url == TOKEN_URL]
        assert len(token_calls) == 1

    @rsps_lib.activate
    def test_token_refreshed_after_expiry(self, load_fixture):
        rsps_lib.add(rsps_lib.POST, TOKEN_URL, json=load_fixture("token.json"))
        rsps_lib.add(rsps_lib.GET, f"{BASE_URL}/api/dns/zones", json=[])
        client = PintoClient(
            BASE_URL, credentials=ClientCredentials(TOKEN_URL, "machineclient", "s3cret")
        )
        client.list_zones("digitalocean")
        client._token_expiry = 0
        client.list_zones("digitalocean")
        token_calls = [c for c in rsps_lib.calls if c.request.url == TOKEN_URL]
        assert len(token_calls) == 2

    @rsps_lib.activate
    def test_token_failure(self):
        rsps_lib.add(rsps_lib.POST, TOKEN_URL, status=401, json={"error": "invalid_client"})
        client = PintoClient(
            BASE_URL, credentials=ClientCredentials(TOKEN_URL, "machineclient", "wrong")
        )
        with pytest.raises(RemoteError) as exc:
            client.list_zones("digitalocean")
        assert exc.value.operation == "AUTHENTICATE"
        assert "invalid_client" in exc.value.body

    @rsps_lib.activate
    def test_token_response_without_access_token(self):
        rsps_lib.add(rsps_lib.POST, TOKEN_URL, json={"error": "x"})
        client = PintoClient(
            BASE_URL, credentials=ClientCredentials(TOKEN_URL, "machineclient", "s3cret")
        )
        with pytest.raises(RemoteError, match="invalid token response") as exc:
            client.list_zones("digitalocean")
        assert exc.value.operation == "AUTHENTICATE"
        assert '"error"' in exc.value.body
        assert client._token is None

    @rsps_lib.activate
    def test_token_response_not_json(self):
        rsps_lib.add(
            rsps_lib.POST, TOKEN_URL, body="<html>ok</html>", content_type="text/html"
        )
        client = PintoClient(
            BASE_URL, credentials=ClientCredentials(TOKEN_URL, "machineclient", "s3cret")
        )
        with pytest.raises(RemoteError, match="invalid token response") as exc:
            client.list_zones("digitalocean")
        assert exc.value.operation == "AUTHENTICATE"
        assert exc.value.body == "<html>ok</html>"

    @rsps_lib.activate
    def test_concurrent_calls_authenticate_once(self, load_fixture):
        token = load_fixture("token.json")

        def slow_token(request):
            sleep(0.05)
            return 200, {}, json.dumps(token)

        rsps_lib.add_callback(
            rsps_lib.POST, TOKEN_URL, callback=slow_token, content_type="application/json"
        )
        rsps_lib.add(rsps_lib.GET, f"{BASE_URL}/api/dns/zones", json=[])
        client = PintoClient(
            BASE_URL, credentials=ClientCredentials(TOKEN_URL, "machineclient", "s3cret")
        )
        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(lambda _: client.list_zones("digitalocean"), range(4)))
        token_calls = [c for c in rsps_lib.calls if c.request.url == TOKEN_URL]
        assert len(token_calls) == 1

    def test_scope_string_parsing(self):
        creds = ClientCredentials.from_scope_string(TOKEN_URL, "id", "secret", "a, b,,c")
        assert creds.scopes == ["a", "b", "c"]
        assert ClientCredentials.from_scope_string(TOKEN_URL, "id", "secret", None).scopes == []

    @rsps_lib.activate
    def test_api_options_header(self):
        rsps_lib.add(rsps_lib.GET, f"{BASE_URL}/api/dns/zones", json=[])
        options = {
            "access_options": {
                "provider": "digitalocean",
                "environment": "prod1",
                "credentials_id": "cred-1",
            }
        }
        client = PintoClient(BASE_URL, api_options=options)
        client.list_zones("digitalocean")
        header = rsps_lib.calls[0].request.headers["x-api-options"]
        assert json.loads(header) == options


# ── error classification ──────────────────────────────────────────────────────


class TestErrors:
    @rsps_lib.activate
    def test_not_found_embeds_body(self, load_fixture):
        rsps_lib.add(
            rsps_lib.GET,
            f"{BASE_URL}/api/dns/zones/env0.co.",
            status=404,
            json=load_fixture("error_not_found.json"),
        )
        client = PintoClient(BASE_URL)
        with pytest.raises(RemoteError) as exc:
            client.get_zone("env0.co.", "digitalocean", "prod1")
        assert exc.value.operation == "ZONE READ"
        assert exc.value.message.startswith("404")
        assert "does not exist" in exc.value.body
        assert "does not exist" in str(exc.value)

    @rsps_lib.activate
    def test_transport_failure(self):
        rsps_lib.add(
            rsps_lib.GET,
            f"{BASE_URL}/api/dns/zones",
            body=requests.exceptions.ConnectionError("connection refused"),
        )
        client = PintoClient(BASE_URL)
        with pytest.raises(RemoteError) as exc:
            client.list_zones("digitalocean")
        assert exc.value.operation == "ZONES READ"
        assert "connection refused" in exc.value.message
        assert exc.value.body == ""

    @rsps_lib.activate
    def test_no_retry_on_server_error(self):
        rsps_lib.add(rsps_lib.POST, f"{BASE_URL}/api/dns/records", status=503, body="busy")
        client = PintoClient(BASE_URL)
        with pytest.raises(RemoteError):
            client.create_record(make_record())
        assert len(rsps_lib.calls) == 1

    @rsps_lib.activate
    def test_success_regardless_of_payload(self):
        rsps_lib.add(rsps_lib.POST, f"{BASE_URL}/api/dns/zones", status=201, body="created")
        client = PintoClient(BASE_URL)
        assert client.create_zone(Zone("env0.co.", "prod1", "digitalocean")) == "created"

    @rsps_lib.activate
    def test_no_content(self):
        rsps_lib.add(rsps_lib.DELETE, f"{BASE_URL}/api/dns/zones/env0.co.", status=204)
        client = PintoClient(BASE_URL)
        assert client.delete_zone(Zone("env0.co.", "prod1", "digitalocean")) is None


# ── request shapes ────────────────────────────────────────────────────────────


class TestRequests:
    @rsps_lib.activate
    def test_create_zone_body(self):
        rsps_lib.add(rsps_lib.POST, f"{BASE_URL}/api/dns/zones", json={"name": "env0.co."})
        PintoClient(BASE_URL).create_zone(Zone("env0.co.", "prod1", "digitalocean"))
        body = json.loads(rsps_lib.calls[0].request.body)
        assert body == {"provider": "digitalocean", "environment": "prod1", "name": "env0.co."}

    @rsps_lib.activate
    def test_empty_environment_omitted(self):
        rsps_lib.add(rsps_lib.POST, f"{BASE_URL}/api/dns/zones", json={"name": "env0.co."})
        rsps_lib.add(rsps_lib.GET, f"{BASE_URL}/api/dns/zones/env0.co.", json={"name": "env0.co."})
        client = PintoClient(BASE_URL)
        client.create_zone(Zone("env0.co.", "", "digitalocean"))
        client.get_zone("env0.co.", "digitalocean", "")
        assert "environment" not in json.loads(rsps_lib.calls[0].request.body)
        assert query(rsps_lib.calls[1]) == {"Provider": "digitalocean"}

    @rsps_lib.activate
    def test_list_records_filter(self, load_fixture):
        rsps_lib.add(rsps_lib.GET, f"{BASE_URL}/api/dns/records", json=load_fixture("records.json"))
        result = PintoClient(BASE_URL).list_records(
            "env0.co.", "digitalocean", "prod1", name="www", record_type="A"
        )
        assert result[0]["data"] == "1.2.3.4"
        assert query(rsps_lib.calls[0]) == {
            "Provider": "digitalocean",
            "Environment": "prod1",
            "Zone": "env0.co.",
            "Name": "www",
            "RecordType": "A",
        }

    @rsps_lib.activate
    def test_create_record_body(self):
        rsps_lib.add(rsps_lib.POST, f"{BASE_URL}/api/dns/records", json={})
        PintoClient(BASE_URL).create_record(make_record())
        body = json.loads(rsps_lib.calls[0].request.body)
        assert body == {
            "provider": "digitalocean",
            "environment": "prod1",
            "zone": "env0.co.",
            "name": "www",
            "type": "A",
            "class": "IN",
            "ttl": 300,
            "data": "1.2.3.4",
        }

    @rsps_lib.activate
    def test_delete_record_full_key(self):
        rsps_lib.add(rsps_lib.DELETE, f"{BASE_URL}/api/dns/records", status=204)
        PintoClient(BASE_URL).delete_record(make_record(environment=""))
        assert query(rsps_lib.calls[0]) == {
            "Provider": "digitalocean",
            "Zone": "env0.co.",
            "Name": "www",
            "RecordType": "A",
        }
