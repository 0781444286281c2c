# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 The terraform-provider-pinto Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""
Remote gateway for the Pinto DNS API.

Auth:    static API key (X-Api-Key) and/or OAuth2 client-credentials bearer
         token fetched from ``token_url``.
Scope:   every zone/record call carries Provider and, when non-empty,
         Environment.
Errors:  any status >= 400 or transport failure raises RemoteError with the
         drained response body. Nothing is retried here.
"""

from __future__ import annotations

import json as jsonlib
import logging
import threading
from time import time
from typing import Any

from requests import RequestException, Response, Session

from .exceptions import RemoteError
from .models import Record, Zone

__VERSION__ = "0.1.0"


class ClientCredentials:
    """OAuth2 client-credentials settings for the token endpoint."""

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        scopes: list[str] | None = None,
    ) -> None:
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.scopes = scopes or []

    @classmethod
    def from_scope_string(
        cls, token_url: str, client_id: str, client_secret: str, scope: str | None
    ) -> "ClientCredentials":
        scopes = [s.strip() for s in scope.split(",") if s.strip()] if scope else []
        return cls(token_url, client_id, client_secret, scopes)


class PintoClient:
    """
    Thin wrapper around the Pinto REST API.

    * One requests.Session per client, shared by every call.
    * The bearer token is fetched lazily and refreshed shortly before it
      expires. The check-and-refresh runs under a lock so concurrent calls
      authenticate once.
    * Callers get plain dicts/lists back; errors are RemoteError.
    """

    API_KEY_HEADER = "X-Api-Key"
    API_OPTIONS_HEADER = "x-api-options"
    # refresh bearer tokens this many seconds before they expire
    TOKEN_TTL_BUFFER = 60
    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        credentials: ClientCredentials | None = None,
        api_options: dict | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Session | None = None,
    ) -> None:
        self.log = logging.getLogger(f"PintoClient[{base_url}]")
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.credentials = credentials
        self.api_options = api_options
        self.timeout = timeout

        self._token: str | None = None
        self._token_expiry: float = 0.0
        self._token_lock = threading.Lock()

        self._session = session or Session()

    # ── auth ────────────────────────────────────────────────────────────────

    def _authenticate(self) -> None:
        """Fetch a bearer token with the client-credentials grant."""
        creds = self.credentials
        form = {
            "grant_type": "client_credentials",
            "client_id": creds.client_id,
            "client_secret": creds.client_secret,
        }
        if creds.scopes:
            form["scope"] = " ".join(creds.scopes)
        try:
            resp = self._session.post(creds.token_url, data=form, timeout=self.timeout)
        except RequestException as e:
            raise RemoteError("AUTHENTICATE", str(e)) from e
        if not resp.ok:
            raise _remote_error("AUTHENTICATE", resp)
        try:
            body = resp.json()
            token = body["access_token"]
            expires_in = int(body.get("expires_in") or 3600)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise RemoteError("AUTHENTICATE", "invalid token response", resp.text or "") from e
        self._token = token
        self._token_expiry = time() + expires_in - self.TOKEN_TTL_BUFFER
        self.log.debug("_authenticate: token acquired, expires in %ds", expires_in)

    def _ensure_token(self) -> str:
        with self._token_lock:
            if self._token is None or time() >= self._token_expiry:
                self.log.debug("_ensure_token: (re)authenticating")
                self._authenticate()
            return self._token  # type: ignore[return-value]

    # ── low‑level HTTP ──────────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": f"terraform-provider-pinto/{__VERSION__}",
        }
        if self.api_key:
            headers[self.API_KEY_HEADER] = self.api_key
        if self.credentials is not None:
            headers["Authorization"] = f"Bearer {self._ensure_token()}"
        if self.api_options:
            headers[self.API_OPTIONS_HEADER] = jsonlib.dumps(self.api_options)
        return headers

    def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: Any = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = self._headers()
        self.log.debug("_request: %s %s params=%s", method, path, params)
        try:
            resp = self._session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except RequestException as e:
            self.log.error("_request: %s failed: %s", operation, e)
            raise RemoteError(operation, str(e)) from e
        if resp.status_code >= 400:
            error = _remote_error(operation, resp)
            self.log.error(
                "_request: unable to perform %s. Reason: %s Details: %s",
                operation,
                error.message,
                error.body,
            )
            raise error
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            # success does not depend on the payload shape
            return resp.text

    # ── zones ────────────────────────────────────────────────────────────────

    def create_zone(self, zone: Zone) -> Any:
        self.log.info(
            "create_zone: %s in environment %s of provider %s",
            zone.name,
            zone.environment,
            zone.provider,
        )
        body: dict[str, Any] = {"provider": zone.provider, "name": zone.name}
        if zone.environment:
            body["environment"] = zone.environment
        return self._request("ZONE CREATE", "POST", "/api/dns/zones", json=body)

    def get_zone(self, name: str, provider: str, environment: str = "") -> dict:
        return self._request(
            "ZONE READ",
            "GET",
            f"/api/dns/zones/{name}",
            params=_scope(provider, environment),
        )

    def delete_zone(self, zone: Zone) -> None:
        self.log.info(
            "delete_zone: %s in environment %s of provider %s",
            zone.name,
            zone.environment,
            zone.provider,
        )
        self._request(
            "ZONE DELETE",
            "DELETE",
            f"/api/dns/zones/{zone.name}",
            params=_scope(zone.provider, zone.environment),
        )

    def list_zones(self, provider: str, environment: str = "") -> list[dict]:
        return self._request(
            "ZONES READ", "GET", "/api/dns/zones", params=_scope(provider, environment)
        ) or []

    # ── records ──────────────────────────────────────────────────────────────

    def create_record(self, record: Record) -> Any:
        self.log.info(
            "create_record: %s %s.%s in environment %s of provider %s",
            record.type,
            record.name,
            record.zone,
            record.environment,
            record.provider,
        )
        self.log.debug("create_record: %r", record)
        body: dict[str, Any] = {
            "provider": record.provider,
            "zone": record.zone,
            "name": record.name,
            "type": record.type,
            "class": record.class_,
            "ttl": record.ttl,
            "data": record.data,
        }
        if record.environment:
            body["environment"] = record.environment
        return self._request("RECORD CREATE", "POST", "/api/dns/records", json=body)

    def list_records(
        self,
        zone: str,
        provider: str,
        environment: str = "",
        name: str | None = None,
        record_type: str | None = None,
        operation: str = "RECORD READ",
    ) -> list[dict]:
        params = _scope(provider, environment)
        params["Zone"] = zone
        if name:
            params["Name"] = name
        if record_type:
            params["RecordType"] = record_type
        return self._request(operation, "GET", "/api/dns/records", params=params) or []

    def delete_record(self, record: Record) -> None:
        self.log.info(
            "delete_record: %s %s.%s in environment %s of provider %s",
            record.type,
            record.name,
            record.zone,
            record.environment,
            record.provider,
        )
        params = _scope(record.provider, record.environment)
        params.update({"Zone": record.zone, "Name": record.name, "RecordType": record.type})
        self._request("RECORD DELETE", "DELETE", "/api/dns/records", params=params)


def _scope(provider: str, environment: str) -> dict[str, str]:
    params = {"Provider": provider}
    if environment:
        params["Environment"] = environment
    return params


def _remote_error(operation: str, resp: Response) -> RemoteError:
    message = f"{resp.status_code} {resp.reason or ''}".strip()
    return RemoteError(operation, message, resp.text or "")
