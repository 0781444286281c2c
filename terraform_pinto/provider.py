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
Provider-level configuration, resolved once per plugin invocation.

Config example (Terraform)
--------------------------
provider "pinto" {
  base_url       = "https://pinto.example.com"
  token_url      = "https://auth.pinto.example.com/connect/token"
  client_id      = "machineclient"
  client_secret  = "..."
  client_scope   = "openapigateway,nexus"
  pinto_provider = "digitalocean"
}

Every setting falls back to its PINTO_* environment variable.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping

from .client import ClientCredentials, PintoClient
from .datasources import (
    DnsRecordDataSource,
    DnsRecordsDataSource,
    DnsZoneDataSource,
    DnsZonesDataSource,
)
from .exceptions import ConfigurationError
from .mapper import SCHEMA_ENVIRONMENT, SCHEMA_PROVIDER
from .resources import RecordResource, ZoneResource

# setting → environment variable it defaults from
SETTINGS: dict[str, str] = {
    "base_url": "PINTO_BASE_URL",
    "token_url": "PINTO_TOKEN_URL",
    "client_id": "PINTO_CLIENT_ID",
    "client_secret": "PINTO_CLIENT_SECRET",
    "client_scope": "PINTO_CLIENT_SCOPE",
    "api_key": "PINTO_API_KEY",
    "credentials_id": "PINTO_CREDENTIALS_ID",
    SCHEMA_PROVIDER: "PINTO_PROVIDER",
    SCHEMA_ENVIRONMENT: "PINTO_ENVIRONMENT",
}

RESOURCES: dict[str, type] = {
    ZoneResource.name: ZoneResource,
    RecordResource.name: RecordResource,
}

DATA_SOURCES: dict[str, type] = {
    DnsZoneDataSource.name: DnsZoneDataSource,
    DnsZonesDataSource.name: DnsZonesDataSource,
    DnsRecordDataSource.name: DnsRecordDataSource,
    DnsRecordsDataSource.name: DnsRecordsDataSource,
}


class PintoProvider:
    """
    Configured provider handed to every resource and data source.

    Never mutated after construction, so concurrent resource operations can
    share one instance.
    """

    def __init__(
        self,
        client: PintoClient,
        provider: str = "",
        environment: str = "",
        credentials_id: str = "",
    ) -> None:
        self.log = logging.getLogger(f"PintoProvider[{provider or '-'}]")
        self.client = client
        self.provider = provider
        self.environment = environment
        self.credentials_id = credentials_id

    @classmethod
    def configure(
        cls,
        settings: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "PintoProvider":
        """Resolve settings (explicit value, then PINTO_* variable) and build the client."""
        settings = settings or {}
        environ = os.environ if environ is None else environ
        conf: dict[str, Any] = {
            key: settings.get(key) or environ.get(env_key) or None
            for key, env_key in SETTINGS.items()
        }

        base_url = conf["base_url"]
        if not base_url:
            raise ConfigurationError(
                f"base_url has to be set on the provider or via {SETTINGS['base_url']}"
            )

        credentials = None
        if conf["client_id"] or conf["client_secret"]:
            if not (conf["client_id"] and conf["client_secret"]):
                raise ConfigurationError(
                    f"using client-credentials requires {SETTINGS['client_id']} and "
                    f"{SETTINGS['client_secret']} to be set together"
                )
            if not conf["token_url"]:
                raise ConfigurationError(
                    f"using client-credentials requires {SETTINGS['token_url']} to be set"
                )
            credentials = ClientCredentials.from_scope_string(
                conf["token_url"],
                conf["client_id"],
                conf["client_secret"],
                conf["client_scope"],
            )

        provider = conf[SCHEMA_PROVIDER] or ""
        environment = conf[SCHEMA_ENVIRONMENT] or ""
        credentials_id = conf["credentials_id"] or ""
        api_options = None
        if credentials_id:
            api_options = {
                "access_options": {
                    "provider": provider,
                    "environment": environment,
                    "credentials_id": credentials_id,
                }
            }

        client = PintoClient(
            base_url,
            api_key=conf["api_key"],
            credentials=credentials,
            api_options=api_options,
            timeout=float(settings.get("timeout") or PintoClient.DEFAULT_TIMEOUT),
        )
        logging.getLogger("PintoProvider").debug(
            "configure: base_url=%s provider=%s environment=%s oauth=%s",
            base_url,
            provider,
            environment,
            credentials is not None,
        )
        return cls(client, provider, environment, credentials_id)

    def resource(self, name: str):
        try:
            return RESOURCES[name](self)
        except KeyError:
            raise ConfigurationError(f"unknown resource type {name!r}") from None

    def data_source(self, name: str):
        try:
            return DATA_SOURCES[name](self)
        except KeyError:
            raise ConfigurationError(f"unknown data source {name!r}") from None
