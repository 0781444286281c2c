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


"""Read-only data sources for zones and records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import AmbiguousResultError, RecordNotFoundError
from .identity import record_id, zone_id, zone_list_id
from .mapper import (
    record_from_remote,
    record_to_attributes,
    resolve_environment,
    resolve_provider,
    zone_from_data,
)
from .models import Zone
from .state import ResourceData

if TYPE_CHECKING:  # pragma: no cover
    from .provider import PintoProvider


class _DataSource:
    name = ""

    def __init__(self, provider: PintoProvider) -> None:
        self.provider = provider
        self.client = provider.client
        self.log = logging.getLogger(f"{self.__class__.__name__}[{provider.provider or '-'}]")


class DnsZoneDataSource(_DataSource):
    name = "pinto_dns_zone"

    def read(self, data: ResourceData) -> None:
        zone = zone_from_data(data, self.provider)
        self.log.info(
            "read: zone %s at %s for %s", zone.name, zone.provider, zone.environment
        )
        self.client.get_zone(zone.name, zone.provider, zone.environment)
        data.id = zone_id(zone)


class DnsZonesDataSource(_DataSource):
    name = "pinto_dns_zones"

    def read(self, data: ResourceData) -> None:
        provider = resolve_provider(data, self.provider)
        environment = resolve_environment(data, self.provider)
        self.log.info("read: zones at %s for %s", provider, environment)
        zones = []
        for z in self.client.list_zones(provider, environment):
            name = z.get("name", "")
            zones.append({"id": zone_id(Zone(name, environment, provider)), "name": name})
        data.set("zones", zones)
        data.id = zone_list_id(environment, provider)


class DnsRecordDataSource(_DataSource):
    name = "pinto_dns_record"

    def read(self, data: ResourceData) -> None:
        provider = resolve_provider(data, self.provider)
        environment = resolve_environment(data, self.provider)
        zone = data.get("zone")
        name = data.get("name")
        type_ = data.get("type")
        self.log.info(
            "read: record name=%s zone=%s type=%s provider=%s environment=%s",
            name,
            zone,
            type_,
            provider,
            environment,
        )
        matches = self.client.list_records(
            zone,
            provider,
            environment,
            name=name,
            record_type=type_,
            operation="[DS] RECORD READ",
        )
        key = f"(name={name}, zone={zone}, type={type_}, provider={provider}, environment={environment})"
        if not matches:
            raise RecordNotFoundError(f"No record found with {key}")
        if len(matches) > 1:
            raise AmbiguousResultError(
                f"Cannot uniquely identify a resource with {key}. Wanted 1, got {len(matches)}"
            )

        record = record_from_remote(matches[0], zone, environment, provider)
        for attr, value in record_to_attributes(record).items():
            data.set(attr, value)
        data.id = record_id(record)


class DnsRecordsDataSource(_DataSource):
    name = "pinto_dns_records"

    def read(self, data: ResourceData) -> None:
        provider = resolve_provider(data, self.provider)
        environment = resolve_environment(data, self.provider)
        zone = data.get("zone")
        self.log.info("read: records from zone %s at %s for %s", zone, provider, environment)
        name, _ = data.get_ok("name")
        record_type, _ = data.get_ok("record_type")
        remote = self.client.list_records(
            zone,
            provider,
            environment,
            name=name,
            record_type=record_type,
            operation="[DS] RECORDS READ",
        )

        records = []
        for payload in remote:
            record = record_from_remote(payload, zone, environment, provider)
            attributes = record_to_attributes(record)
            del attributes["zone"]
            records.append({"id": record_id(record), **attributes})
        data.set("records", records)
        data.id = zone_id(Zone(zone, environment, provider))
