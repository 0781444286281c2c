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
Managed resources: ``pinto_dns_zone`` and ``pinto_dns_record``.

The Pinto API has no update endpoint, so an update is a replace: delete the
old entity, then create the new one. The two steps are not transactional;
``replace`` reports how far it got and ``update`` turns a half-done replace
into PartialUpdateError.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace as dc_replace
from typing import TYPE_CHECKING, Any

from .exceptions import (
    AmbiguousResultError,
    ImportFormatError,
    PartialUpdateError,
    RecordNotFoundError,
    RemoteError,
)
from .identity import record_id, zone_id
from .mapper import (
    SCHEMA_ENVIRONMENT,
    SCHEMA_PROVIDER,
    compute_change_set,
    record_from_data,
    record_from_remote,
    record_to_attributes,
    zone_change_set,
    zone_from_data,
)
from .models import Record, Zone
from .state import ResourceData

if TYPE_CHECKING:  # pragma: no cover
    from .provider import PintoProvider


class ReplaceOutcome(enum.Enum):
    REPLACED = "replaced"
    DELETED_ONLY = "deleted_only"
    NOT_STARTED = "not_started"


@dataclass
class ReplaceResult:
    outcome: ReplaceOutcome
    error: RemoteError | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is ReplaceOutcome.REPLACED


class _ReplacingResource:
    name = ""

    def __init__(self, provider: PintoProvider) -> None:
        self.provider = provider
        self.client = provider.client
        self.log = logging.getLogger(
            f"{self.__class__.__name__}[{provider.provider or '-'}]"
        )

    def _create(self, entity: Any) -> None:  # pragma: no cover
        raise NotImplementedError

    def _delete(self, entity: Any) -> None:  # pragma: no cover
        raise NotImplementedError

    def replace(self, old: Any, new: Any) -> ReplaceResult:
        """Delete ``old`` then create ``new``; never raises RemoteError."""
        try:
            self._delete(old)
        except RemoteError as e:
            return ReplaceResult(ReplaceOutcome.NOT_STARTED, e)
        try:
            self._create(new)
        except RemoteError as e:
            self.log.error("replace: %r deleted, creating %r failed", old, new)
            return ReplaceResult(ReplaceOutcome.DELETED_ONLY, e)
        return ReplaceResult(ReplaceOutcome.REPLACED)

    def _apply_replace(self, data: ResourceData, old: Any, new: Any) -> None:
        result = self.replace(old, new)
        if result.outcome is ReplaceOutcome.NOT_STARTED:
            raise result.error  # type: ignore[misc]
        if result.outcome is ReplaceOutcome.DELETED_ONLY:
            # the old entity is gone remotely; the next plan recreates it
            data.id = ""
            raise PartialUpdateError(result.error, old)  # type: ignore[arg-type]


# ── zones ────────────────────────────────────────────────────────────────────


class ZoneResource(_ReplacingResource):
    name = "pinto_dns_zone"

    def _create(self, zone: Zone) -> None:
        self.client.create_zone(zone)

    def _delete(self, zone: Zone) -> None:
        self.client.delete_zone(zone)

    def create(self, data: ResourceData) -> None:
        zone = zone_from_data(data, self.provider)
        self._create(zone)
        data.id = zone_id(zone)

    def read(self, data: ResourceData) -> None:
        zone = zone_from_data(data, self.provider)
        self.log.info(
            "read: zone %s of environment %s for provider %s",
            zone.name,
            zone.environment,
            zone.provider,
        )
        # a missing zone raises RemoteError and stays in state
        remote = self.client.get_zone(zone.name, zone.provider, zone.environment)
        if isinstance(remote, dict) and remote.get("name"):
            zone = dc_replace(zone, name=remote["name"])
        data.set("name", zone.name)
        data.id = zone_id(zone)

    def update(self, data: ResourceData) -> None:
        old, new = zone_change_set(data, self.provider)
        self.log.info("update: replacing zone %s with %s", old.name, new.name)
        self._apply_replace(data, old, new)
        data.id = zone_id(new)

    def delete(self, data: ResourceData) -> None:
        self._delete(zone_from_data(data, self.provider))

    def import_state(self, data: ResourceData) -> list[ResourceData]:
        """
        Import ``{zoneName}.{environment}.{provider}.``.

        The environment may be empty (``example.com..digitalocean.``).
        """
        raw = data.id
        self.log.info("import_state: zone with id %s", raw)
        error = ImportFormatError(
            f'invalid Import. ID has to be of format "{{zoneName}}.{{environment}}.{{provider}}." got {raw!r}'
        )
        if self.provider.environment not in raw or self.provider.provider not in raw:
            raise error
        parts = raw.split(".")
        if len(parts) < 4 or parts[-1] != "" or not parts[-2]:
            raise error
        name = "".join(f"{p}." for p in parts[:-3])
        if not name.strip("."):
            raise error
        zone = Zone(name=name, environment=parts[-3], provider=parts[-2])
        self.log.debug("import_state: %r", zone)

        data.set("name", zone.name)
        data.set(SCHEMA_PROVIDER, zone.provider)
        data.set(SCHEMA_ENVIRONMENT, zone.environment)
        data.id = zone_id(zone)
        return [data]


# ── records ──────────────────────────────────────────────────────────────────


class RecordResource(_ReplacingResource):
    name = "pinto_dns_record"

    def _create(self, record: Record) -> None:
        self.client.create_record(record)

    def _delete(self, record: Record) -> None:
        self.client.delete_record(record)

    def create(self, data: ResourceData) -> None:
        record = record_from_data(data, self.provider).with_default_ttl()
        self._create(record)
        data.set("ttl", record.ttl)
        data.id = record_id(record)

    def read(self, data: ResourceData) -> None:
        record = record_from_data(data, self.provider)
        self.log.info(
            "read: record %s.%s in environment %s of provider %s",
            record.name,
            record.zone,
            record.environment,
            record.provider,
        )
        matches = self.client.list_records(
            record.zone,
            record.provider,
            record.environment,
            name=record.name,
            record_type=record.type,
        )
        rid = record_id(record)
        if not matches:
            self.log.warning(
                "read: could not retrieve %s with id %s. Removing it from state",
                self.name,
                rid,
            )
            data.id = ""
            return
        if len(matches) > 1:
            self.log.debug("read: %d matches for %s, using the first", len(matches), rid)
        data.set("ttl", matches[0].get("ttl"))
        data.id = rid

    def update(self, data: ResourceData) -> None:
        old, new = compute_change_set(data, self.provider)
        new = new.with_default_ttl()
        self.log.info("update: replacing record %s", data.id)
        self._apply_replace(data, old, new)
        data.set("ttl", new.ttl)
        data.id = record_id(new)

    def delete(self, data: ResourceData) -> None:
        self._delete(record_from_data(data, self.provider))

    def import_state(self, data: ResourceData) -> list[ResourceData]:
        """Import ``{type}/{name}/{zone}/{environment}/{provider}``."""
        parts = data.id.split("/")
        if len(parts) != 5:
            raise ImportFormatError(
                'invalid Import. ID has to be of format "{type}/{name}/{zone}/{environment}/{provider}"'
            )
        type_, name, zone, environment, provider = parts
        self.log.debug("import_state: retrieving information for %s", data.id)
        matches = self.client.list_records(
            zone,
            provider,
            environment,
            name=name,
            record_type=type_,
            operation="IMPORT RECORD",
        )
        if len(matches) > 1:
            raise AmbiguousResultError(
                f"invalid Import. More than one record matched ID {type_}/{name}/{zone}"
            )
        if not matches:
            raise RecordNotFoundError(f"invalid Import. No record matched ID {data.id}")
        record = dc_replace(
            record_from_remote(matches[0], zone, environment, provider),
            name=name,
            type=type_,
        )

        for key, value in record_to_attributes(record).items():
            data.set(key, value)
        data.set(SCHEMA_PROVIDER, provider)
        data.set(SCHEMA_ENVIRONMENT, environment)
        data.id = record_id(record)
        return [data]
