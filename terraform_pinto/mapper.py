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
Conversion between host attributes and typed Zone/Record values.

Scope resolution: a per-resource ``pinto_provider``/``pinto_environment`` wins
over the provider-level default. A provider is mandatory, an environment is
not (absence resolves to "").
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

from .exceptions import ConfigurationError
from .models import Record, Zone
from .state import ResourceData

if TYPE_CHECKING:  # pragma: no cover
    from .provider import PintoProvider

# "pinto_" prefix because "provider" is reserved by the host
SCHEMA_PROVIDER = "pinto_provider"
SCHEMA_ENVIRONMENT = "pinto_environment"

# record attributes that may change between plan and state
_RECORD_FIELDS: dict[str, str] = {
    "name": "name",
    "zone": "zone",
    "type": "type",
    "class": "class_",
    "ttl": "ttl",
    "data": "data",
}


def resolve_provider(data: ResourceData, provider: PintoProvider) -> str:
    value, ok = data.get_ok(SCHEMA_PROVIDER)
    if ok:
        return value
    if provider.provider:
        return provider.provider
    raise ConfigurationError(
        f"invalid configuration. {SCHEMA_PROVIDER} has to be set on provider or resource-level"
    )


def resolve_environment(data: ResourceData, provider: PintoProvider) -> str:
    value, ok = data.get_ok(SCHEMA_ENVIRONMENT)
    if ok:
        return value
    return provider.environment or ""


def _ttl(value: Any) -> int | None:
    return int(value) if value else None


def zone_from_data(data: ResourceData, provider: PintoProvider) -> Zone:
    scope = resolve_provider(data, provider)
    return Zone(
        name=data.get("name") or "",
        environment=resolve_environment(data, provider),
        provider=scope,
    )


def record_from_data(data: ResourceData, provider: PintoProvider) -> Record:
    scope = resolve_provider(data, provider)
    ttl, ok = data.get_ok("ttl")
    return Record(
        name=data.get("name") or "",
        type=data.get("type") or "",
        data=data.get("data") or "",
        zone=data.get("zone") or "",
        class_=data.get("class") or "",
        ttl=int(ttl) if ok else None,
        environment=resolve_environment(data, provider),
        provider=scope,
    )


def compute_change_set(
    data: ResourceData, provider: PintoProvider
) -> tuple[Record, Record]:
    """
    Build the (old, new) record pair for a replace.

    Changed fields take their prior and planned values respectively; every
    other field, including the resolved scope, is shared by both.
    """
    current = record_from_data(data, provider)
    old: dict[str, Any] = {}
    new: dict[str, Any] = {}
    for key, field in _RECORD_FIELDS.items():
        if not data.has_change(key):
            continue
        before, after = data.get_change(key)
        if key == "ttl":
            before, after = _ttl(before), _ttl(after)
        old[field] = before
        new[field] = after
    return replace(current, **old), replace(current, **new)


def zone_change_set(data: ResourceData, provider: PintoProvider) -> tuple[Zone, Zone]:
    current = zone_from_data(data, provider)
    before, after = data.get_change("name")
    return replace(current, name=before or ""), replace(current, name=after or "")


def record_from_remote(
    payload: dict, zone: str, environment: str, provider: str
) -> Record:
    """Build a Record from an API payload, adding the scope the API omits."""
    return Record(
        name=payload.get("name", ""),
        type=payload.get("type", ""),
        data=payload.get("data", ""),
        zone=zone,
        class_=payload.get("class") or "IN",
        ttl=_ttl(payload.get("ttl")),
        environment=environment,
        provider=provider,
    )


def record_to_attributes(record: Record) -> dict[str, Any]:
    return {
        "name": record.name,
        "zone": record.zone,
        "type": record.type,
        "class": record.class_,
        "ttl": record.ttl,
        "data": record.data,
    }
