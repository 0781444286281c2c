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
Content-addressed identifiers for zones and records.

These ids end up in Terraform state and in user-facing import commands, so
their exact byte layout must never change.
"""

from __future__ import annotations

from hashlib import sha1

from .models import Record, Zone


def zone_id(zone: Zone) -> str:
    name = zone.name.rstrip(".") + "."
    return f"{name}{zone.environment}.{zone.provider}."


# the zone import id is the zone id itself
zone_import_id = zone_id


def zone_list_id(environment: str, provider: str) -> str:
    return f"{environment}.{provider}."


def record_id(record: Record) -> str:
    # an empty environment still takes part in the digest
    raw = (
        f"{record.data}-{record.type}.{record.name}."
        f"{record.zone}{record.environment}.{record.provider}."
    )
    return sha1(raw.encode("utf-8")).hexdigest()


def record_import_id(record: Record) -> str:
    return "/".join(
        (record.type, record.name, record.zone, record.environment, record.provider)
    )
