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
terraform_pinto — Pinto DNS zones and records for Terraform.

Reconciles declarative zone/record state against the Pinto REST API:
content-addressed ids, update-by-replace and import by composite key.
"""

from __future__ import annotations

from .client import ClientCredentials, PintoClient, __VERSION__
from .datasources import (
    DnsRecordDataSource,
    DnsRecordsDataSource,
    DnsZoneDataSource,
    DnsZonesDataSource,
)
from .exceptions import (
    AmbiguousResultError,
    ConfigurationError,
    ImportFormatError,
    PartialUpdateError,
    PintoException,
    RecordNotFoundError,
    RemoteError,
)
from .identity import record_id, record_import_id, zone_id, zone_import_id
from .mapper import compute_change_set, record_from_data, zone_from_data
from .models import DEFAULT_TTL, Record, Zone
from .provider import DATA_SOURCES, RESOURCES, PintoProvider
from .resources import RecordResource, ReplaceOutcome, ReplaceResult, ZoneResource
from .state import ResourceData

__all__ = [
    "AmbiguousResultError",
    "ClientCredentials",
    "ConfigurationError",
    "DATA_SOURCES",
    "DEFAULT_TTL",
    "DnsRecordDataSource",
    "DnsRecordsDataSource",
    "DnsZoneDataSource",
    "DnsZonesDataSource",
    "ImportFormatError",
    "PartialUpdateError",
    "PintoClient",
    "PintoException",
    "PintoProvider",
    "RESOURCES",
    "Record",
    "RecordNotFoundError",
    "RecordResource",
    "RemoteError",
    "ReplaceOutcome",
    "ReplaceResult",
    "ResourceData",
    "Zone",
    "ZoneResource",
    "__VERSION__",
    "compute_change_set",
    "record_from_data",
    "record_id",
    "record_import_id",
    "zone_from_data",
    "zone_id",
    "zone_import_id",
]
