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


from __future__ import annotations

from dataclasses import dataclass, replace

DEFAULT_TTL = 3600


@dataclass
class Zone:
    name: str
    environment: str = ""
    provider: str = ""


@dataclass
class Record:
    """
    A single DNS resource record scoped to a zone, environment and provider.

    ``ttl`` is ``None`` while unset; the default is applied on create, never
    when mapping attributes.
    """

    name: str
    type: str
    data: str
    zone: str
    class_: str = "IN"
    ttl: int | None = None
    environment: str = ""
    provider: str = ""

    def has_ttl(self) -> bool:
        return self.ttl is not None

    def with_default_ttl(self) -> "Record":
        if self.has_ttl():
            return self
        return replace(self, ttl=DEFAULT_TTL)
