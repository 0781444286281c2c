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
Per-resource attribute record exchanged with the plugin host.

The host owns persistence; this object is only the key/value view of one
resource's state that a single CRUD call reads and populates.
"""

from __future__ import annotations

from typing import Any


def _is_zero(value: Any) -> bool:
    return value is None or value == "" or value == 0 or value == [] or value == {}


class ResourceData:
    def __init__(
        self,
        attributes: dict[str, Any] | None = None,
        id: str = "",
        previous: dict[str, Any] | None = None,
    ) -> None:
        self.id = id
        self._attributes: dict[str, Any] = dict(attributes or {})
        # prior state; without one nothing is considered changed
        self._previous: dict[str, Any] = (
            dict(previous) if previous is not None else dict(self._attributes)
        )

    def __repr__(self) -> str:
        return f"ResourceData(id={self.id!r}, attributes={self._attributes!r})"

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def get_ok(self, key: str) -> tuple[Any, bool]:
        """Return the value and whether it is set to a non-zero value."""
        value = self._attributes.get(key)
        return value, not _is_zero(value)

    def set(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def has_change(self, key: str) -> bool:
        return self._previous.get(key) != self._attributes.get(key)

    def get_change(self, key: str) -> tuple[Any, Any]:
        return self._previous.get(key), self._attributes.get(key)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._attributes)
