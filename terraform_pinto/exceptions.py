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


"""Error taxonomy surfaced to the plugin host."""

from __future__ import annotations

from typing import Any

from octodns.provider import ProviderException


class PintoException(ProviderException):
    pass


class ConfigurationError(PintoException):
    """A required setting is missing at both resource and provider level."""


class ImportFormatError(PintoException):
    """The import identifier does not match the expected format."""


class AmbiguousResultError(PintoException):
    """A filter matched more than one entity where at most one was expected."""


class RecordNotFoundError(PintoException):
    pass


class RemoteError(PintoException):
    """
    Any failed call against the Pinto API.

    ``body`` holds the drained response body (empty for transport failures)
    so that the operator sees what the API actually answered.
    """

    def __init__(self, operation: str, message: str, body: str = "") -> None:
        self.operation = operation
        self.message = message
        self.body = body
        text = f"{operation}: {message}"
        if body:
            text = f"{text}: {body}"
        super().__init__(text)


class PartialUpdateError(RemoteError):
    """
    Raised when a replace deleted the old entity but failed to create the new
    one. The remote system holds neither; ``lost`` is the deleted entity.
    """

    def __init__(self, cause: RemoteError, lost: Any) -> None:
        super().__init__(
            cause.operation,
            f"{lost!r} was deleted but its replacement could not be created: {cause.message}",
            cause.body,
        )
        self.cause = cause
        self.lost = lost
