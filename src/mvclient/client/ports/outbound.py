# Copyright 2026 Firefly Software Solutions Inc.
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
"""Outbound ports: request execution and body serialization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mvclient.client.request import RequestDescriptor
    from mvclient.client.response import RawResponse


@runtime_checkable
class RequestExecutorPort(Protocol):
    """Runs a request synchronously against the application under test."""

    def execute(self, request: RequestDescriptor) -> RawResponse: ...


@runtime_checkable
class SerializerPort(Protocol):
    """Encodes request bodies and decodes response bodies.

    ``decode`` raises ``ResponseDecodingError`` on failure, so a decoded
    ``None`` always means the body held a JSON ``null``.
    """

    def encode(self, value: Any) -> bytes: ...

    def decode(self, data: bytes | str, target_type: Any) -> Any: ...
