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
"""Pydantic-backed serializer for request and response bodies."""

from __future__ import annotations

import functools
from typing import Any

from pydantic import TypeAdapter, ValidationError

from mvclient.kernel.exceptions import ResponseDecodingError


@functools.lru_cache(maxsize=256)
def _adapter(target_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target_type)


class PydanticSerializer:
    """JSON serializer built on pydantic ``TypeAdapter``.

    Handles BaseModels, dataclasses, TypedDicts and parameterized containers
    such as ``list[Item]`` or ``dict[str, Item]`` in both directions.
    """

    def __init__(self, *, by_alias: bool = True) -> None:
        self._by_alias = by_alias

    def encode(self, value: Any) -> bytes:
        return _adapter(Any).dump_json(value, by_alias=self._by_alias)

    def decode(self, data: bytes | str, target_type: Any) -> Any:
        try:
            return _adapter(target_type).validate_json(data)
        except ValidationError as exc:
            raise ResponseDecodingError(
                f"Cannot decode response body as {target_type!r}: {exc.error_count()} validation error(s)",
                code="RESPONSE_DECODING",
                context={"type": repr(target_type), "errors": exc.errors()},
            ) from exc
