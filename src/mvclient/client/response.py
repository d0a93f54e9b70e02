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
"""Raw responses, the ControllerResponse envelope, and return-type aware decoding."""

from __future__ import annotations

import json as json_lib
import types
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union, get_args, get_origin

from jsonpath_ng import parse as jsonpath_parse  # type: ignore[import-untyped]

from mvclient.client.ports.outbound import SerializerPort
from mvclient.client.route import MethodRoute, strip_optional
from mvclient.kernel.exceptions import AssertionFailure, UnsupportedReturnTypeError

R = TypeVar("R")


@dataclass(frozen=True)
class RawResponse:
    """What the request executor returned. Header names are lower-cased."""

    status_code: int
    body: bytes = b""
    headers: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    content_type: str | None = None
    content_length: int = 0
    error_message: str | None = None
    encoding: str = "utf-8"

    @property
    def text(self) -> str:
        return self.body.decode(self.encoding, errors="replace")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def header(self, name: str) -> str | None:
        values = self.headers.get(name.lower())
        return values[0] if values else None

    def json(self) -> Any:
        return json_lib.loads(self.body)


@dataclass(frozen=True)
class ControllerResponse(Generic[R]):
    """Decoded payload bundled with the metadata of the response it came from.

    All assert methods return ``self`` for chaining::

        response.assert_status(200).assert_json_path("$.message", value="Hello world!")
    """

    status_code: int
    headers: Mapping[str, list[str]]
    content_type: str | None
    content_length: int
    error_message: str | None
    response: R | None = None
    raw: RawResponse | None = field(default=None, repr=False, compare=False)

    @classmethod
    def of(cls, raw: RawResponse, payload: R | None = None) -> ControllerResponse[R]:
        return cls(
            status_code=raw.status_code,
            headers={name: list(values) for name, values in raw.headers.items()},
            content_type=raw.content_type,
            content_length=raw.content_length,
            error_message=raw.error_message,
            response=payload,
            raw=raw,
        )

    def _fail(self, message: str) -> AssertionFailure:
        return AssertionFailure(
            message,
            code="ASSERTION_FAILED",
            context={"status": self.status_code},
        )

    def _raw_response(self) -> RawResponse:
        if self.raw is None:
            raise self._fail("No raw response captured")
        return self.raw

    def assert_status(self, expected: int) -> ControllerResponse[R]:
        if self.status_code != expected:
            raise self._fail(f"Expected status {expected}, got {self.status_code}")
        return self

    def assert_header(
        self, name: str, *, value: str | None = None, exists: bool = True
    ) -> ControllerResponse[R]:
        values = self.headers.get(name.lower())
        if not exists:
            if values:
                raise self._fail(f"Header '{name}' should not exist")
            return self
        if not values:
            raise self._fail(f"Header '{name}' not found")
        if value is not None and values[0] != value:
            raise self._fail(f"Expected header '{name}' = '{value}', got '{values[0]}'")
        return self

    def assert_json_path(self, path: str, *, value: Any = ..., exists: bool = True) -> ControllerResponse[R]:
        matches = jsonpath_parse(path).find(self._raw_response().json())
        if not exists:
            if matches:
                raise self._fail(f"Expected no match for JSON path '{path}'")
            return self
        if not matches:
            raise self._fail(f"No match for JSON path '{path}'")
        if value is not ... and matches[0].value != value:
            raise self._fail(f"Expected {value!r} at '{path}', got {matches[0].value!r}")
        return self

    def assert_body_contains(self, text: str) -> ControllerResponse[R]:
        if text not in self._raw_response().text:
            raise self._fail(f"Body does not contain '{text}'")
        return self


def _is_concrete(tp: Any) -> bool:
    return isinstance(tp, type) and get_origin(tp) is None


class ResponseMapper:
    """Decodes a RawResponse body according to a method's declared return type.

    - non-2xx status -> ``None``
    - ``str`` -> body text, ``bytes`` -> body bytes (also when Optional)
    - ``Any`` or missing annotation -> plain JSON values
    - plain classes (models, dataclasses, builtins) -> serializer decode
    - one level of generics (``list[Item]``, ``dict[str, Item]``,
      ``Item | None``) -> serializer decode of the full generic shape
    """

    def __init__(self, serializer: SerializerPort) -> None:
        self._serializer = serializer

    def map(self, route: MethodRoute, response: RawResponse) -> Any:
        return_type = route.return_type
        if route.is_void or not response.is_success:
            return None

        text_type = strip_optional(return_type)
        if text_type is str:
            return response.text
        if text_type is bytes:
            return response.body

        self._check_supported(route, return_type)
        if not response.body:
            return None
        return self._serializer.decode(response.body, return_type)

    def _check_supported(self, route: MethodRoute, return_type: Any) -> None:
        if return_type is Any:
            return
        origin = get_origin(return_type)
        if origin is None:
            if not isinstance(return_type, type):
                raise self._unsupported(route, return_type)
            return
        if not (isinstance(origin, type) or origin in (Union, types.UnionType)):
            raise self._unsupported(route, return_type)
        for arg in get_args(return_type):
            if arg is Ellipsis:
                continue
            if not _is_concrete(arg):
                raise self._unsupported(route, return_type, f"type argument {arg!r} is not a concrete class")

    @staticmethod
    def _unsupported(route: MethodRoute, return_type: Any, reason: str = "") -> UnsupportedReturnTypeError:
        detail = f" ({reason})" if reason else ""
        return UnsupportedReturnTypeError(
            f"Unsupported return type {return_type!r} on {route.qualified_name}{detail}",
            code="UNSUPPORTED_RETURN_TYPE",
            context={"type": repr(return_type), "method": route.method_name},
        )
