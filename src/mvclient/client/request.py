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
"""Request synthesis — builds a RequestDescriptor from a MethodRoute and call arguments."""

from __future__ import annotations

import enum
import io
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from mvclient.client.ports.outbound import SerializerPort
from mvclient.client.route import BindingKind, MethodRoute
from mvclient.kernel.exceptions import MissingPathVariableError
from mvclient.web.params import MultipartFile

APPLICATION_JSON = "application/json"
TEXT_PLAIN = "text/plain"
APPLICATION_OCTET_STREAM = "application/octet-stream"

# Form part that carries the request body when files are also attached.
BODY_PART = "body"

# Two or more slashes not preceded by ':' (keeps "http://" intact).
_DUPLICATE_SLASHES = re.compile(r"(?<!:)//+")


def to_text(value: Any) -> str:
    """Stringify a single request value."""
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


def _is_multi_value(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


@dataclass
class RequestDescriptor:
    """Per-call request description handed to the request executor.

    Request customizers receive it before dispatch and may mutate it
    through the fluent helpers::

        builder.customize_request(lambda request: request.header("Authorization", "token"))
    """

    method: str
    url: str
    query: list[tuple[str, str]] = field(default_factory=list)
    headers: list[tuple[str, str]] = field(default_factory=list)
    cookies: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    content_type: str | None = None
    files: list[MultipartFile] = field(default_factory=list)
    multipart: bool = False

    def header(self, name: str, *values: Any) -> RequestDescriptor:
        self.headers.extend((name, to_text(v)) for v in values)
        return self

    def param(self, name: str, *values: Any) -> RequestDescriptor:
        self.query.extend((name, "" if v is None else to_text(v)) for v in values)
        return self

    def cookie(self, name: str, value: Any) -> RequestDescriptor:
        self.cookies[name] = to_text(value)
        return self

    def content(self, data: bytes | str, content_type: str | None = None) -> RequestDescriptor:
        self.body = data.encode("utf-8") if isinstance(data, str) else data
        if content_type is not None:
            self.content_type = content_type
        return self

    def file(self, part: MultipartFile) -> RequestDescriptor:
        self.files.append(part)
        self.multipart = True
        return self

    def query_values(self, name: str) -> list[str]:
        return [v for k, v in self.query if k == name]

    def header_values(self, name: str) -> list[str]:
        lowered = name.lower()
        return [v for k, v in self.headers if k.lower() == lowered]


class RequestSynthesizer:
    """Turns a resolved MethodRoute plus actual arguments into a RequestDescriptor.

    Bindings are applied in parameter declaration order; when two bindings
    produce the same query key, header or cookie, the first one wins.
    """

    def __init__(self, serializer: SerializerPort) -> None:
        self._serializer = serializer

    def synthesize(
        self, route: MethodRoute, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> RequestDescriptor:
        bound = route.signature.bind(*args, **kwargs)
        bound.apply_defaults()
        values = bound.arguments

        request = RequestDescriptor(
            method=route.http_method,
            url=self._expand_path(route, values),
            multipart=route.is_multipart,
        )
        self._apply_query(route, values, request)
        self._apply_headers(route, values, request)
        self._apply_cookies(route, values, request)
        self._apply_body(route, values, request)
        self._apply_files(route, values, request)
        self._apply_stream(route, values, request)
        return request

    # ------------------------------------------------------------------
    # Path
    # ------------------------------------------------------------------

    @staticmethod
    def _expand_path(route: MethodRoute, values: dict[str, Any]) -> str:
        url = route.path
        for binding in route.bindings_of(BindingKind.PATH_VARIABLE):
            value = values.get(binding.parameter)
            if value is None:
                raise MissingPathVariableError(
                    f"Path variable '{binding.name}' cannot be None for {route.qualified_name}",
                    code="MISSING_PATH_VARIABLE",
                    context={"variable": binding.name, "method": route.method_name},
                )
            url = url.replace("{" + binding.name + "}", to_text(value))
        return _DUPLICATE_SLASHES.sub("/", url)

    # ------------------------------------------------------------------
    # Query, headers, cookies
    # ------------------------------------------------------------------

    @staticmethod
    def _apply_query(route: MethodRoute, values: dict[str, Any], request: RequestDescriptor) -> None:
        seen: set[str] = set()
        for binding in route.bindings_of(BindingKind.QUERY_PARAM):
            value = values.get(binding.parameter)
            if value is None or binding.name in seen:
                continue
            seen.add(binding.name)
            if _is_multi_value(value):
                request.param(binding.name, *value)
            else:
                request.param(binding.name, value)

    @staticmethod
    def _apply_headers(route: MethodRoute, values: dict[str, Any], request: RequestDescriptor) -> None:
        seen: set[str] = set()
        for binding in route.bindings_of(BindingKind.HEADER):
            value = values.get(binding.parameter)
            if value is None or binding.name.lower() in seen:
                continue
            seen.add(binding.name.lower())
            if _is_multi_value(value):
                request.header(binding.name, *value)
            else:
                request.header(binding.name, value)

    @staticmethod
    def _apply_cookies(route: MethodRoute, values: dict[str, Any], request: RequestDescriptor) -> None:
        for binding in route.bindings_of(BindingKind.COOKIE):
            value = values.get(binding.parameter)
            if value is None or binding.name in request.cookies:
                continue
            request.cookie(binding.name, value)

    # ------------------------------------------------------------------
    # Body, multipart, raw stream
    # ------------------------------------------------------------------

    def _apply_body(self, route: MethodRoute, values: dict[str, Any], request: RequestDescriptor) -> None:
        for binding in route.bindings_of(BindingKind.BODY):
            value = values.get(binding.parameter)
            if value is not None:
                request.content(self._serializer.encode(value), APPLICATION_JSON)

    @staticmethod
    def _apply_files(route: MethodRoute, values: dict[str, Any], request: RequestDescriptor) -> None:
        for binding in route.bindings_of(BindingKind.FILE):
            value = values.get(binding.parameter)
            if value is None:
                continue
            parts: Iterable[Any] = value if _is_multi_value(value) else [value]
            for part in parts:
                if not isinstance(part, MultipartFile):
                    raise TypeError(
                        f"File parameter '{binding.parameter}' of {route.qualified_name} "
                        f"expects MultipartFile, got {type(part).__name__}"
                    )
                if not part.name:
                    part = MultipartFile(binding.name, part.filename, part.content_type, part.content)
                request.file(part)

    @staticmethod
    def _apply_stream(route: MethodRoute, values: dict[str, Any], request: RequestDescriptor) -> None:
        stream_params = {b.parameter for b in route.bindings_of(BindingKind.RAW_STREAM)}
        bound_params = {b.parameter for b in route.bindings}
        for name, value in values.items():
            is_stream = name in stream_params or (
                name not in bound_params and isinstance(value, io.IOBase)
            )
            if not is_stream or value is None:
                continue
            data = value.read()
            request.content(data, TEXT_PLAIN)
