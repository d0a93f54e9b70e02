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
"""Route metadata resolution — turns a decorated controller method into a MethodRoute.

The resolver reads the metadata left by ``@request_mapping`` / ``@*_mapping``
and classifies each handler parameter from its type hint:

- ``PathVar[T]``    -> path variable
- ``QueryParam[T]`` -> query parameter (required when there is no default)
- ``Body[T]``       -> JSON body
- ``Header[T]``     -> request header (``x_api_key`` -> ``x-api-key``)
- ``Cookie[T]``     -> cookie
- ``File[T]``       -> multipart file part
- unmarked ``BinaryIO`` / ``IO`` / ``io.IOBase`` -> raw request body stream
"""

from __future__ import annotations

import enum
import inspect
import io
import types
import typing
from dataclasses import dataclass, field
from typing import Annotated, Any, Union, get_args, get_origin

import structlog

from mvclient.kernel.exceptions import RouteResolutionError
from mvclient.web.mappings import MAPPING_ATTR, REQUEST_MAPPING_ATTR
from mvclient.web.params import (
    BINDING_TYPES,
    Alias,
    Body,
    Cookie,
    File,
    Header,
    MultipartFile,
    PathVar,
    QueryParam,
)

logger = structlog.get_logger("mvclient.client")

_MISSING: Any = inspect.Parameter.empty


class BindingKind(enum.Enum):
    """How a handler parameter is carried in the HTTP request."""

    PATH_VARIABLE = "path_variable"
    QUERY_PARAM = "query_param"
    BODY = "body"
    HEADER = "header"
    COOKIE = "cookie"
    FILE = "file"
    RAW_STREAM = "raw_stream"


_KIND_BY_MARKER: dict[type, BindingKind] = {
    PathVar: BindingKind.PATH_VARIABLE,
    QueryParam: BindingKind.QUERY_PARAM,
    Body: BindingKind.BODY,
    Header: BindingKind.HEADER,
    Cookie: BindingKind.COOKIE,
    File: BindingKind.FILE,
}


@dataclass(frozen=True)
class ParameterBinding:
    """A single handler parameter and the part of the request it maps to."""

    parameter: str
    name: str
    kind: BindingKind
    inner_type: Any = str
    default: Any = _MISSING

    @property
    def required(self) -> bool:
        return self.default is _MISSING


@dataclass(frozen=True)
class MethodRoute:
    """Resolved routing information for one controller method."""

    owner: type
    method_name: str
    http_method: str
    path: str
    signature: inspect.Signature
    return_type: Any
    bindings: tuple[ParameterBinding, ...] = field(default_factory=tuple)

    @property
    def qualified_name(self) -> str:
        return f"{self.owner.__module__}.{self.owner.__qualname__}#{self.method_name}(...)"

    @property
    def is_void(self) -> bool:
        return self.return_type is None or self.return_type is type(None)

    @property
    def is_multipart(self) -> bool:
        return any(b.kind is BindingKind.FILE for b in self.bindings)

    def bindings_of(self, kind: BindingKind) -> list[ParameterBinding]:
        return [b for b in self.bindings if b.kind is kind]


@dataclass(frozen=True)
class TargetDescriptor:
    """The controller class being proxied: its base path and handler methods."""

    cls: type
    base_path: str
    methods: tuple[str, ...]


def controller_methods(cls: type) -> dict[str, Any]:
    """Collect the plain functions a class exposes, nearest definition first."""
    methods: dict[str, Any] = {}
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name.startswith("__") or name in methods:
                continue
            if inspect.isfunction(attr):
                methods[name] = attr
    return methods


def describe_target(cls: type) -> TargetDescriptor:
    """Read the class-level mapping; fails when the class carries none."""
    base_path = getattr(cls, REQUEST_MAPPING_ATTR, None)
    if base_path is None:
        raise RouteResolutionError(
            f"{cls.__qualname__} has no @request_mapping; cannot build requests for it",
            code="ROUTE_RESOLUTION",
            context={"class": cls.__qualname__},
        )
    methods = tuple(
        name for name, func in controller_methods(cls).items() if hasattr(func, MAPPING_ATTR)
    )
    return TargetDescriptor(cls=cls, base_path=base_path, methods=methods)


def _is_stream_hint(hint: Any) -> bool:
    if get_origin(hint) is typing.IO:
        return True
    if isinstance(hint, type):
        return issubclass(hint, (io.IOBase, typing.IO))
    return False


def strip_optional(hint: Any) -> Any:
    """``PathVar[str] | None`` -> ``PathVar[str]``."""
    if get_origin(hint) in (Union, types.UnionType):
        args = [a for a in get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def classify_parameter(name: str, hint: Any, default: Any = _MISSING) -> ParameterBinding | None:
    """Classify a single parameter from its type hint, or ``None`` if unbound."""
    wire_name = name
    if get_origin(hint) is Annotated:
        hint, *metadata = get_args(hint)
        for meta in metadata:
            if isinstance(meta, Alias):
                wire_name = meta.name
    hint = strip_optional(hint)

    origin = get_origin(hint)
    if origin in BINDING_TYPES:
        kind = _KIND_BY_MARKER[origin]
        args = get_args(hint)
        if kind is BindingKind.HEADER and wire_name == name:
            wire_name = name.replace("_", "-")
        return ParameterBinding(
            parameter=name,
            name=wire_name,
            kind=kind,
            inner_type=args[0] if args else str,
            default=default,
        )

    if hint is MultipartFile:
        return ParameterBinding(name, wire_name, BindingKind.FILE, MultipartFile, default)
    if _is_stream_hint(hint):
        return ParameterBinding(name, wire_name, BindingKind.RAW_STREAM, bytes, default)
    return None


def parameter_bindings(func: Any) -> tuple[inspect.Signature, tuple[ParameterBinding, ...], Any]:
    """Inspect a handler and return its call signature (without ``self``),
    bindings in declaration order, and declared return type.
    """
    try:
        hints = typing.get_type_hints(func, include_extras=True)
    except (NameError, TypeError) as exc:
        raise RouteResolutionError(
            f"Cannot resolve type hints of {func.__qualname__}: {exc}",
            code="ROUTE_RESOLUTION",
            context={"method": func.__qualname__},
        ) from exc

    sig = inspect.signature(func)
    params = [p for p in sig.parameters.values() if p.name != "self"]
    bindings: list[ParameterBinding] = []
    for param in params:
        hint = hints.get(param.name)
        if hint is None:
            continue
        binding = classify_parameter(param.name, hint, param.default)
        if binding is not None:
            bindings.append(binding)

    return_type = hints.get("return", Any)
    return sig.replace(parameters=params), tuple(bindings), return_type


class RouteResolver:
    """Resolves and caches MethodRoutes for one controller class.

    Class metadata is read on the first lookup, so a class without
    ``@request_mapping`` fails on the first proxied call rather than at
    proxy creation.
    """

    def __init__(self, cls: type) -> None:
        self._cls = cls
        self._target: TargetDescriptor | None = None
        self._routes: dict[str, MethodRoute] = {}

    @property
    def target(self) -> TargetDescriptor:
        if self._target is None:
            self._target = describe_target(self._cls)
        return self._target

    def resolve(self, method_name: str) -> MethodRoute:
        route = self._routes.get(method_name)
        if route is None:
            route = self._resolve(method_name)
            self._routes[method_name] = route
        return route

    def _resolve(self, method_name: str) -> MethodRoute:
        target = self.target
        func = controller_methods(self._cls).get(method_name)
        mapping = getattr(func, MAPPING_ATTR, None) if func is not None else None
        if mapping is None:
            raise RouteResolutionError(
                f"{self._cls.__qualname__}.{method_name} has no request mapping",
                code="ROUTE_RESOLUTION",
                context={"class": self._cls.__qualname__, "method": method_name},
            )

        verbs = mapping.get("methods", [])
        if len(verbs) != 1:
            raise RouteResolutionError(
                f"{self._cls.__qualname__}.{method_name} must declare exactly one HTTP method, got {verbs}",
                code="ROUTE_AMBIGUOUS",
                context={"class": self._cls.__qualname__, "method": method_name, "methods": verbs},
            )

        signature, bindings, return_type = parameter_bindings(func)
        if sum(1 for b in bindings if b.kind is BindingKind.BODY) > 1:
            raise RouteResolutionError(
                f"{self._cls.__qualname__}.{method_name} declares more than one Body parameter",
                code="ROUTE_AMBIGUOUS",
                context={"class": self._cls.__qualname__, "method": method_name},
            )

        route = MethodRoute(
            owner=self._cls,
            method_name=method_name,
            http_method=verbs[0],
            path=target.base_path + mapping.get("path", ""),
            signature=signature,
            return_type=return_type,
            bindings=bindings,
        )
        logger.debug(
            "route_resolved",
            controller=self._cls.__qualname__,
            method=method_name,
            http_method=route.http_method,
            path=route.path,
        )
        return route
