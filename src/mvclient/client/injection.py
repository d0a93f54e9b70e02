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
"""Field injection of controller clients and callers into test classes.

Usage::

    class TestExampleController:
        example: ExampleController = set_controller_client()
        caller: ControllerClientCaller[ExampleController] = set_controller_client_caller(
            customizer=ExpectSuccess,
        )

    processor = ControllerClientPostProcessor(factory)
    processor.before_init(test_instance, "test_instance")
"""

from __future__ import annotations

import typing
from dataclasses import dataclass
from typing import Any, Protocol, get_args, get_origin, runtime_checkable

from mvclient.client.builder import ControllerClientBuilder
from mvclient.client.caller import ControllerClientCaller
from mvclient.client.factory import ControllerClientFactory
from mvclient.kernel.exceptions import ConfigurationError


@runtime_checkable
class ControllerClientAnnotationCustomizer(Protocol):
    """Adjusts a builder before an injected client or caller is created."""

    def customize(self, builder: ControllerClientBuilder[Any]) -> ControllerClientBuilder[Any]: ...


@dataclass(frozen=True)
class InjectionMarker:
    """Class attribute placeholder recognised by ControllerClientPostProcessor."""

    kind: str
    customizer: type[ControllerClientAnnotationCustomizer] | None = None


def set_controller_client(
    customizer: type[ControllerClientAnnotationCustomizer] | None = None,
) -> Any:
    """Mark an attribute to receive a built controller proxy."""
    return InjectionMarker("client", customizer)


def set_controller_client_caller(
    customizer: type[ControllerClientAnnotationCustomizer] | None = None,
) -> Any:
    """Mark an attribute to receive a ControllerClientCaller."""
    return InjectionMarker("caller", customizer)


class ControllerClientPostProcessor:
    """Bean post-processor that fills ``set_controller_client*`` attributes."""

    def __init__(self, factory: ControllerClientFactory) -> None:
        self._factory = factory

    def before_init(self, bean: Any, bean_name: str) -> Any:
        cls = type(bean)
        markers = self._collect_markers(cls)
        if not markers:
            return bean

        hints = typing.get_type_hints(cls)
        for attr_name, marker in markers.items():
            hint = hints.get(attr_name)
            if hint is None:
                raise ConfigurationError(
                    f"Cannot inject {cls.__qualname__}.{attr_name}: attribute has no type annotation",
                    code="INJECTION_NO_TYPE",
                    context={"bean": bean_name, "field": attr_name},
                )
            if marker.kind == "caller":
                value: Any = self._make_caller(cls, attr_name, hint, marker)
            else:
                value = self._customize(self._factory.builder(hint), marker).build()
            setattr(bean, attr_name, value)
        return bean

    def after_init(self, bean: Any, bean_name: str) -> Any:
        return bean

    @staticmethod
    def _collect_markers(cls: type) -> dict[str, InjectionMarker]:
        markers: dict[str, InjectionMarker] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, InjectionMarker):
                    markers[name] = value
        return markers

    def _make_caller(
        self, cls: type, attr_name: str, hint: Any, marker: InjectionMarker
    ) -> ControllerClientCaller[Any]:
        args = get_args(hint)
        if get_origin(hint) is not ControllerClientCaller or not args:
            raise ConfigurationError(
                f"Cannot inject {cls.__qualname__}.{attr_name}: expected ControllerClientCaller[Controller], got {hint!r}",
                code="INJECTION_BAD_TYPE",
                context={"field": attr_name},
            )
        builder = self._customize(self._factory.builder(args[0]), marker)
        return self._factory.caller(builder)

    @staticmethod
    def _customize(builder: ControllerClientBuilder[Any], marker: InjectionMarker) -> ControllerClientBuilder[Any]:
        if marker.customizer is None:
            return builder
        return marker.customizer().customize(builder)
