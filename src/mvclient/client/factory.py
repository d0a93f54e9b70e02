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
"""Entry point for creating controller clients, callers and responding clients."""

from __future__ import annotations

from typing import Any, TypeVar

from mvclient.client.builder import ControllerClientBuilder
from mvclient.client.caller import ControllerClientCaller
from mvclient.client.ports.outbound import RequestExecutorPort, SerializerPort
from mvclient.client.responding import RespondingControllerClient
from mvclient.config.properties import ClientProperties
from mvclient.core.config import Config
from mvclient.kernel.exceptions import ConfigurationError
from mvclient.logging.port import LoggingPort
from mvclient.logging.structlog_adapter import StructlogAdapter

T = TypeVar("T")


class ControllerClientFactory:
    """Creates builders, callers and responding clients for controller classes.

    Usage::

        factory = ControllerClientFactory.for_app(app)

        controller = factory.create(ExampleController)
        controller.example_method()

        caller = factory.caller(ExampleController)
        responding = factory.responding_client(ExampleController)
    """

    def __init__(
        self,
        executor: RequestExecutorPort | None,
        serializer: SerializerPort | None = None,
        properties: ClientProperties | None = None,
    ) -> None:
        if serializer is None:
            from mvclient.client.adapters.pydantic_serializer import PydanticSerializer

            serializer = PydanticSerializer()
        self._executor = executor
        self._serializer = serializer
        self._properties = properties or ClientProperties()

    @classmethod
    def for_app(
        cls,
        app: Any,
        *,
        serializer: SerializerPort | None = None,
        properties: ClientProperties | None = None,
    ) -> ControllerClientFactory:
        """Factory dispatching in-process to an ASGI application."""
        from mvclient.client.adapters.httpx_executor import HttpxRequestExecutor

        props = properties or ClientProperties()
        executor = HttpxRequestExecutor.for_app(
            app,
            base_url=props.base_url,
            raise_server_exceptions=props.raise_server_exceptions,
            follow_redirects=props.follow_redirects,
        )
        return cls(executor, serializer, props)

    @classmethod
    def from_config(
        cls, config: Config, app: Any, *, logging_port: LoggingPort | None = None
    ) -> ControllerClientFactory:
        """Factory for ``app`` configured from the ``mvclient.client`` section.

        A ``mvclient.logging`` section, when present, is handed to
        ``logging_port`` (structlog by default).
        """
        if config.get_section("mvclient.logging"):
            (logging_port or StructlogAdapter()).configure(config)
        return cls.for_app(app, properties=config.bind(ClientProperties))

    @property
    def properties(self) -> ClientProperties:
        return self._properties

    def builder(self, cls: type[T]) -> ControllerClientBuilder[T]:
        """Create a builder for ``cls``."""
        if self._executor is None:
            raise ConfigurationError(
                "No request executor is configured for this factory",
                code="NO_EXECUTOR",
            )
        builder = ControllerClientBuilder(cls, self._executor, self._serializer)
        if self._properties.expect_success:
            builder.expect_success()
        return builder

    def create(self, cls: type[T]) -> T:
        """Create a proxy for ``cls`` that expects every call to succeed (2xx)."""
        builder = self.builder(cls)
        if not self._properties.expect_success:
            builder.expect_success()
        return builder.build()

    def caller(self, target: type[T] | ControllerClientBuilder[T]) -> ControllerClientCaller[T]:
        """Create a caller for a controller class or an already configured builder."""
        if isinstance(target, ControllerClientBuilder):
            return ControllerClientCaller(target)
        return ControllerClientCaller(self.builder(target))

    def responding_client(self, cls: type[T]) -> RespondingControllerClient[T]:
        """Create a client that returns ControllerResponse envelopes."""
        return RespondingControllerClient(self.builder(cls))
