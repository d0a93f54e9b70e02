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
"""Fluent builder for controller client proxies."""

from __future__ import annotations

from typing import Generic, TypeVar

from mvclient.client.matchers import ResultActions, status
from mvclient.client.ports.outbound import RequestExecutorPort, SerializerPort
from mvclient.client.proxy import (
    ControllerClient,
    RequestCustomizer,
    ResponseCustomizer,
    ResponseHandler,
)

T = TypeVar("T")


class ControllerClientBuilder(Generic[T]):
    """Builds proxies for a controller class.

    Customizers accumulate on the builder; ``build()`` hands the proxy an
    immutable snapshot, so later changes to the builder never reach proxies
    that were already built::

        client = (factory.builder(ExampleController)
            .customize_request(lambda request: request.header("Authorization", "token"))
            .expect_status(200)
            .build())

        response = client.example_method()
    """

    def __init__(
        self,
        cls: type[T],
        executor: RequestExecutorPort,
        serializer: SerializerPort,
    ) -> None:
        self._cls = cls
        self._executor = executor
        self._serializer = serializer
        self._request_customizers: list[RequestCustomizer] = []
        self._response_customizers: list[ResponseCustomizer] = []
        self._response_handlers: list[ResponseHandler] = []

    @property
    def target(self) -> type[T]:
        """The controller class this builder proxies."""
        return self._cls

    def customize_request(self, customizer: RequestCustomizer) -> ControllerClientBuilder[T]:
        """Add a function that mutates the RequestDescriptor before dispatch."""
        self._request_customizers.append(customizer)
        return self

    def customize_response(self, customizer: ResponseCustomizer) -> ControllerClientBuilder[T]:
        """Add a function that inspects (and may replace) the ResultActions after dispatch."""
        self._response_customizers.append(customizer)
        return self

    def handle_response(self, handler: ResponseHandler) -> ControllerClientBuilder[T]:
        """Add a side-effect hook that receives every RawResponse."""
        self._response_handlers.append(handler)
        return self

    def expect_status(self, expected_status: int) -> ControllerClientBuilder[T]:
        """Expect every call to answer with ``expected_status``."""

        def expectation(result: ResultActions) -> ResultActions:
            return result.and_expect(status().is_(expected_status))

        return self.customize_response(expectation)

    def expect_success(self) -> ControllerClientBuilder[T]:
        """Expect every call to answer with a 2xx status."""

        def expectation(result: ResultActions) -> ResultActions:
            return result.and_expect(status().is_2xx_successful())

        return self.customize_response(expectation)

    def build(self) -> T:
        """Build a proxy bound to a snapshot of the current customizers."""
        return ControllerClient(
            self._cls,
            self._executor,
            self._serializer,
            request_customizers=tuple(self._request_customizers),
            response_customizers=tuple(self._response_customizers),
            response_handlers=tuple(self._response_handlers),
        ).get_client()

    def with_expected_status(self, expected_status: int) -> T:
        """Shorthand for ``expect_status(expected_status).build()``."""
        return self.expect_status(expected_status).build()
