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
"""ControllerClientCaller — given/when/then style wrapper around a single controller call."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from mvclient.client.builder import ControllerClientBuilder
from mvclient.client.matchers import ResultActions, status
from mvclient.client.proxy import ResponseCustomizer
from mvclient.kernel.exceptions import ConfigurationError

T = TypeVar("T")


class ControllerClientCaller(Generic[T]):
    """Runs one controller call on a freshly built proxy and checks the response.

    Usage::

        result = (factory.caller(ExampleController)
            .when(lambda controller: controller.example_method())
            .then_status(200)
            .execute())

    Each caller is single-use: expectations accumulate on its builder and
    cannot be reset, so create a new caller for every call.
    """

    def __init__(self, builder: ControllerClientBuilder[T]) -> None:
        self._builder = builder
        self._function: Callable[[T], Any] | None = None
        self._consumer: Callable[[T], Any] | None = None
        self._executed = False

    def when(self, function: Callable[[T], Any]) -> ControllerClientCaller[T]:
        """Register the call whose result ``execute()`` returns."""
        self._function = function
        self._assert_one_action()
        return self

    def when_consume(self, consumer: Callable[[T], Any]) -> ControllerClientCaller[T]:
        """Register a call whose result is discarded; ``execute()`` returns ``None``."""
        self._consumer = consumer
        self._assert_one_action()
        return self

    def then(self, customizer: ResponseCustomizer) -> ControllerClientCaller[T]:
        self._builder.customize_response(customizer)
        return self

    def then_status(self, status_code: int) -> ControllerClientCaller[T]:
        def expectation(result: ResultActions) -> ResultActions:
            return result.and_expect(status().is_(status_code))

        return self.then(expectation)

    def execute(self) -> Any:
        self._assert_one_action()
        if self._executed:
            raise ConfigurationError(
                "ControllerClientCaller has already been executed; create a new caller for each call",
                code="CALLER_REUSED",
            )
        if self._function is None and self._consumer is None:
            raise ConfigurationError(
                "No controller call defined; register one with when() or when_consume()",
                code="CALLER_NO_ACTION",
            )

        self._executed = True
        client = self._builder.build()
        if self._consumer is not None:
            self._consumer(client)
            return None
        assert self._function is not None
        return self._function(client)

    def _assert_one_action(self) -> None:
        if self._function is not None and self._consumer is not None:
            raise ConfigurationError(
                "Only one controller call can be defined",
                code="CALLER_MULTIPLE_ACTIONS",
            )
