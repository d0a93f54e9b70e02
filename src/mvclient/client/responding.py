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
"""RespondingControllerClient — returns the decoded payload together with response metadata."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from mvclient.client.builder import ControllerClientBuilder
from mvclient.client.response import ControllerResponse, RawResponse
from mvclient.kernel.exceptions import ConfigurationError

T = TypeVar("T")


class RespondingControllerClient(Generic[T]):
    """Captures the raw response of each call next to its decoded result.

    Non-2xx responses still decode to ``None``, but the envelope keeps the
    status, headers and error message::

        response = responding.execute_function(lambda c: c.failing_method())
        assert response.status_code == 500
    """

    def __init__(self, builder: ControllerClientBuilder[T]) -> None:
        self._builder = builder
        self._last_response: RawResponse | None = None
        builder.handle_response(self._capture)

    def _capture(self, response: RawResponse) -> None:
        self._last_response = response

    def execute_function(self, function: Callable[[T], Any]) -> ControllerResponse[Any]:
        """Invoke a value-returning controller call and wrap its result."""
        self._last_response = None
        payload = function(self._builder.build())
        return ControllerResponse.of(self._captured(), payload)

    def execute_consumer(self, consumer: Callable[[T], Any]) -> ControllerResponse[None]:
        """Invoke a controller call, discard its result, and wrap the response metadata."""
        self._last_response = None
        consumer(self._builder.build())
        return ControllerResponse.of(self._captured())

    def _captured(self) -> RawResponse:
        if self._last_response is None:
            raise ConfigurationError(
                "The action did not call any controller method",
                code="NO_CONTROLLER_CALL",
            )
        return self._last_response
