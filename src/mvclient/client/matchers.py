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
"""ResultActions and result matchers for response customizers.

Usage::

    builder.customize_response(
        lambda result: result.and_expect(status().is_(200)).and_expect(
            json_path("$.message").value("Hello world!")
        )
    )
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from jsonpath_ng import parse as jsonpath_parse  # type: ignore[import-untyped]

from mvclient.client.response import RawResponse
from mvclient.kernel.exceptions import AssertionFailure

ResultMatcher = Callable[[RawResponse], None]
ResultHandler = Callable[[RawResponse], None]


def _fail(message: str, response: RawResponse) -> AssertionFailure:
    return AssertionFailure(
        message,
        code="ASSERTION_FAILED",
        context={"status": response.status_code},
    )


class ResultActions:
    """The dispatched response, passed through every response customizer."""

    def __init__(self, response: RawResponse) -> None:
        self._response = response

    def and_expect(self, matcher: ResultMatcher) -> ResultActions:
        matcher(self._response)
        return self

    def and_do(self, handler: ResultHandler) -> ResultActions:
        handler(self._response)
        return self

    def and_return(self) -> RawResponse:
        return self._response


class StatusResultMatchers:
    """Matchers on the response status code."""

    def is_(self, expected: int) -> ResultMatcher:
        def match(response: RawResponse) -> None:
            if response.status_code != expected:
                raise _fail(f"Status expected:<{expected}> but was:<{response.status_code}>", response)

        return match

    def _in_range(self, low: int, label: str) -> ResultMatcher:
        def match(response: RawResponse) -> None:
            if not low <= response.status_code < low + 100:
                raise _fail(f"Range for response status value {response.status_code} expected:<{label}>", response)

        return match

    def is_2xx_successful(self) -> ResultMatcher:
        return self._in_range(200, "SUCCESSFUL")

    def is_3xx_redirection(self) -> ResultMatcher:
        return self._in_range(300, "REDIRECTION")

    def is_4xx_client_error(self) -> ResultMatcher:
        return self._in_range(400, "CLIENT_ERROR")

    def is_5xx_server_error(self) -> ResultMatcher:
        return self._in_range(500, "SERVER_ERROR")


class HeaderResultMatchers:
    """Matchers on response headers."""

    def string(self, name: str, expected: str) -> ResultMatcher:
        def match(response: RawResponse) -> None:
            actual = response.header(name)
            if actual != expected:
                raise _fail(f"Response header '{name}' expected:<{expected}> but was:<{actual}>", response)

        return match

    def exists(self, name: str) -> ResultMatcher:
        def match(response: RawResponse) -> None:
            if response.header(name) is None:
                raise _fail(f"Response should contain header '{name}'", response)

        return match

    def does_not_exist(self, name: str) -> ResultMatcher:
        def match(response: RawResponse) -> None:
            if response.header(name) is not None:
                raise _fail(f"Response should not contain header '{name}'", response)

        return match


class ContentResultMatchers:
    """Matchers on the response body."""

    def string(self, expected: str) -> ResultMatcher:
        def match(response: RawResponse) -> None:
            if response.text != expected:
                raise _fail(f"Response content expected:<{expected}> but was:<{response.text}>", response)

        return match

    def content_type(self, expected: str) -> ResultMatcher:
        def match(response: RawResponse) -> None:
            actual = (response.content_type or "").split(";")[0].strip()
            if actual != expected:
                raise _fail(f"Content type expected:<{expected}> but was:<{actual}>", response)

        return match


class JsonPathResultMatchers:
    """Matchers evaluating a JSONPath expression against the JSON body."""

    def __init__(self, expression: str) -> None:
        self._expression = expression
        self._parsed = jsonpath_parse(expression)

    def _find(self, response: RawResponse) -> list[Any]:
        return [m.value for m in self._parsed.find(response.json())]

    def value(self, expected: Any) -> ResultMatcher:
        def match(response: RawResponse) -> None:
            found = self._find(response)
            if not found:
                raise _fail(f"No value at JSON path '{self._expression}'", response)
            if found[0] != expected:
                raise _fail(
                    f"JSON path '{self._expression}' expected:<{expected!r}> but was:<{found[0]!r}>", response
                )

        return match

    def exists(self) -> ResultMatcher:
        def match(response: RawResponse) -> None:
            if not self._find(response):
                raise _fail(f"No value at JSON path '{self._expression}'", response)

        return match

    def does_not_exist(self) -> ResultMatcher:
        def match(response: RawResponse) -> None:
            if self._find(response):
                raise _fail(f"Expected no value at JSON path '{self._expression}'", response)

        return match


def status() -> StatusResultMatchers:
    return StatusResultMatchers()


def header() -> HeaderResultMatchers:
    return HeaderResultMatchers()


def content() -> ContentResultMatchers:
    return ContentResultMatchers()


def json_path(expression: str) -> JsonPathResultMatchers:
    return JsonPathResultMatchers(expression)
