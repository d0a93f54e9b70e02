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
"""Unified exception hierarchy for mvclient.

All errors raised while building, dispatching or decoding a controller call
inherit from ControllerClientException. Each concrete error also mixes in the
closest built-in exception so plain ``except ValueError`` style handling keeps
working in test code.

Categories:
- RouteResolutionError: missing or ambiguous routing metadata
- MissingPathVariableError: ``None`` passed for a path variable
- UnsupportedReturnTypeError: return annotation the mapper cannot decode
- ResponseDecodingError: the serializer rejected the response body
- AssertionFailure: a response expectation was not met
- ConfigurationError: client, caller or factory misconfiguration
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class ControllerClientException(Exception):
    """Base exception for all mvclient errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "ROUTE_RESOLUTION").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Request construction
# =============================================================================


class RouteResolutionError(ControllerClientException, LookupError):
    """Routing metadata is missing on the class or method, or is ambiguous."""


class MissingPathVariableError(ControllerClientException, ValueError):
    """A path variable argument was ``None``."""


# =============================================================================
# Response handling
# =============================================================================


class UnsupportedReturnTypeError(ControllerClientException, TypeError):
    """The declared return type cannot be decoded from a response body."""


class ResponseDecodingError(ControllerClientException, ValueError):
    """The serializer failed to decode the response body into the declared type."""


class AssertionFailure(ControllerClientException, AssertionError):
    """A response expectation registered on the client was not met."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigurationError(ControllerClientException, RuntimeError):
    """Invalid client, caller or factory configuration."""
