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
"""ControllerClient — a stand-in for a controller whose methods issue HTTP calls.

The proxy is an instance of a generated subclass of the controller. Every
plain method is overridden with a synchronous interceptor, and the instance
is allocated with ``object.__new__`` so the controller's ``__init__`` (and
whatever dependencies it insists on) never runs.

Per intercepted call:
1. RequestSynthesizer builds a RequestDescriptor from the route and arguments
2. request customizers mutate it, in registration order
3. the request executor dispatches it
4. response customizers run against ResultActions, in registration order
5. response handlers observe the RawResponse
6. ResponseMapper decodes the body into the declared return type
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, Generic, TypeVar, cast

import structlog

from mvclient.client.matchers import ResultActions
from mvclient.client.ports.outbound import RequestExecutorPort, SerializerPort
from mvclient.client.request import RequestDescriptor, RequestSynthesizer
from mvclient.client.response import RawResponse, ResponseMapper
from mvclient.client.route import RouteResolver, controller_methods
from mvclient.kernel.exceptions import AssertionFailure

logger = structlog.get_logger("mvclient.client")

T = TypeVar("T")

RequestCustomizer = Callable[[RequestDescriptor], Any]
ResponseCustomizer = Callable[[ResultActions], "ResultActions | None"]
ResponseHandler = Callable[[RawResponse], Any]

_INTERCEPTOR_ATTR = "__mvclient_interceptor__"


def _make_intercepting_method(name: str, original: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(original)
    def method(self: Any, *args: Any, **kwargs: Any) -> Any:
        interceptor: ControllerClient[Any] = getattr(self, _INTERCEPTOR_ATTR)
        return interceptor.intercept(name, args, kwargs)

    return method


@functools.lru_cache(maxsize=None)
def proxy_class(cls: type) -> type:
    """Generate (once per controller class) the subclass used for proxies."""
    namespace: dict[str, Any] = {
        name: _make_intercepting_method(name, func) for name, func in controller_methods(cls).items()
    }
    namespace["__module__"] = cls.__module__
    namespace["__mvclient_target__"] = cls
    namespace["__mvclient_routes__"] = RouteResolver(cls)
    return type(f"{cls.__name__}ControllerClient", (cls,), namespace)


class ControllerClient(Generic[T]):
    """Intercepts calls on a controller proxy and turns them into HTTP requests.

    Instances are created by :class:`ControllerClientBuilder`; customizer
    sequences are immutable snapshots taken at build time.
    """

    def __init__(
        self,
        cls: type[T],
        executor: RequestExecutorPort,
        serializer: SerializerPort,
        request_customizers: tuple[RequestCustomizer, ...] = (),
        response_customizers: tuple[ResponseCustomizer, ...] = (),
        response_handlers: tuple[ResponseHandler, ...] = (),
    ) -> None:
        self._cls = cls
        self._executor = executor
        self._proxy_cls = proxy_class(cls)
        self._routes: RouteResolver = self._proxy_cls.__mvclient_routes__  # type: ignore[attr-defined]
        self._synthesizer = RequestSynthesizer(serializer)
        self._mapper = ResponseMapper(serializer)
        self._request_customizers = tuple(request_customizers)
        self._response_customizers = tuple(response_customizers)
        self._response_handlers = tuple(response_handlers)

    def get_client(self) -> T:
        """Allocate the proxy without running the controller's ``__init__``."""
        instance = object.__new__(self._proxy_cls)
        object.__setattr__(instance, _INTERCEPTOR_ATTR, self)
        return cast(T, instance)

    def intercept(self, method_name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        route = self._routes.resolve(method_name)
        request = self._synthesizer.synthesize(route, args, kwargs)

        for request_customizer in self._request_customizers:
            request_customizer(request)

        start = time.perf_counter()
        response = self._executor.execute(request)
        logger.debug(
            "controller_call",
            controller=self._cls.__qualname__,
            method=method_name,
            http_method=request.method,
            url=request.url,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )

        response = self._apply_response_customizers(route.qualified_name, response)

        for handler in self._response_handlers:
            handler(response)

        if route.is_void:
            return None
        return self._mapper.map(route, response)

    def _apply_response_customizers(self, call: str, response: RawResponse) -> RawResponse:
        actions = ResultActions(response)
        for customizer in self._response_customizers:
            try:
                result = customizer(actions)
            except AssertionFailure:
                logger.debug("controller_call_failed", call=call, status_code=response.status_code)
                raise
            except AssertionError as exc:
                logger.debug("controller_call_failed", call=call, status_code=response.status_code)
                raise AssertionFailure(
                    str(exc),
                    code="ASSERTION_FAILED",
                    context={"status": response.status_code, "call": call},
                ) from exc
            if isinstance(result, ResultActions):
                actions = result
        return actions.and_return()
