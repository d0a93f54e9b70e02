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
"""Controller route collection and request dispatching for the in-process host."""

from __future__ import annotations

import inspect
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from mvclient.client.route import controller_methods
from mvclient.web.exception_handler import EXCEPTION_HANDLER_ATTR
from mvclient.web.mappings import MAPPING_ATTR, REQUEST_MAPPING_ATTR
from mvclient.web.resolver import ParameterResolver
from mvclient.web.response import handle_return_value


async def _maybe_await(result: Any) -> Any:
    """Await the result if it's a coroutine, otherwise return as-is."""
    if inspect.isawaitable(result):
        return await result
    return result


class ControllerRegistrar:
    """Builds Starlette routes for controller instances.

    For each controller:
    1. Reads @request_mapping base path from the class
    2. Finds @*_mapping handler methods
    3. Builds a ParameterResolver for each handler
    4. Collects @exception_handler methods
    5. Creates Starlette Route objects that dispatch requests
    """

    def collect_routes(self, *controllers: Any) -> list[Route]:
        routes: list[Route] = []
        for instance in controllers:
            cls = type(instance)
            base_path = getattr(cls, REQUEST_MAPPING_ATTR, "")
            exc_handlers = self._collect_exception_handlers(instance)

            for attr_name, func in controller_methods(cls).items():
                mapping = getattr(func, MAPPING_ATTR, None)
                if mapping is None:
                    continue

                full_path = (base_path + mapping["path"]) or "/"
                handler = self._make_handler(
                    getattr(instance, attr_name), mapping.get("status_code", 200), exc_handlers
                )
                routes.append(Route(full_path, handler, methods=mapping["methods"] or None))
        return routes

    def _collect_exception_handlers(self, instance: Any) -> dict[type[Exception], Any]:
        """Collect @exception_handler methods, most specific exception type first."""
        handlers: dict[type[Exception], Any] = {}
        for attr_name, func in controller_methods(type(instance)).items():
            exc_type = getattr(func, EXCEPTION_HANDLER_ATTR, None)
            if exc_type is not None:
                handlers[exc_type] = getattr(instance, attr_name)
        return dict(sorted(handlers.items(), key=lambda item: len(item[0].__mro__), reverse=True))

    def _make_handler(
        self,
        bound_method: Any,
        status_code: int,
        exc_handlers: dict[type[Exception], Any],
    ) -> Any:
        resolver = ParameterResolver(bound_method)

        async def endpoint(request: Request) -> Response:
            try:
                kwargs = await resolver.resolve(request)
            except ValueError as exc:
                return JSONResponse({"error": "Bad Request", "detail": str(exc)}, status_code=400)
            try:
                result = await _maybe_await(bound_method(**kwargs))
                return handle_return_value(result, status_code)
            except Exception as exc:
                for exc_type, handler in exc_handlers.items():
                    if isinstance(exc, exc_type):
                        result = await _maybe_await(handler(exc))
                        if isinstance(result, tuple) and len(result) == 2:
                            return JSONResponse(result[1], status_code=result[0])
                        return handle_return_value(result)
                raise

        return endpoint
