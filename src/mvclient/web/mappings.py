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
"""HTTP method mapping decorators for class-based controllers.

Mirrors Spring's @RequestMapping, @GetMapping, @PostMapping, etc.
``request_mapping`` works on both levels: on a class it sets the base path,
on a function it declares the path and an explicit verb list.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])

MAPPING_ATTR = "__mvclient_mapping__"
REQUEST_MAPPING_ATTR = "__mvclient_request_mapping__"


def request_mapping(
    path: str = "",
    *,
    methods: Sequence[str] = (),
    status_code: int = 200,
) -> Callable[[T], T]:
    """Declare a base path on a class, or a path and verbs on a handler method.

    Usage::

        @request_mapping("/orders")
        class OrderController:
            @request_mapping("/{order_id}", methods=["GET"])
            async def get_order(self, order_id: PathVar[str]) -> Order: ...
    """

    def decorator(target: T) -> T:
        if isinstance(target, type):
            setattr(target, REQUEST_MAPPING_ATTR, path.rstrip("/"))
        else:
            setattr(
                target,
                MAPPING_ATTR,
                {
                    "methods": [m.upper() for m in methods],
                    "path": path,
                    "status_code": status_code,
                },
            )
        return target

    return decorator


def _make_method_mapping(method: str) -> Callable[..., Any]:
    """Factory that creates an HTTP method mapping decorator."""

    def mapping(path: str = "", *, status_code: int = 200) -> Callable[[F], F]:
        def decorator(func: F) -> F:
            setattr(
                func,
                MAPPING_ATTR,
                {
                    "methods": [method],
                    "path": path,
                    "status_code": status_code,
                },
            )
            return func

        return decorator

    mapping.__name__ = f"{method.lower()}_mapping"
    mapping.__qualname__ = f"{method.lower()}_mapping"
    return mapping


get_mapping = _make_method_mapping("GET")
post_mapping = _make_method_mapping("POST")
put_mapping = _make_method_mapping("PUT")
patch_mapping = _make_method_mapping("PATCH")
delete_mapping = _make_method_mapping("DELETE")
