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
"""httpx-based request executor adapter."""

from __future__ import annotations

from typing import Any

import httpx

from mvclient.client.request import APPLICATION_OCTET_STREAM, BODY_PART, RequestDescriptor
from mvclient.client.response import RawResponse


class HttpxRequestExecutor:
    """Request executor backed by a synchronous ``httpx.Client``.

    Starlette's ``TestClient`` is an ``httpx.Client``, so the same adapter
    dispatches in-process against an ASGI app::

        executor = HttpxRequestExecutor.for_app(app)
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    @classmethod
    def for_app(
        cls,
        app: Any,
        *,
        base_url: str = "http://testserver",
        raise_server_exceptions: bool = False,
        follow_redirects: bool = True,
    ) -> HttpxRequestExecutor:
        """Build an executor that dispatches to an in-process ASGI application."""
        from starlette.testclient import TestClient

        client = TestClient(
            app,
            base_url=base_url,
            raise_server_exceptions=raise_server_exceptions,
            follow_redirects=follow_redirects,
        )
        return cls(client)

    @property
    def client(self) -> httpx.Client:
        return self._client

    def execute(self, request: RequestDescriptor) -> RawResponse:
        headers = list(request.headers)
        if request.cookies:
            headers.append(("cookie", "; ".join(f"{k}={v}" for k, v in request.cookies.items())))

        kwargs: dict[str, Any] = {"params": request.query, "headers": headers}
        if request.multipart:
            files: list[tuple[str, tuple[str | None, bytes, str]]] = [
                (part.name, (part.filename, part.content, part.content_type)) for part in request.files
            ]
            if request.body is not None:
                files.append((BODY_PART, (None, request.body, request.content_type or APPLICATION_OCTET_STREAM)))
            kwargs["files"] = files
        elif request.body is not None:
            kwargs["content"] = request.body
            if request.content_type is not None:
                headers.append(("content-type", request.content_type))

        response = self._client.request(request.method, request.url, **kwargs)
        return self.to_raw_response(response)

    @staticmethod
    def to_raw_response(response: httpx.Response) -> RawResponse:
        headers: dict[str, tuple[str, ...]] = {}
        for name, value in response.headers.multi_items():
            key = name.lower()
            headers[key] = (*headers.get(key, ()), value)

        body = response.content
        length = response.headers.get("content-length")
        return RawResponse(
            status_code=response.status_code,
            body=body,
            headers=headers,
            content_type=response.headers.get("content-type"),
            content_length=int(length) if length is not None else len(body),
            error_message=response.reason_phrase if response.status_code >= 400 else None,
            encoding=response.encoding or "utf-8",
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
