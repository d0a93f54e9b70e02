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
"""ParameterResolver — binds handler parameters from a Starlette Request.

Parameters are classified with the same rules the controller client uses to
build requests, so a handler and its proxy always agree on where each
argument travels.
"""

from __future__ import annotations

import io
from typing import Any, get_args, get_origin

from pydantic import TypeAdapter
from starlette.datastructures import UploadFile
from starlette.requests import Request

from mvclient.client.request import BODY_PART
from mvclient.client.route import BindingKind, ParameterBinding, parameter_bindings, strip_optional
from mvclient.web.params import MultipartFile, UploadedFile


def _is_list(hint: Any) -> bool:
    return get_origin(hint) in (list, tuple, set, frozenset)


def _element_type(hint: Any) -> Any:
    args = get_args(hint)
    return args[0] if args else str


class ParameterResolver:
    """Inspects a handler method's signature and resolves parameters from a Request.

    At startup, classifies each parameter (PathVar, QueryParam, Body, Header,
    Cookie, File, raw stream). At runtime, resolves each one from the request.
    """

    def __init__(self, handler: Any) -> None:
        _, self.bindings, _ = parameter_bindings(handler)

    async def resolve(self, request: Request) -> dict[str, Any]:
        """Resolve all parameters from the request."""
        kwargs: dict[str, Any] = {}
        for binding in self.bindings:
            kwargs[binding.parameter] = await self._resolve_one(request, binding)
        return kwargs

    async def _resolve_one(self, request: Request, binding: ParameterBinding) -> Any:
        kind = binding.kind
        if kind is BindingKind.PATH_VARIABLE:
            return self._resolve_path_var(request, binding)
        if kind is BindingKind.QUERY_PARAM:
            return self._resolve_query_param(request, binding)
        if kind is BindingKind.BODY:
            return await self._resolve_body(request, binding)
        if kind is BindingKind.HEADER:
            return self._resolve_single(request.headers.get(binding.name), binding)
        if kind is BindingKind.COOKIE:
            return self._resolve_single(request.cookies.get(binding.name), binding)
        if kind is BindingKind.FILE:
            return await self._resolve_file(request, binding)
        if kind is BindingKind.RAW_STREAM:
            return io.BytesIO(await self._body_bytes(request))
        return None  # pragma: no cover

    def _resolve_path_var(self, request: Request, binding: ParameterBinding) -> Any:
        raw = request.path_params.get(binding.name)
        if raw is None:
            if not binding.required:
                return binding.default
            msg = f"Missing path variable: {binding.name}"
            raise ValueError(msg)
        return self._coerce(raw, binding.inner_type)

    def _resolve_query_param(self, request: Request, binding: ParameterBinding) -> Any:
        inner = strip_optional(binding.inner_type)
        if _is_list(inner):
            values = request.query_params.getlist(binding.name)
            if not values and not binding.required:
                return binding.default
            element = _element_type(inner)
            return [self._coerce(v, element) for v in values]
        return self._resolve_single(request.query_params.get(binding.name), binding)

    def _resolve_single(self, raw: str | None, binding: ParameterBinding) -> Any:
        if raw is None:
            return None if binding.required else binding.default
        return self._coerce(raw, binding.inner_type)

    async def _resolve_body(self, request: Request, binding: ParameterBinding) -> Any:
        body_bytes = await self._body_bytes(request)
        if not body_bytes and not binding.required:
            return binding.default
        inner = strip_optional(binding.inner_type)
        if inner is str:
            return body_bytes.decode()
        if inner is bytes:
            return body_bytes
        return TypeAdapter(inner).validate_json(body_bytes)

    @staticmethod
    async def _body_bytes(request: Request) -> bytes:
        """Request body, or the body part of a multipart request."""
        if not request.headers.get("content-type", "").startswith("multipart/"):
            return await request.body()
        part = (await request.form()).get(BODY_PART)
        if part is None:
            return b""
        if isinstance(part, UploadFile):
            return await part.read()
        return part.encode("utf-8")

    async def _resolve_file(self, request: Request, binding: ParameterBinding) -> Any:
        form = await request.form()
        uploads = [u for u in form.getlist(binding.name) if isinstance(u, UploadFile)]
        inner = strip_optional(binding.inner_type)
        many = _is_list(inner)
        element = _element_type(inner) if many else inner

        files = [await self._to_file(u, binding.name, element) for u in uploads]
        if many:
            return files
        if files:
            return files[0]
        return None if binding.required else binding.default

    @staticmethod
    async def _to_file(upload: UploadFile, name: str, element: Any) -> Any:
        content_type = upload.content_type or "application/octet-stream"
        if element is MultipartFile:
            return MultipartFile(name, upload.filename or "", content_type, await upload.read())
        return UploadedFile(
            filename=upload.filename or "",
            content_type=content_type,
            size=upload.size or 0,
            _file=upload,
        )

    def _coerce(self, value: str, target_type: Any) -> Any:
        """Coerce a string value to the target type."""
        target_type = strip_optional(target_type)
        if target_type is str or target_type is Any:
            return value
        return TypeAdapter(target_type).validate_python(value)
