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
"""Tests for RouteResolver and parameter classification."""

from __future__ import annotations

import io
from typing import Annotated, Any, BinaryIO

import pytest
from pydantic import BaseModel

from mvclient.client.route import BindingKind, RouteResolver, classify_parameter, parameter_bindings
from mvclient.kernel.exceptions import RouteResolutionError
from mvclient.web.mappings import get_mapping, post_mapping, request_mapping
from mvclient.web.params import Alias, Body, Cookie, File, Header, MultipartFile, PathVar, QueryParam


class Item(BaseModel):
    name: str


@request_mapping("/items/")
class ItemController:
    @get_mapping("/{item_id}")
    def get_item(self, item_id: PathVar[int], verbose: QueryParam[bool] = False) -> Item:
        return Item(name="x")

    @post_mapping("")
    def create(self, item: Body[Item], x_tenant_id: Header[str], session: Cookie[str] | None = None) -> Item:
        return item

    @request_mapping("/any", methods=["GET", "POST"])
    def ambiguous(self) -> None:
        pass

    @request_mapping("/none")
    def no_verb(self) -> None:
        pass

    @post_mapping("/twice")
    def two_bodies(self, a: Body[Item], b: Body[Item]) -> None:
        pass

    def helper(self) -> None:
        pass


class Unmapped:
    @get_mapping("/x")
    def x(self) -> None:
        pass


class ChildController(ItemController):
    @get_mapping("/child")
    def child(self) -> str:
        return "child"


class TestClassifyParameter:
    def test_marker_types(self) -> None:
        assert classify_parameter("a", PathVar[str]).kind is BindingKind.PATH_VARIABLE
        assert classify_parameter("a", QueryParam[int]).kind is BindingKind.QUERY_PARAM
        assert classify_parameter("a", Body[Item]).kind is BindingKind.BODY
        assert classify_parameter("a", Cookie[str]).kind is BindingKind.COOKIE
        assert classify_parameter("a", File[MultipartFile]).kind is BindingKind.FILE

    def test_inner_type_is_kept(self) -> None:
        binding = classify_parameter("item", Body[Item])
        assert binding is not None
        assert binding.inner_type is Item

    def test_header_name_uses_dashes(self) -> None:
        binding = classify_parameter("x_api_key", Header[str])
        assert binding is not None
        assert binding.name == "x-api-key"

    def test_alias_overrides_wire_name(self) -> None:
        binding = classify_parameter("text", Annotated[PathVar[str], Alias("message")])
        assert binding is not None
        assert binding.parameter == "text"
        assert binding.name == "message"

    def test_aliased_header_keeps_alias(self) -> None:
        binding = classify_parameter("token", Annotated[Header[str], Alias("X_Token")])
        assert binding is not None
        assert binding.name == "X_Token"

    def test_optional_marker_is_unwrapped(self) -> None:
        binding = classify_parameter("q", QueryParam[str] | None, None)
        assert binding is not None
        assert binding.kind is BindingKind.QUERY_PARAM
        assert not binding.required

    def test_unmarked_multipart_file(self) -> None:
        binding = classify_parameter("upload", MultipartFile)
        assert binding is not None
        assert binding.kind is BindingKind.FILE

    def test_unmarked_streams(self) -> None:
        assert classify_parameter("s", BinaryIO).kind is BindingKind.RAW_STREAM
        assert classify_parameter("s", io.BytesIO).kind is BindingKind.RAW_STREAM

    def test_unmarked_plain_type_is_unbound(self) -> None:
        assert classify_parameter("count", int) is None


class TestParameterBindings:
    def test_signature_excludes_self(self) -> None:
        signature, bindings, return_type = parameter_bindings(ItemController.get_item)
        assert list(signature.parameters) == ["item_id", "verbose"]
        assert [b.parameter for b in bindings] == ["item_id", "verbose"]
        assert return_type is Item

    def test_missing_return_annotation_is_any(self) -> None:
        def handler(self, item_id: PathVar[int]):
            pass

        _, _, return_type = parameter_bindings(handler)
        assert return_type is Any

    def test_unresolvable_hint_raises(self) -> None:
        def handler(self, item: "Missing") -> None:  # noqa: F821
            pass

        with pytest.raises(RouteResolutionError):
            parameter_bindings(handler)


class TestRouteResolver:
    def test_joins_base_path_and_method_path(self) -> None:
        route = RouteResolver(ItemController).resolve("get_item")
        assert route.http_method == "GET"
        assert route.path == "/items/{item_id}"

    def test_empty_method_path(self) -> None:
        route = RouteResolver(ItemController).resolve("create")
        assert route.http_method == "POST"
        assert route.path == "/items"

    def test_bindings_by_kind(self) -> None:
        route = RouteResolver(ItemController).resolve("create")
        assert [b.name for b in route.bindings_of(BindingKind.HEADER)] == ["x-tenant-id"]
        assert [b.name for b in route.bindings_of(BindingKind.COOKIE)] == ["session"]
        assert not route.is_multipart

    def test_route_return_type(self) -> None:
        route = RouteResolver(ItemController).resolve("get_item")
        assert not route.is_void
        assert RouteResolver(ChildController).resolve("child").return_type is str

    def test_qualified_name(self) -> None:
        route = RouteResolver(ItemController).resolve("get_item")
        assert route.qualified_name.endswith("ItemController#get_item(...)")

    def test_routes_are_cached(self) -> None:
        resolver = RouteResolver(ItemController)
        assert resolver.resolve("get_item") is resolver.resolve("get_item")

    def test_inherited_methods_resolve(self) -> None:
        resolver = RouteResolver(ChildController)
        assert resolver.resolve("child").path == "/items/child"
        assert resolver.resolve("get_item").path == "/items/{item_id}"

    def test_target_lists_mapped_methods(self) -> None:
        target = RouteResolver(ItemController).target
        assert target.base_path == "/items"
        assert "get_item" in target.methods
        assert "helper" not in target.methods

    def test_class_without_mapping_raises(self) -> None:
        with pytest.raises(RouteResolutionError, match="no @request_mapping"):
            RouteResolver(Unmapped).resolve("x")

    def test_method_without_mapping_raises(self) -> None:
        with pytest.raises(RouteResolutionError, match="has no request mapping"):
            RouteResolver(ItemController).resolve("helper")

    def test_several_verbs_are_ambiguous(self) -> None:
        with pytest.raises(RouteResolutionError) as exc_info:
            RouteResolver(ItemController).resolve("ambiguous")
        assert exc_info.value.code == "ROUTE_AMBIGUOUS"

    def test_missing_verb_is_ambiguous(self) -> None:
        with pytest.raises(RouteResolutionError) as exc_info:
            RouteResolver(ItemController).resolve("no_verb")
        assert exc_info.value.code == "ROUTE_AMBIGUOUS"

    def test_two_bodies_are_rejected(self) -> None:
        with pytest.raises(RouteResolutionError, match="more than one Body"):
            RouteResolver(ItemController).resolve("two_bodies")

    def test_resolution_error_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            RouteResolver(ItemController).resolve("helper")
