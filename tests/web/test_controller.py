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
"""Tests for ControllerRegistrar and create_app."""

from __future__ import annotations

import pytest
from starlette.routing import Route
from starlette.testclient import TestClient

from mvclient.web.app import create_app
from mvclient.web.controller import ControllerRegistrar
from mvclient.web.exception_handler import exception_handler
from mvclient.web.mappings import delete_mapping, get_mapping, post_mapping, request_mapping
from mvclient.web.params import PathVar, QueryParam


class ItemNotFound(Exception):
    pass


class ItemGone(ItemNotFound):
    pass


@request_mapping("/items")
class ItemController:
    def __init__(self) -> None:
        self.items = {1: "pen"}

    @get_mapping("/{item_id}")
    async def get_item(self, item_id: PathVar[int]) -> dict:
        if item_id == 2:
            raise ItemGone(item_id)
        if item_id not in self.items:
            raise ItemNotFound(item_id)
        return {"id": item_id, "name": self.items[item_id]}

    @post_mapping("", status_code=201)
    def create(self, name: QueryParam[str]) -> dict:
        self.items[len(self.items) + 1] = name
        return {"name": name}

    @delete_mapping("/{item_id}")
    def delete(self, item_id: PathVar[int]) -> None:
        self.items.pop(item_id, None)

    @exception_handler(ItemNotFound)
    def handle_not_found(self, exc: ItemNotFound):
        return 404, {"error": "not found", "id": exc.args[0]}

    @exception_handler(ItemGone)
    def handle_gone(self, exc: ItemGone):
        return 410, {"error": "gone"}


@request_mapping("")
class RootController:
    @get_mapping("")
    def index(self) -> str:
        return "root"


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(ItemController(), RootController()), raise_server_exceptions=False)


class TestControllerRegistrar:
    def test_collects_one_route_per_handler(self):
        routes = ControllerRegistrar().collect_routes(ItemController())
        assert all(isinstance(route, Route) for route in routes)
        paths = sorted((route.path, sorted(route.methods or [])) for route in routes)
        assert paths == [
            ("/items", ["POST"]),
            ("/items/{item_id}", ["DELETE"]),
            ("/items/{item_id}", ["GET", "HEAD"]),
        ]

    def test_empty_path_maps_to_root(self):
        routes = ControllerRegistrar().collect_routes(RootController())
        assert [route.path for route in routes] == ["/"]


class TestCreateApp:
    def test_dispatches_to_handler(self, client: TestClient):
        response = client.get("/items/1")
        assert response.status_code == 200
        assert response.json() == {"id": 1, "name": "pen"}

    def test_uses_mapping_status_code(self, client: TestClient):
        response = client.post("/items", params={"name": "ink"})
        assert response.status_code == 201
        assert response.json() == {"name": "ink"}

    def test_void_handler_is_no_content(self, client: TestClient):
        assert client.delete("/items/1").status_code == 204

    def test_str_handler_is_plain_text(self, client: TestClient):
        response = client.get("/")
        assert response.text == "root"
        assert response.headers["content-type"].startswith("text/plain")

    def test_exception_handler_tuple(self, client: TestClient):
        response = client.get("/items/9")
        assert response.status_code == 404
        assert response.json() == {"error": "not found", "id": 9}

    def test_most_specific_exception_handler_wins(self, client: TestClient):
        assert client.get("/items/2").status_code == 410

    def test_binding_error_is_bad_request(self, client: TestClient):
        response = client.get("/items/abc")
        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"

    def test_unknown_route_is_not_found(self, client: TestClient):
        assert client.get("/nowhere").status_code == 404
