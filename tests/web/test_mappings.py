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
"""Tests for HTTP method mapping decorators."""

from mvclient.web.exception_handler import EXCEPTION_HANDLER_ATTR, exception_handler
from mvclient.web.mappings import (
    MAPPING_ATTR,
    REQUEST_MAPPING_ATTR,
    delete_mapping,
    get_mapping,
    patch_mapping,
    post_mapping,
    put_mapping,
    request_mapping,
)


class TestRequestMapping:
    def test_class_level_path(self):
        @request_mapping("/api/orders")
        class MyController:
            pass

        assert getattr(MyController, REQUEST_MAPPING_ATTR) == "/api/orders"

    def test_class_level_trailing_slash_is_stripped(self):
        @request_mapping("/api/orders/")
        class MyController:
            pass

        assert getattr(MyController, REQUEST_MAPPING_ATTR) == "/api/orders"

    def test_preserves_class(self):
        @request_mapping("/api")
        class MyController:
            """My docstring."""

        assert MyController.__name__ == "MyController"
        assert MyController.__doc__ == "My docstring."

    def test_method_level_verbs_are_upper_cased(self):
        class Ctrl:
            @request_mapping("/search", methods=["get"])
            def search(self):
                pass

        meta = getattr(Ctrl.search, MAPPING_ATTR)
        assert meta == {"methods": ["GET"], "path": "/search", "status_code": 200}

    def test_method_level_without_verbs(self):
        class Ctrl:
            @request_mapping("/any")
            def anything(self):
                pass

        assert getattr(Ctrl.anything, MAPPING_ATTR)["methods"] == []


class TestVerbMappings:
    def test_get_mapping(self):
        class Ctrl:
            @get_mapping("/{item_id}")
            async def get_item(self):
                pass

        meta = getattr(Ctrl.get_item, MAPPING_ATTR)
        assert meta["methods"] == ["GET"]
        assert meta["path"] == "/{item_id}"
        assert meta["status_code"] == 200

    def test_post_mapping_status_code(self):
        class Ctrl:
            @post_mapping("", status_code=201)
            def create(self):
                pass

        meta = getattr(Ctrl.create, MAPPING_ATTR)
        assert meta["methods"] == ["POST"]
        assert meta["status_code"] == 201

    def test_other_verbs(self):
        class Ctrl:
            @put_mapping("/{id}")
            def update(self):
                pass

            @patch_mapping("/{id}")
            def partial_update(self):
                pass

            @delete_mapping("/{id}")
            def delete(self):
                pass

        assert getattr(Ctrl.update, MAPPING_ATTR)["methods"] == ["PUT"]
        assert getattr(Ctrl.partial_update, MAPPING_ATTR)["methods"] == ["PATCH"]
        assert getattr(Ctrl.delete, MAPPING_ATTR)["methods"] == ["DELETE"]

    def test_decorator_names(self):
        assert get_mapping.__name__ == "get_mapping"
        assert delete_mapping.__name__ == "delete_mapping"


class TestExceptionHandler:
    def test_marks_method(self):
        class Ctrl:
            @exception_handler(KeyError)
            def handle_missing(self, exc):
                return 404, {"error": "not found"}

        assert getattr(Ctrl.handle_missing, EXCEPTION_HANDLER_ATTR) is KeyError
