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
"""Tests for handle_return_value."""

import dataclasses
import enum
import json

from pydantic import BaseModel, Field
from starlette.responses import JSONResponse, PlainTextResponse, Response

from mvclient.web.response import handle_return_value


class Item(BaseModel):
    item_id: int = Field(alias="itemId")


@dataclasses.dataclass
class Point:
    x: int
    y: int


class Size(enum.Enum):
    SMALL = "s"


class TestHandleReturnValue:
    def test_none_is_no_content(self):
        assert handle_return_value(None).status_code == 204

    def test_none_keeps_explicit_status(self):
        assert handle_return_value(None, status_code=201).status_code == 201

    def test_response_passes_through(self):
        response = Response("x", status_code=418)
        assert handle_return_value(response) is response

    def test_str_is_plain_text(self):
        response = handle_return_value("hello")
        assert isinstance(response, PlainTextResponse)
        assert response.body == b"hello"

    def test_bytes_are_octet_stream(self):
        response = handle_return_value(b"\x00\x01")
        assert response.media_type == "application/octet-stream"
        assert response.body == b"\x00\x01"

    def test_model_is_json_by_alias(self):
        response = handle_return_value(Item(itemId=3), status_code=201)
        assert isinstance(response, JSONResponse)
        assert response.status_code == 201
        assert json.loads(response.body) == {"itemId": 3}

    def test_nested_values_are_json(self):
        response = handle_return_value({"points": [Point(1, 2)], "size": Size.SMALL})
        assert json.loads(response.body) == {"points": [{"x": 1, "y": 2}], "size": "s"}
