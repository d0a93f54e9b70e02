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
"""mvclient Web — controller routing metadata, binding markers and an in-process host."""

from mvclient.web.exception_handler import exception_handler
from mvclient.web.mappings import (
    delete_mapping,
    get_mapping,
    patch_mapping,
    post_mapping,
    put_mapping,
    request_mapping,
)
from mvclient.web.params import (
    Alias,
    Body,
    Cookie,
    File,
    Header,
    MultipartFile,
    PathVar,
    QueryParam,
    UploadedFile,
)

__all__ = [
    "Alias",
    "Body",
    "Cookie",
    "File",
    "Header",
    "MultipartFile",
    "PathVar",
    "QueryParam",
    "UploadedFile",
    "delete_mapping",
    "exception_handler",
    "get_mapping",
    "patch_mapping",
    "post_mapping",
    "put_mapping",
    "request_mapping",
]
