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
"""Controller client configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from mvclient.core.config import config_properties


@config_properties(prefix="mvclient.client")
@dataclass
class ClientProperties:
    """Configuration for controller clients (mvclient.client.*)."""

    base_url: str = "http://testserver"
    raise_server_exceptions: bool = False
    follow_redirects: bool = True
    expect_success: bool = False


@config_properties(prefix="mvclient.logging")
@dataclass
class LoggingProperties:
    """Logging for controller clients (mvclient.logging.*).

    Per-logger levels live under ``mvclient.logging.level`` (``root`` plus
    logger names) and are read as a section.
    """

    format: str = "console"
    log_calls: bool = False
