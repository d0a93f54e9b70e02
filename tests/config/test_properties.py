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
"""Tests for ClientProperties and LoggingProperties binding."""

import pytest

from mvclient.config.properties import ClientProperties, LoggingProperties
from mvclient.core.config import Config


class TestClientProperties:
    def test_defaults(self):
        props = Config({}).bind(ClientProperties)
        assert props.base_url == "http://testserver"
        assert props.raise_server_exceptions is False
        assert props.follow_redirects is True
        assert props.expect_success is False

    def test_kebab_case_keys(self):
        config = Config(
            {
                "mvclient": {
                    "client": {
                        "base-url": "http://api.test",
                        "raise-server-exceptions": True,
                        "follow-redirects": False,
                    }
                }
            }
        )
        props = config.bind(ClientProperties)
        assert props.base_url == "http://api.test"
        assert props.raise_server_exceptions is True
        assert props.follow_redirects is False

    def test_snake_case_keys(self):
        props = Config({"mvclient": {"client": {"expect_success": True}}}).bind(ClientProperties)
        assert props.expect_success is True

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MVCLIENT_CLIENT_EXPECT_SUCCESS", "yes")
        assert Config({}).bind(ClientProperties).expect_success is True


class TestLoggingProperties:
    def test_defaults(self):
        props = Config({}).bind(LoggingProperties)
        assert props.format == "console"
        assert props.log_calls is False

    def test_binds_logging_section(self):
        config = Config({"mvclient": {"logging": {"format": "json", "log-calls": True, "level": {"root": "INFO"}}}})
        props = config.bind(LoggingProperties)
        assert props.format == "json"
        assert props.log_calls is True

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MVCLIENT_LOGGING_LOG_CALLS", "true")
        assert Config({}).bind(LoggingProperties).log_calls is True
