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
"""StructlogAdapter — structlog setup for controller client logging.

Clients log through the ``mvclient.client`` logger:

- ``route_resolved`` when a controller method is first mapped to a route
- ``controller_call`` after every dispatched call (verb, url, status, duration)
- ``controller_call_failed`` when a response customizer rejects a response
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from mvclient.config.properties import LoggingProperties
from mvclient.core.config import Config
from mvclient.kernel.exceptions import ConfigurationError

CLIENT_LOGGER = "mvclient.client"

RENDERERS = ("console", "json")

# Same labels as the status range matchers.
_STATUS_SERIES = {
    1: "INFORMATIONAL",
    2: "SUCCESSFUL",
    3: "REDIRECTION",
    4: "CLIENT_ERROR",
    5: "SERVER_ERROR",
}


def add_status_series(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Label an event's ``status_code`` with its series, e.g. ``404`` -> ``CLIENT_ERROR``."""
    status_code = event_dict.get("status_code")
    if isinstance(status_code, int):
        series = _STATUS_SERIES.get(status_code // 100)
        if series is not None:
            event_dict["status_series"] = series
    return event_dict


def _level_number(level: str) -> int:
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


class StructlogAdapter:
    """LoggingPort backed by structlog.

    Configuration::

        mvclient:
          logging:
            format: json        # console | json
            log-calls: true     # controller_call events (DEBUG on mvclient.client)
            level:
              root: WARNING
              httpx: WARNING
    """

    def __init__(self) -> None:
        self.properties = LoggingProperties()
        self.root_level = "INFO"
        self.logger_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        properties = config.bind(LoggingProperties)
        renderer = properties.format.lower()
        if renderer not in RENDERERS:
            raise ConfigurationError(
                f"Unknown log format '{properties.format}', expected one of {', '.join(RENDERERS)}",
                code="LOGGING_FORMAT",
                context={"format": properties.format},
            )

        levels = {name: str(level).upper() for name, level in config.get_section("mvclient.logging.level").items()}
        self.root_level = levels.pop("root", "INFO")
        if properties.log_calls:
            levels.setdefault(CLIENT_LOGGER, "DEBUG")
        self.properties = properties
        self.logger_levels = levels

        structlog.configure(
            processors=self._processors(renderer),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=_level_number(self.root_level),
            force=True,
        )
        for name, level in levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str = CLIENT_LOGGER) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level_number(level))

    @staticmethod
    def _processors(renderer: str) -> list[structlog.types.Processor]:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_status_series,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]
        if renderer == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())
        return processors
