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
"""Tests for ControllerClientCaller, RespondingControllerClient and ControllerClientFactory."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from mvclient.client.builder import ControllerClientBuilder
from mvclient.client.caller import ControllerClientCaller
from mvclient.client.factory import ControllerClientFactory
from mvclient.client.matchers import json_path
from mvclient.client.responding import RespondingControllerClient
from mvclient.config.properties import ClientProperties
from mvclient.core.config import Config
from mvclient.kernel.exceptions import AssertionFailure, ConfigurationError
from mvclient.web.app import create_app
from mvclient.web.mappings import get_mapping, post_mapping, request_mapping
from mvclient.web.params import Body


class Greeting(BaseModel):
    message: str


@request_mapping("/greetings")
class GreetingController:
    @get_mapping("")
    def greet(self) -> Greeting:
        return Greeting(message="Hello world!")

    @post_mapping("", status_code=201)
    def record(self, greeting: Body[Greeting]) -> None:
        return None

    @get_mapping("/fail")
    def fail(self) -> Greeting:
        raise RuntimeError("boom")


@pytest.fixture
def factory() -> ControllerClientFactory:
    return ControllerClientFactory.for_app(create_app(GreetingController()))


class TestControllerClientCaller:
    def test_when_returns_result(self, factory: ControllerClientFactory) -> None:
        result = factory.caller(GreetingController).when(lambda c: c.greet()).then_status(200).execute()
        assert result == Greeting(message="Hello world!")

    def test_when_consume_returns_none(self, factory: ControllerClientFactory) -> None:
        result = (
            factory.caller(GreetingController)
            .when_consume(lambda c: c.record(Greeting(message="hi")))
            .then_status(201)
            .execute()
        )
        assert result is None

    def test_then_runs_response_customizer(self, factory: ControllerClientFactory) -> None:
        caller = (
            factory.caller(GreetingController)
            .when(lambda c: c.greet())
            .then(lambda result: result.and_expect(json_path("$.message").value("Goodbye")))
        )
        with pytest.raises(AssertionFailure):
            caller.execute()

    def test_status_mismatch_raises(self, factory: ControllerClientFactory) -> None:
        caller = factory.caller(GreetingController).when(lambda c: c.fail()).then_status(200)
        with pytest.raises(AssertionFailure, match="but was:<500>"):
            caller.execute()

    def test_when_and_when_consume_are_exclusive(self, factory: ControllerClientFactory) -> None:
        caller = factory.caller(GreetingController).when(lambda c: c.greet())
        with pytest.raises(ConfigurationError) as exc_info:
            caller.when_consume(lambda c: c.greet())
        assert exc_info.value.code == "CALLER_MULTIPLE_ACTIONS"

    def test_execute_without_action_raises(self, factory: ControllerClientFactory) -> None:
        with pytest.raises(ConfigurationError, match="No controller call defined"):
            factory.caller(GreetingController).execute()

    def test_caller_is_single_use(self, factory: ControllerClientFactory) -> None:
        caller = factory.caller(GreetingController).when(lambda c: c.greet())
        caller.execute()
        with pytest.raises(ConfigurationError) as exc_info:
            caller.execute()
        assert exc_info.value.code == "CALLER_REUSED"

    def test_caller_from_configured_builder(self, factory: ControllerClientFactory) -> None:
        builder = factory.builder(GreetingController).expect_status(200)
        caller = factory.caller(builder).when(lambda c: c.fail())
        assert isinstance(caller, ControllerClientCaller)
        with pytest.raises(AssertionFailure):
            caller.execute()


class TestRespondingControllerClient:
    def test_execute_function_wraps_payload(self, factory: ControllerClientFactory) -> None:
        responding = factory.responding_client(GreetingController)
        response = responding.execute_function(lambda c: c.greet())

        assert response.status_code == 200
        assert response.response == Greeting(message="Hello world!")
        assert response.content_type == "application/json"
        assert response.error_message is None
        response.assert_json_path("$.message", value="Hello world!")

    def test_execute_consumer_has_no_payload(self, factory: ControllerClientFactory) -> None:
        responding = factory.responding_client(GreetingController)
        response = responding.execute_consumer(lambda c: c.record(Greeting(message="hi")))

        assert response.status_code == 201
        assert response.response is None

    def test_server_error_is_captured(self, factory: ControllerClientFactory) -> None:
        responding = factory.responding_client(GreetingController)
        response = responding.execute_function(lambda c: c.fail())

        assert response.status_code == 500
        assert response.response is None
        assert response.error_message == "Internal Server Error"

    def test_action_without_call_raises(self, factory: ControllerClientFactory) -> None:
        responding = factory.responding_client(GreetingController)
        with pytest.raises(ConfigurationError) as exc_info:
            responding.execute_function(lambda c: None)
        assert exc_info.value.code == "NO_CONTROLLER_CALL"

    def test_is_generic_over_controller(self, factory: ControllerClientFactory) -> None:
        assert isinstance(factory.responding_client(GreetingController), RespondingControllerClient)


class TestControllerClientFactory:
    def test_builder_without_executor_raises(self) -> None:
        factory = ControllerClientFactory(executor=None)
        with pytest.raises(ConfigurationError) as exc_info:
            factory.builder(GreetingController)
        assert exc_info.value.code == "NO_EXECUTOR"

    def test_builder_targets_class(self, factory: ControllerClientFactory) -> None:
        builder = factory.builder(GreetingController)
        assert isinstance(builder, ControllerClientBuilder)
        assert builder.target is GreetingController

    def test_plain_builder_does_not_expect_success(self, factory: ControllerClientFactory) -> None:
        assert factory.builder(GreetingController).build().fail() is None

    def test_expect_success_property(self) -> None:
        factory = ControllerClientFactory.for_app(
            create_app(GreetingController()), properties=ClientProperties(expect_success=True)
        )
        with pytest.raises(AssertionFailure):
            factory.builder(GreetingController).build().fail()

    def test_from_config(self) -> None:
        config = Config({"mvclient": {"client": {"base-url": "http://controllers.test", "expect-success": True}}})
        factory = ControllerClientFactory.from_config(config, create_app(GreetingController()))

        assert factory.properties.base_url == "http://controllers.test"
        assert factory.properties.expect_success is True
        assert factory.create(GreetingController).greet() == Greeting(message="Hello world!")
