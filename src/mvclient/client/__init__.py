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
"""mvclient Client — typed controller proxies that dispatch real HTTP requests."""

from mvclient.client.builder import ControllerClientBuilder
from mvclient.client.caller import ControllerClientCaller
from mvclient.client.factory import ControllerClientFactory
from mvclient.client.injection import (
    ControllerClientAnnotationCustomizer,
    ControllerClientPostProcessor,
    set_controller_client,
    set_controller_client_caller,
)
from mvclient.client.matchers import ResultActions, content, header, json_path, status
from mvclient.client.ports.outbound import RequestExecutorPort, SerializerPort
from mvclient.client.proxy import ControllerClient
from mvclient.client.request import RequestDescriptor, RequestSynthesizer
from mvclient.client.responding import RespondingControllerClient
from mvclient.client.response import ControllerResponse, RawResponse, ResponseMapper
from mvclient.client.route import BindingKind, MethodRoute, ParameterBinding, RouteResolver

__all__ = [
    "BindingKind",
    "ControllerClient",
    "ControllerClientAnnotationCustomizer",
    "ControllerClientBuilder",
    "ControllerClientCaller",
    "ControllerClientFactory",
    "ControllerClientPostProcessor",
    "ControllerResponse",
    "MethodRoute",
    "ParameterBinding",
    "RawResponse",
    "RequestDescriptor",
    "RequestExecutorPort",
    "RequestSynthesizer",
    "RespondingControllerClient",
    "ResponseMapper",
    "ResultActions",
    "RouteResolver",
    "SerializerPort",
    "content",
    "header",
    "json_path",
    "set_controller_client",
    "set_controller_client_caller",
    "status",
]
