"""Endpoint management for Jina API operations.

This module provides the EndpointManager class which registers operations,
invokes them with one HTTP round trip each and exposes them as MCP tools.
"""

import asyncio
import inspect
import json
import logging
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional

import aiohttp
from google.adk.tools.function_tool import FunctionTool

from ..config import DEFAULT_CONFIG, PackConfig, resolve_api_key
from .errors import JinaToolError, MalformedResponseError, RemoteCallError
from .models import APIEndpoint, APIParameter, ParameterKind, PreparedRequest
from .request_builder import bind_arguments, build_request

_ANNOTATIONS = {
    ParameterKind.STRING: str,
    ParameterKind.STRING_ARRAY: List[str],
    ParameterKind.NUMBER: float,
    ParameterKind.BOOLEAN: bool,
}


class EndpointManager:
    """Manages Jina API operations and their conversion to MCP tools

    Args:
        config: Read-only network and authentication settings
        credential_provider: Returns the API key used by tool calls
        session_factory: Builds the aiohttp session for one invocation
    """

    def __init__(
        self,
        config: PackConfig = DEFAULT_CONFIG,
        credential_provider: Callable[[], Optional[str]] = resolve_api_key,
        session_factory: Callable[..., Any] = aiohttp.ClientSession,
    ):
        self.config = config
        self.credential_provider = credential_provider
        self.session_factory = session_factory
        self.endpoints: Dict[str, APIEndpoint] = {}
        self.tools: Dict[str, FunctionTool] = {}
        logging.info("[EndpointManager] Initialized endpoint manager")

    def add_endpoint(self, endpoint: APIEndpoint) -> None:
        """Add a new operation and create a corresponding MCP tool

        Args:
            endpoint: APIEndpoint configuration to add

        Raises:
            ValueError: If the name already exists or the URL is not allowed
        """
        if endpoint.name in self.endpoints:
            raise ValueError(f"Endpoint '{endpoint.name}' already exists")
        if not self.config.is_allowed_url(endpoint.url):
            raise ValueError(
                f"Endpoint '{endpoint.name}' targets {endpoint.url}, outside {self.config.network_domains}"
            )
        self.endpoints[endpoint.name] = endpoint

        def create_endpoint_function(endpoint_name: str, params: List[APIParameter]):
            sig_params = []
            annotations = {}

            for param in params:
                param_type = _ANNOTATIONS[param.type]
                if param.required:
                    sig_params.append(
                        inspect.Parameter(
                            param.name,
                            inspect.Parameter.POSITIONAL_OR_KEYWORD,
                            annotation=param_type
                        )
                    )
                else:
                    param_type = Optional[param_type]
                    sig_params.append(
                        inspect.Parameter(
                            param.name,
                            inspect.Parameter.POSITIONAL_OR_KEYWORD,
                            default=None,
                            annotation=param_type
                        )
                    )
                annotations[param.name] = param_type

            sig = inspect.Signature(sig_params, return_annotation=dict)

            async def endpoint_function(*args, **kwargs):
                bound = sig.bind_partial(*args, **kwargs)
                return await self.call_tool_endpoint(endpoint_name, dict(bound.arguments))

            endpoint_function.__name__ = endpoint_name
            endpoint_function.__doc__ = _tool_description(endpoint)
            endpoint_function.__signature__ = sig
            endpoint_function.__annotations__ = {**annotations, 'return': dict}

            return endpoint_function

        endpoint_function = create_endpoint_function(endpoint.name, endpoint.parameters)

        tool = FunctionTool(endpoint_function)
        self.tools[endpoint.name] = tool

        logging.info(f"[EndpointManager] Added endpoint '{endpoint.name}' as MCP tool ({endpoint.method.value} {endpoint.url})")

    def bind(self, endpoint_name: str, arguments: Dict[str, Any]) -> Any:
        """Bind arguments to the typed input record of an endpoint

        Raises:
            KeyError: If the endpoint is not registered
            InvalidInputError: If the arguments do not fit the endpoint
        """
        return bind_arguments(self.endpoints[endpoint_name], arguments)

    async def call_endpoint(self, endpoint_name: str, arguments: Dict[str, Any], credential: str) -> Any:
        """Invoke an operation and return its projected output

        Args:
            endpoint_name: Name of the endpoint to call
            arguments: Arguments for the endpoint's parameters
            credential: Bearer token for this call only

        Returns:
            The projected output (an object or a list of objects)

        Raises:
            KeyError: If the endpoint is not registered
            InvalidInputError: Before any network call, for bad arguments
            RemoteCallError: On non-2xx status or transport failure
            MalformedResponseError: When the response cannot be projected
        """
        endpoint = self.endpoints[endpoint_name]
        record = bind_arguments(endpoint, arguments)
        request = build_request(endpoint, record, credential, self.config)
        logging.info(f"[EndpointManager] Calling {endpoint.method.value} {request.url} with args: {arguments}")

        data = await self._send(endpoint_name, request)
        return endpoint.project(endpoint_name, data)

    async def _send(self, endpoint_name: str, request: PreparedRequest) -> Any:
        """Perform the HTTP round trip and decode the JSON body"""
        timeout = aiohttp.ClientTimeout(total=None)
        try:
            async with self.session_factory(timeout=timeout) as session:
                async with session.request(
                    request.method.value,
                    request.url,
                    json=request.body,
                    params=request.params,
                    headers=request.headers,
                ) as response:
                    return await self._process_response(response, endpoint_name)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logging.error(f"[EndpointManager] Request for '{endpoint_name}' failed: {e!r}")
            raise RemoteCallError(endpoint_name, None, repr(e)) from e

    async def _process_response(self, response: aiohttp.ClientResponse, endpoint_name: str) -> Any:
        """Check the status and decode the HTTP response

        Args:
            response: HTTP response object
            endpoint_name: Name of the endpoint that was called

        Returns:
            The decoded JSON document
        """
        raw = await response.read()
        if not 200 <= response.status < 300:
            logging.warning(f"[EndpointManager] API call failed: {endpoint_name} returned {response.status}")
            raise RemoteCallError(endpoint_name, response.status, raw.decode("utf-8", errors="replace"))

        logging.info(f"[EndpointManager] API call successful: {endpoint_name} returned {response.status}")
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as e:
            # UnicodeDecodeError is a ValueError too
            raise MalformedResponseError(endpoint_name, "body", "invalid JSON") from e

    async def call_tool_endpoint(self, endpoint_name: str, arguments: Dict[str, Any]) -> dict:
        """Invoke an operation on behalf of an MCP tool call

        Returns:
            Dict containing success status, data or error kind, and message
        """
        if endpoint_name not in self.endpoints:
            logging.error(f"[EndpointManager] Endpoint '{endpoint_name}' not found")
            return {"success": False, "message": f"Endpoint '{endpoint_name}' not found"}

        credential = self.credential_provider()
        if not credential:
            return {
                "success": False,
                "error": "invalid_input",
                "message": "No Jina API key configured (set JINA_API_KEY)",
            }

        try:
            data = await self.call_endpoint(endpoint_name, arguments, credential)
        except JinaToolError as e:
            logging.warning(f"[EndpointManager] {e.kind}: {e}")
            return {"success": False, "error": e.kind, "message": str(e)}

        return {
            "success": True,
            "data": data,
            "message": f"Successfully called {endpoint_name}"
        }

    def remove_endpoint(self, endpoint_name: str) -> bool:
        """Remove an endpoint and its corresponding tool

        Args:
            endpoint_name: Name of the endpoint to remove

        Returns:
            True if endpoint was removed, False if it didn't exist
        """
        removed = False
        if endpoint_name in self.endpoints:
            del self.endpoints[endpoint_name]
            removed = True
        if endpoint_name in self.tools:
            del self.tools[endpoint_name]
            removed = True

        if removed:
            logging.info(f"[EndpointManager] Removed endpoint '{endpoint_name}'")
        else:
            logging.warning(f"[EndpointManager] Endpoint '{endpoint_name}' not found for removal")

        return removed

    def get_tools(self) -> Dict[str, FunctionTool]:
        """Get all registered tools

        Returns:
            Dictionary of tool name to FunctionTool mappings
        """
        return self.tools

    def list_endpoints(self) -> List[dict]:
        """List all configured endpoints

        Returns:
            List of endpoint descriptions as JSON-ready dictionaries
        """
        result = []
        for endpoint in self.endpoints.values():
            parameters = []
            for param in endpoint.parameters:
                param_dict = asdict(param)
                param_dict["type"] = param.type.value
                param_dict["suggestions"] = list(param.suggestions)
                parameters.append(param_dict)
            result.append({
                "name": endpoint.name,
                "url": endpoint.url,
                "method": endpoint.method.value,
                "description": endpoint.description,
                "parameters": parameters,
                "output": endpoint.output_type.__name__,
                "returns_list": endpoint.returns_list,
            })
        return result


def _tool_description(endpoint: APIEndpoint) -> str:
    lines = [endpoint.description]
    for param in endpoint.parameters:
        if param.default is not None:
            lines.append(f"{param.name}: suggested value {param.default!r}.")
        if param.suggestions:
            lines.append(f"{param.name}: one of {', '.join(param.suggestions)}.")
    return "\n".join(lines)


__all__ = [
    "EndpointManager",
]
