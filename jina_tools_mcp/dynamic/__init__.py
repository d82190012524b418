"""Declarative MCP server package.

This package provides an MCP server that registers Jina API operations and
exposes each one as an MCP tool.
"""

from .core import JinaMCPServer
from .endpoint_manager import EndpointManager
from .errors import InvalidInputError, JinaToolError, MalformedResponseError, RemoteCallError
from .models import APIEndpoint, APIParameter, HTTPMethod, ParameterKind, PreparedRequest, parameter
from .request_builder import bind_arguments, build_request

__all__ = [
    "JinaMCPServer",
    "EndpointManager",
    "APIEndpoint",
    "APIParameter",
    "HTTPMethod",
    "ParameterKind",
    "PreparedRequest",
    "parameter",
    "bind_arguments",
    "build_request",
    "JinaToolError",
    "InvalidInputError",
    "RemoteCallError",
    "MalformedResponseError",
]
