"""MCP tools for the Jina AI APIs."""

from .config import DEFAULT_CONFIG, PackConfig
from .dynamic import EndpointManager, JinaMCPServer
from .operations import OPERATIONS, build_endpoint_manager

__all__ = [
    "PackConfig",
    "DEFAULT_CONFIG",
    "EndpointManager",
    "JinaMCPServer",
    "OPERATIONS",
    "build_endpoint_manager",
]
