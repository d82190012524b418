"""Core MCP server implementation for Jina API operations.

This module provides the JinaMCPServer class which serves as the main
MCP server that handles tool listing and execution using an EndpointManager.
"""

import json
import logging

from google.adk.tools.mcp_tool.conversion_utils import adk_to_mcp_tool_type
from mcp import types as mcp_types
from mcp.server.lowlevel import Server

from .endpoint_manager import EndpointManager


def format_tool_result(result) -> str:
    """Render a tool result dictionary as the text returned to MCP clients"""
    if not isinstance(result, dict):
        return str(result)
    if not result.get("success"):
        return result.get("message") or result.get("error") or "Unknown error occurred"
    if "data" in result:
        return f"{result.get('message', 'Success')}\n\nResponse Data:\n{json.dumps(result['data'], indent=2)}"
    return result.get("message", "Success - no data returned")


class JinaMCPServer:
    """MCP Server that serves tools from an EndpointManager

    This server focuses solely on MCP protocol handling (list_tools, call_tool)
    and delegates all endpoint management to an EndpointManager instance.

    Args:
        server_name: Name for the MCP server instance
        endpoint_manager: EndpointManager instance to get tools from
    """

    def __init__(self, server_name: str = "jina-tools-mcp", endpoint_manager: EndpointManager = None):
        self.server_name = server_name
        self.server = Server(server_name)
        self.endpoint_manager = endpoint_manager or EndpointManager()
        self._setup_server()
        logging.info(f"[JinaMCP] Initialized MCP server '{server_name}'")

    def _setup_server(self) -> None:
        """Setup the MCP server with list_tools and call_tool handlers"""

        @self.server.list_tools()
        async def list_tools():
            tool_list = []
            for tool in self.endpoint_manager.tools.values():
                try:
                    tool_list.append(adk_to_mcp_tool_type(tool))
                except Exception as e:
                    logging.error(f"[JinaMCP] Error converting tool {tool.name} to MCP type: {e}")
            logging.info(f"[JinaMCP] Returning {len(tool_list)} tools to MCP client")
            return tool_list

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict):
            logging.info(f"[JinaMCP] Tool call: {name} with args: {json.dumps(arguments)}")
            try:
                if name not in self.endpoint_manager.tools:
                    logging.warning(f"[JinaMCP] Tool '{name}' not found")
                    return [mcp_types.TextContent(type="text", text=f"Tool '{name}' not found")]

                tool = self.endpoint_manager.tools[name]
                result = await tool.run_async(args=arguments or {}, tool_context=None)
                logging.info(f"[JinaMCP] Tool '{name}' success: {isinstance(result, dict) and result.get('success')}")
                return [mcp_types.TextContent(type="text", text=format_tool_result(result))]

            except Exception as e:
                logging.exception(f"[JinaMCP] Error executing tool '{name}': {e}")
                return [mcp_types.TextContent(type="text", text=f"Error executing tool: {str(e)}")]

    def get_server(self) -> Server:
        """Get the configured MCP server instance

        Returns:
            The underlying MCP Server instance
        """
        return self.server

    def get_endpoint_manager(self) -> EndpointManager:
        return self.endpoint_manager


__all__ = [
    "JinaMCPServer",
    "format_tool_result",
]
