import contextlib
import logging
import sys
from collections.abc import AsyncIterator

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.types import Receive, Scope, Send

from jina_tools_mcp.config import ServerSettings
from jina_tools_mcp.dynamic import EndpointManager, JinaMCPServer
from jina_tools_mcp.operations import build_endpoint_manager

logging.basicConfig(stream=sys.stderr, level=logging.INFO, format='[%(levelname)s] %(message)s')


def build_app(endpoint_manager: EndpointManager, settings: ServerSettings) -> Starlette:
    """Build the Starlette app serving the MCP protocol and the catalogue routes"""
    mcp_server = JinaMCPServer("jina-tools-mcp", endpoint_manager).get_server()

    session_manager = StreamableHTTPSessionManager(
        app=mcp_server,
        event_store=None,
        json_response=True,
        stateless=True,
    )

    async def handle_streamable_http(scope: Scope, receive: Receive, send: Send) -> None:
        await session_manager.handle_request(scope, receive, send)

    async def list_endpoints_handler(request: Request) -> JSONResponse:
        endpoints = endpoint_manager.list_endpoints()
        return JSONResponse({
            "success": True,
            "endpoints": endpoints,
            "count": len(endpoints)
        })

    async def health_handler(request: Request) -> JSONResponse:
        return JSONResponse({
            "status": "healthy",
            "server": "jina-tools-mcp",
            "endpoints_count": len(endpoint_manager.endpoints),
            "tools_count": len(endpoint_manager.tools)
        })

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        """Context manager for session manager lifecycle."""
        async with session_manager.run():
            host, port = settings.host, settings.port
            logging.info(f"[JinaHTTP] Jina Tools MCP Streamable HTTP Server started on {host}:{port}")
            logging.info("[JinaHTTP] Available endpoints:")
            logging.info(f"[JinaHTTP]   - POST http://{host}:{port}/ (MCP protocol)")
            logging.info(f"[JinaHTTP]   - GET http://{host}:{port}/api/endpoints (List operations)")
            logging.info(f"[JinaHTTP]   - GET http://{host}:{port}/health (Health check)")
            logging.info(f"[JinaHTTP]   - Tools: {list(endpoint_manager.tools.keys())}")
            try:
                yield
            finally:
                logging.info("[JinaHTTP] Jina Tools MCP Server shutting down...")

    return Starlette(
        routes=[
            Route("/api/endpoints", list_endpoints_handler, methods=["GET"]),
            Route("/health", health_handler, methods=["GET"]),
            Mount("/", app=handle_streamable_http),
        ],
        lifespan=lifespan,
    )


def main() -> None:
    """Main function to start the Jina tools MCP HTTP server"""
    settings = ServerSettings.from_env()
    app = build_app(build_endpoint_manager(), settings)

    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

__all__ = [
    "build_app",
    "main",
]
