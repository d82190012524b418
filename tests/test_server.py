import unittest

from mcp import types as mcp_types
from starlette.testclient import TestClient

from fake_http import FakeResponse, FakeSession
from jina_tools_mcp.config import ServerSettings
from jina_tools_mcp.dynamic import JinaMCPServer
from jina_tools_mcp.dynamic.core import format_tool_result
from jina_tools_mcp.operations import build_endpoint_manager
from jina_tools_mcp.server_streamablehttp import build_app


class TestFormatToolResult(unittest.TestCase):

    def test_success_with_data(self):
        text = format_tool_result({"success": True, "data": [{"embedding": [1.0]}], "message": "ok"})
        self.assertTrue(text.startswith("ok\n\nResponse Data:\n"))
        self.assertIn('"embedding"', text)

    def test_failure(self):
        text = format_tool_result({"success": False, "error": "invalid_input", "message": "SearchWeb: missing"})
        self.assertEqual(text, "SearchWeb: missing")

    def test_framework_error(self):
        self.assertEqual(format_tool_result({"error": "Invoking `SearchWeb()` failed"}), "Invoking `SearchWeb()` failed")


class TestHttpApp(unittest.TestCase):

    def setUp(self):
        self.manager = build_endpoint_manager(credential_provider=lambda: "t", session_factory=FakeSession())
        self.client = TestClient(build_app(self.manager, ServerSettings()))

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["tools_count"], 11)

    def test_list_endpoints(self):
        response = self.client.get("/api/endpoints")
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["count"], 11)

    def test_server_keeps_manager(self):
        server = JinaMCPServer("test", self.manager)
        self.assertIs(server.get_endpoint_manager(), self.manager)
        self.assertEqual(server.get_server().name, "test")


class TestMCPHandlers(unittest.IsolatedAsyncioTestCase):

    def make_server(self, response=None):
        self.session = FakeSession(response)
        manager = build_endpoint_manager(credential_provider=lambda: "secret-token", session_factory=self.session)
        return JinaMCPServer("test", manager).get_server()

    async def call_tool(self, server, name, arguments):
        handler = server.request_handlers[mcp_types.CallToolRequest]
        request = mcp_types.CallToolRequest(
            method="tools/call",
            params=mcp_types.CallToolRequestParams(name=name, arguments=arguments),
        )
        result = await handler(request)
        return result.root

    async def test_list_tools(self):
        server = self.make_server()
        handler = server.request_handlers[mcp_types.ListToolsRequest]
        result = await handler(mcp_types.ListToolsRequest(method="tools/list"))
        tools = {tool.name: tool for tool in result.root.tools}
        self.assertEqual(len(tools), 11)
        embeddings_input = tools["GetEmbeddings"].inputSchema["properties"]["input"]
        self.assertEqual(embeddings_input["type"], "array")
        self.assertEqual(embeddings_input["items"]["type"], "string")
        self.assertIn("noCache", tools["ReadContentWithOptions"].inputSchema["properties"])

    async def test_call_tool_sends_reader_headers(self):
        payload = {"data": {"title": "Example", "url": "https://example.com", "content": "Hello"}}
        server = self.make_server(FakeResponse(payload=payload))
        result = await self.call_tool(server, "ReadContentWithOptions", {
            "url": "https://example.com", "timeout": 10, "noCache": True,
        })
        self.assertEqual(len(self.session.calls), 1)
        headers = self.session.calls[0]["headers"]
        self.assertEqual(headers["X-Timeout"], "10")
        self.assertEqual(headers["X-No-Cache"], "true")
        self.assertNotIn("X-Engine", headers)
        self.assertIn("Successfully called ReadContentWithOptions", result.content[0].text)
        self.assertIn("Hello", result.content[0].text)

    async def test_call_tool_missing_argument_makes_no_request(self):
        server = self.make_server()
        result = await self.call_tool(server, "RerankDocuments", {"query": "capital of France"})
        self.assertEqual(self.session.calls, [])
        self.assertTrue(result.content[0].text)
        self.assertNotIn("Successfully called", result.content[0].text)

    async def test_call_unknown_tool(self):
        server = self.make_server()
        result = await self.call_tool(server, "Nope", {})
        self.assertIn("Nope", result.content[0].text)
        self.assertEqual(self.session.calls, [])


if __name__ == '__main__':
    unittest.main()
