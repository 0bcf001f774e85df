"""Tests for MCP server wiring."""

import json

import mcp.types as types

from spider_mcp import __version__
from spider_mcp.core import SpiderClient, TransportError, UpstreamStatusError
from spider_mcp.server import SERVER_NAME, build_server


class StubClient:
    """Answers every request with a canned result or error."""

    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[tuple] = []

    async def request(self, method, path, body=None, stream=False):
        self.calls.append((method, path, body, stream))
        if self.error is not None:
            raise self.error
        return self.result


async def call(server, name: str, arguments: dict) -> types.CallToolResult:
    handler = server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    result = await handler(request)
    return result.root


class TestBuildServer:
    def test_registers_tool_handlers(self):
        """The server should answer tools/list and tools/call."""
        server = build_server(SpiderClient(api_key="k"))

        assert types.ListToolsRequest in server.request_handlers
        assert types.CallToolRequest in server.request_handlers

    def test_server_identity(self):
        server = build_server(SpiderClient(api_key="k"))

        assert server.name == SERVER_NAME
        assert server.version == __version__


class TestListTools:
    async def test_lists_every_tool(self):
        server = build_server(StubClient())
        handler = server.request_handlers[types.ListToolsRequest]

        result = (await handler(types.ListToolsRequest(method="tools/list"))).root

        names = [tool.name for tool in result.tools]
        assert len(names) == 13
        assert names[0] == "spider_crawl"


class TestCallTool:
    async def test_success_returns_text_content(self):
        records = [{"url": "https://example.com", "content": "Example Domain"}]
        client = StubClient(result=records)
        server = build_server(client)

        result = await call(server, "spider_scrape", {"url": "https://example.com", "viewport": {"width": 800}})

        assert result.isError is False
        assert len(result.content) == 1
        assert result.content[0].type == "text"
        assert json.loads(result.content[0].text) == records
        assert client.calls == [
            ("POST", "/scrape", {"url": "https://example.com", "viewport": {"width": 800}}, True),
        ]

    async def test_upstream_status_is_tool_error(self):
        """An API error status becomes a failed tool result carrying the message."""
        server = build_server(StubClient(error=UpstreamStatusError(402, "Insufficient credits")))

        result = await call(server, "spider_crawl", {"url": "https://example.com"})

        assert result.isError is True
        assert "402" in result.content[0].text
        assert "Insufficient credits" in result.content[0].text

    async def test_transport_failure_is_tool_error(self):
        server = build_server(StubClient(error=TransportError("connection reset")))

        result = await call(server, "spider_links", {"url": "https://example.com"})

        assert result.isError is True
        assert "connection reset" in result.content[0].text

    async def test_unknown_option_is_rejected(self):
        """Arguments outside a tool's schema fail without calling the API."""
        client = StubClient(result=[])
        server = build_server(client)

        result = await call(server, "spider_scrape", {"url": "https://example.com", "bogus": 1})

        assert result.isError is True
        assert client.calls == []

    async def test_missing_required_argument_is_rejected(self):
        client = StubClient(result=[])
        server = build_server(client)

        result = await call(server, "spider_ai_browser", {"url": "https://example.com"})

        assert result.isError is True
        assert client.calls == []
