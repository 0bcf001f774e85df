"""MCP server exposing the Spider API tools over stdio."""

import logging
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .config import SpiderSettings
from .core import SpiderClient, SpiderError
from .tools import call_tool, tool_definitions

logger = logging.getLogger(__name__)

SERVER_NAME = "spider-cloud-mcp"


def build_server(client: SpiderClient) -> Server:
    """Create the MCP server; every tool call goes through ``client``."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return tool_definitions()

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        # Raised errors become tool-invocation failures in the protocol layer.
        try:
            text = await call_tool(client, name, arguments)
        except SpiderError as e:
            logger.warning("Tool %s failed: %s", name, e)
            raise
        return [types.TextContent(type="text", text=text)]

    return server


async def run_stdio(settings: SpiderSettings) -> None:
    """Serve until stdin closes, then release the HTTP client."""
    async with SpiderClient.from_settings(settings) as client:
        server = build_server(client)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Serving %d tools over stdio", len(tool_definitions()))
            await server.run(read_stream, write_stream, server.create_initialization_options())
