"""Spider API tools: names, descriptions, endpoints and parameter models."""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any

import mcp.types as types

from .core import SpiderClient
from .output import format_result
from .params import (
    AIBrowserParams,
    AICrawlParams,
    AILinksParams,
    AIScrapeParams,
    AISearchParams,
    CrawlParams,
    CreditsParams,
    LinksParams,
    ScrapeParams,
    ScreenshotParams,
    SearchParams,
    ToolParams,
    TransformParams,
    to_request_body,
)

logger = logging.getLogger(__name__)

AI_SUBSCRIPTION_NOTE = "REQUIRES an active AI subscription plan (https://spider.cloud/ai/pricing)."


@dataclass(frozen=True)
class SpiderTool:
    """One API endpoint exposed as a tool."""

    name: str
    description: str
    params: type[ToolParams]
    path: str
    method: str = "POST"
    stream: bool = True

    def definition(self) -> types.Tool:
        """MCP tool definition; the input schema comes from the params model."""
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.params.model_json_schema(),
        )


TOOLS: tuple[SpiderTool, ...] = (
    SpiderTool(
        name="spider_crawl",
        description=(
            "Crawl a website and extract content from multiple pages. Returns page content in the "
            "specified format (markdown, HTML, text, etc.). Powered by Spider - the fastest web "
            "crawler at 100K+ pages/sec."
        ),
        params=CrawlParams,
        path="/crawl",
    ),
    SpiderTool(
        name="spider_scrape",
        description=(
            "Scrape a single page and extract its content. No crawling, just fetches and processes "
            "one URL. Supports all output formats and screenshot capture."
        ),
        params=ScrapeParams,
        path="/scrape",
    ),
    SpiderTool(
        name="spider_search",
        description=(
            "Search the web and optionally crawl results. Returns search results with optional "
            "full page content."
        ),
        params=SearchParams,
        path="/search",
    ),
    SpiderTool(
        name="spider_links",
        description=(
            "Extract all links from a page without fetching content. Fast way to discover URLs on a site."
        ),
        params=LinksParams,
        path="/links",
    ),
    SpiderTool(
        name="spider_screenshot",
        description="Capture screenshots of web pages. Returns base64-encoded images or binary data.",
        params=ScreenshotParams,
        path="/screenshot",
    ),
    SpiderTool(
        name="spider_unblocker",
        description=(
            "Access blocked or protected content with advanced anti-bot bypass. Uses enhanced "
            "fingerprinting and proxy rotation. Adds 10-40 extra credits per successful unblock."
        ),
        params=ScrapeParams,
        path="/unblocker",
    ),
    SpiderTool(
        name="spider_transform",
        description=(
            "Transform HTML content to markdown, text, or other formats. No network requests, "
            "processes HTML you provide directly."
        ),
        params=TransformParams,
        path="/transform",
    ),
    SpiderTool(
        name="spider_get_credits",
        description="Check your available Spider API credit balance.",
        params=CreditsParams,
        path="/data/credits",
        method="GET",
        stream=False,
    ),
    SpiderTool(
        name="spider_ai_crawl",
        description=(
            "AI-guided crawling using natural language prompts. Describe what content to find and "
            f"Spider's AI will guide the crawl. {AI_SUBSCRIPTION_NOTE}"
        ),
        params=AICrawlParams,
        path="/ai/crawl",
    ),
    SpiderTool(
        name="spider_ai_scrape",
        description=(
            "AI-powered structured data extraction using plain English. Describe what data you want "
            f"and get structured JSON back, no CSS selectors needed. {AI_SUBSCRIPTION_NOTE}"
        ),
        params=AIScrapeParams,
        path="/ai/scrape",
    ),
    SpiderTool(
        name="spider_ai_search",
        description=(
            "AI-enhanced semantic web search. Uses intent understanding and relevance ranking to "
            f"find the most relevant results. {AI_SUBSCRIPTION_NOTE}"
        ),
        params=AISearchParams,
        path="/ai/search",
    ),
    SpiderTool(
        name="spider_ai_browser",
        description=(
            "AI-powered browser automation using natural language. Describe actions like 'click "
            "login, fill email, submit form' and Spider automates the browser. "
            f"{AI_SUBSCRIPTION_NOTE}"
        ),
        params=AIBrowserParams,
        path="/ai/browser",
    ),
    SpiderTool(
        name="spider_ai_links",
        description=(
            "AI-powered intelligent link extraction and filtering. Describe what links you want and "
            f"Spider uses AI to find and categorize them. {AI_SUBSCRIPTION_NOTE}"
        ),
        params=AILinksParams,
        path="/ai/links",
    ),
)

_TOOLS_BY_NAME = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> SpiderTool:
    """Look up a tool by name; raises ValueError for unknown names."""
    tool = _TOOLS_BY_NAME.get(name)
    if tool is None:
        raise ValueError(f"Unknown tool: {name}")
    return tool


def tool_definitions() -> list[types.Tool]:
    """MCP definitions for every tool, in registration order."""
    return [tool.definition() for tool in TOOLS]


def _prepare(name: str, arguments: dict[str, Any] | None) -> tuple[SpiderTool, dict[str, Any] | None]:
    tool = get_tool(name)
    params = tool.params.model_validate(arguments or {})
    body = to_request_body(params) if tool.method == "POST" else None
    return tool, body


async def run_tool(client: SpiderClient, name: str, arguments: dict[str, Any] | None) -> Any:
    """Validate arguments and call the tool's endpoint, returning the decoded data.

    Raises:
        ValueError: unknown tool name.
        pydantic.ValidationError: arguments rejected by the tool's model.
        SpiderError: the request failed (see ``spider_mcp.core.errors``).
    """
    tool, body = _prepare(name, arguments)
    logger.debug("Calling %s (%s %s)", tool.name, tool.method, tool.path)
    return await client.request(tool.method, tool.path, body, stream=tool.stream)


def iter_tool_records(client: SpiderClient, name: str, arguments: dict[str, Any] | None) -> AsyncIterator[Any]:
    """Validate arguments now and return an iterator over the tool's records.

    Nothing is sent until iteration starts. Records arrive as the API streams them.
    """
    tool, body = _prepare(name, arguments)
    logger.debug("Streaming %s (%s %s)", tool.name, tool.method, tool.path)
    return client.iter_records(tool.method, tool.path, body, stream=tool.stream)


async def call_tool(client: SpiderClient, name: str, arguments: dict[str, Any] | None) -> str:
    """Run a tool and render its result as text."""
    return format_result(await run_tool(client, name, arguments))
