"""Spider API client using httpx."""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

import httpx

from .errors import ConfigurationError, TransportError, UpstreamStatusError
from .jsonl import decode_jsonl_stream, iter_jsonl_records

if TYPE_CHECKING:
    from ..config import SpiderSettings

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.spider.cloud"
DEFAULT_USER_AGENT = "spider-cloud-mcp/1.2.1"

JSONL_CONTENT_TYPE = "application/jsonl"
JSON_CONTENT_TYPE = "application/json"

# Content types the API (or a proxy in front of it) may use for line-delimited bodies.
JSONL_CONTENT_TYPES = frozenset({
    "application/jsonl",
    "application/x-jsonl",
    "application/ndjson",
    "application/x-ndjson",
    "application/json-lines",
    "application/jsonlines",
})


def is_jsonl_response(response: httpx.Response, requested: bool) -> bool:
    """Decide whether a response body should be decoded line by line.

    A declared line-delimited content type always wins and a declared
    ``application/json`` never streams. Otherwise the caller's request decides.
    """
    content_type = response.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type in JSONL_CONTENT_TYPES:
        return True
    if media_type == JSON_CONTENT_TYPE:
        return False
    return requested


def parse_json_or_text(text: str) -> Any:
    """Parse a complete body as one JSON document, falling back to the raw text."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


class SpiderClient:
    """Async client for the Spider API with connection reuse."""

    def __init__(
        self,
        api_key: str,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = 600.0,
        connect_timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_connections: int = 100,
        max_keepalive_connections: int = 20,
        connect_retries: int = 2,
    ):
        if not api_key:
            raise ConfigurationError("Spider API key is required")

        self.api_base = api_base.rstrip("/")
        self.user_agent = user_agent
        self.timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self.limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        )
        self.connect_retries = connect_retries
        self._api_key = api_key
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: "SpiderSettings") -> "SpiderClient":
        """Build a client from loaded settings; raises ConfigurationError without a key."""
        return cls(
            api_key=settings.require_api_key(),
            api_base=settings.api_base,
            timeout=settings.timeout,
            connect_timeout=settings.connect_timeout,
            user_agent=settings.user_agent,
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
            connect_retries=settings.connect_retries,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with double-checked locking."""
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    # Retries cover connection setup only; requests are never replayed.
                    transport = httpx.AsyncHTTPTransport(
                        retries=self.connect_retries,
                        limits=self.limits,
                    )
                    self._client = httpx.AsyncClient(
                        base_url=self.api_base,
                        timeout=self.timeout,
                        transport=transport,
                        headers={
                            "Authorization": f"Bearer {self._api_key}",
                            "User-Agent": self.user_agent,
                        },
                        follow_redirects=True,
                    )
        return self._client

    @staticmethod
    def _encode(body: dict[str, Any] | None, stream: bool) -> tuple[dict[str, str], bytes | None]:
        headers = {"Content-Type": JSONL_CONTENT_TYPE if stream else JSON_CONTENT_TYPE}
        content = json.dumps(body).encode("utf-8") if body is not None else None
        return headers, content

    @staticmethod
    async def _raise_for_status(resp: httpx.Response, method: str, path: str):
        if not resp.is_success:
            await resp.aread()
            logger.warning("Spider API %s %s returned %d", method, path, resp.status_code)
            raise UpstreamStatusError(resp.status_code, resp.text)

    async def request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        stream: bool = False,
    ) -> Any:
        """Send a request and return the decoded response.

        With ``stream=True`` the API is asked for JSONL and the result is the
        list of records. Otherwise it is the parsed JSON document, or the raw
        text when the body is not JSON.

        Raises:
            UpstreamStatusError: the API answered with a non-2xx status.
            TransportError: the connection failed, including mid-stream.
        """
        client = await self._get_client()
        headers, content = self._encode(body, stream)

        logger.debug("%s %s (stream=%s)", method, path, stream)
        try:
            async with client.stream(method, path, headers=headers, content=content) as resp:
                await self._raise_for_status(resp, method, path)

                if is_jsonl_response(resp, stream):
                    return await decode_jsonl_stream(resp.aiter_bytes())

                await resp.aread()
                return parse_json_or_text(resp.text)
        except httpx.HTTPError as e:
            raise TransportError(f"Spider API request {method} {path} failed: {e}") from e

    async def iter_records(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        stream: bool = True,
    ) -> AsyncIterator[Any]:
        """Yield records as each JSONL line arrives.

        A body that is not line-delimited is yielded once as its parsed
        document. Raises the same errors as ``request``.
        """
        client = await self._get_client()
        headers, content = self._encode(body, stream)

        logger.debug("%s %s (iter, stream=%s)", method, path, stream)
        try:
            async with client.stream(method, path, headers=headers, content=content) as resp:
                await self._raise_for_status(resp, method, path)

                if is_jsonl_response(resp, stream):
                    async for record in iter_jsonl_records(resp.aiter_bytes()):
                        yield record
                    return

                await resp.aread()
                yield parse_json_or_text(resp.text)
        except httpx.HTTPError as e:
            raise TransportError(f"Spider API request {method} {path} failed: {e}") from e

    async def get_credits(self) -> Any:
        """Return the account's credit balance."""
        return await self.request("GET", "/data/credits")

    async def close(self):
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SpiderClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
