"""Error types raised by the Spider API client."""


class SpiderError(Exception):
    """Base class for client errors."""


class ConfigurationError(SpiderError):
    """Client configuration is missing or invalid (e.g. no API key)."""


class TransportError(SpiderError):
    """The connection failed while sending a request or reading its body."""


class UpstreamStatusError(SpiderError):
    """The API answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Spider API error {status_code}: {body}")
