"""Core API components."""

from .client import SpiderClient
from .errors import ConfigurationError, SpiderError, TransportError, UpstreamStatusError
from .jsonl import JsonlDecoder, decode_jsonl_stream, iter_jsonl_records
from .protocols import ByteStream, Record

__all__ = [
    "ByteStream",
    "ConfigurationError",
    "JsonlDecoder",
    "Record",
    "SpiderClient",
    "SpiderError",
    "TransportError",
    "UpstreamStatusError",
    "decode_jsonl_stream",
    "iter_jsonl_records",
]
