"""Protocol definitions for streamed API responses."""

from collections.abc import AsyncIterator
from typing import Any, Protocol, TypeAlias

# One parsed JSON value from one line of a JSONL body.
Record: TypeAlias = Any


class ByteStream(Protocol):
    """Async source of raw response chunks.

    Chunk boundaries carry no meaning: they may fall inside a multi-byte
    character, a JSON token or a line terminator. Streams that hold a reader
    resource also expose an ``aclose()`` coroutine, which the decoder calls
    once when it is done.
    """

    def __aiter__(self) -> AsyncIterator[bytes]:
        ...
