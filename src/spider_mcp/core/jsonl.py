"""Incremental decoder for newline-delimited JSON (JSONL) response bodies."""

import codecs
import json
import logging
from collections.abc import AsyncIterator

from .protocols import ByteStream, Record

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8-sig"  # plain UTF-8, minus a leading byte-order mark

_SKIP = object()


class JsonlDecoder:
    """Turns byte chunks into JSON records, one record per line.

    Chunks may split a line, a JSON token or a multi-byte character anywhere.
    Incomplete byte sequences are held by the incremental text decoder and
    incomplete lines by the text buffer until the rest arrives.

    Lines that are blank or not valid JSON are skipped. A decoder instance
    belongs to exactly one stream.
    """

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""
        self._finished = False
        self.skipped = 0

    def feed(self, chunk: bytes) -> list[Record]:
        """Decode one chunk and return the records it completes."""
        if self._finished:
            raise RuntimeError("JsonlDecoder.feed() called after finish()")

        # Only the new text can hold a terminator not seen before.
        scan_from = len(self._buffer)
        self._buffer += self._decoder.decode(chunk)
        return self._drain_lines(scan_from)

    def finish(self) -> list[Record]:
        """Flush decoder state and parse the unterminated final line, if any."""
        if self._finished:
            return []
        self._finished = True

        remaining = (self._buffer + self._decoder.decode(b"", final=True)).strip()
        self._buffer = ""
        if not remaining:
            return []

        try:
            return [json.loads(remaining)]
        except json.JSONDecodeError:
            # Usually a partial final write; dropped like any malformed line.
            self.skipped += 1
            logger.debug("Discarding unterminated trailing fragment (%d chars)", len(remaining))
            return []

    @property
    def pending(self) -> str:
        """Decoded text not yet resolved into a complete line."""
        return self._buffer

    def _drain_lines(self, scan_from: int) -> list[Record]:
        records: list[Record] = []
        buffer = self._buffer
        start = 0
        newline = buffer.find("\n", scan_from)

        while newline != -1:
            line = buffer[start:newline]
            if line.endswith("\r"):
                line = line[:-1]
            start = newline + 1

            record = self._parse_line(line)
            if record is not _SKIP:
                records.append(record)

            newline = buffer.find("\n", start)

        if start:
            self._buffer = buffer[start:]
        return records

    def _parse_line(self, line: str):
        if not line.strip():
            return _SKIP
        try:
            return json.loads(line)
        except json.JSONDecodeError as e:
            self.skipped += 1
            logger.debug("Skipping malformed JSONL line (%s): %.200s", e.msg, line)
            return _SKIP


async def _release(stream: ByteStream) -> None:
    aclose = getattr(stream, "aclose", None)
    if aclose is not None:
        await aclose()


async def decode_jsonl_stream(stream: ByteStream) -> list[Record]:
    """Read a JSONL byte stream to the end and return its records in order.

    Malformed and blank lines are dropped. An error raised by the stream
    itself propagates and no partial result is returned. The stream is
    released exactly once on every exit path.
    """
    decoder = JsonlDecoder()
    records: list[Record] = []
    try:
        async for chunk in stream:
            records.extend(decoder.feed(chunk))
    finally:
        await _release(stream)

    records.extend(decoder.finish())
    if decoder.skipped:
        logger.debug("Skipped %d malformed JSONL line(s)", decoder.skipped)
    return records


async def iter_jsonl_records(stream: ByteStream) -> AsyncIterator[Record]:
    """Yield records from a JSONL byte stream as soon as each line completes."""
    decoder = JsonlDecoder()
    try:
        async for chunk in stream:
            for record in decoder.feed(chunk):
                yield record
    finally:
        await _release(stream)

    for record in decoder.finish():
        yield record
