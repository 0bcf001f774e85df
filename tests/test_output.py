"""Tests for output module."""

import json

import pytest

from spider_mcp.core import iter_jsonl_records
from spider_mcp.output import JsonlRecordWriter, format_result


async def records_from(*items):
    for item in items:
        yield item


async def byte_chunks(*chunks: bytes):
    for chunk in chunks:
        yield chunk


class TestFormatResult:
    def test_string_passes_through(self):
        """Text results should be returned unchanged."""
        assert format_result("already text") == "already text"

    def test_records_pretty_printed(self):
        """Structured results should be indented JSON."""
        text = format_result([{"url": "http://example.com"}])
        assert text == '[\n  {\n    "url": "http://example.com"\n  }\n]'

    def test_keeps_unicode(self):
        """Non-ASCII text should not be escaped."""
        assert "日本語" in format_result({"content": "日本語"})

    def test_none_and_numbers(self):
        assert format_result(None) == "null"
        assert format_result(3) == "3"


class TestJsonlRecordWriter:
    def test_creates_parent_directories(self, tmp_path):
        output_file = tmp_path / "crawls" / "site" / "records.jsonl"
        with JsonlRecordWriter(output_file) as writer:
            writer.write({"url": "http://example.com"})

        assert output_file.exists()

    def test_one_record_per_line(self, tmp_path):
        """Records of any JSON type each take one line."""
        output_file = tmp_path / "records.jsonl"
        with JsonlRecordWriter(output_file) as writer:
            writer.write({"url": "http://example.com/1"})
            writer.write([1, 2])
            writer.write(None)

        lines = output_file.read_text().splitlines()
        assert [json.loads(line) for line in lines] == [{"url": "http://example.com/1"}, [1, 2], None]
        assert writer.count == 3

    def test_unicode_not_escaped(self, tmp_path):
        output_file = tmp_path / "records.jsonl"
        with JsonlRecordWriter(output_file) as writer:
            writer.write({"text": "日本語"})

        assert "日本語" in output_file.read_text(encoding="utf-8")

    def test_write_requires_open_file(self, tmp_path):
        writer = JsonlRecordWriter(tmp_path / "records.jsonl")
        with pytest.raises(RuntimeError):
            writer.write({"url": "http://example.com"})

    def test_record_visible_before_close(self, tmp_path):
        """Each record is flushed as soon as it is written."""
        output_file = tmp_path / "records.jsonl"
        with JsonlRecordWriter(output_file) as writer:
            writer.write({"url": "http://example.com/1"})
            assert "example.com/1" in output_file.read_text()

    async def test_consume_async_records(self, tmp_path):
        output_file = tmp_path / "records.jsonl"
        with JsonlRecordWriter(output_file) as writer:
            written = await writer.consume(records_from({"a": 1}, {"b": 2}))
            written += await writer.consume(records_from({"c": 3}))

        assert written == 3
        assert writer.count == 3
        assert len(output_file.read_text().splitlines()) == 3

    async def test_consume_decoded_stream(self, tmp_path):
        """Records decoded from split chunks land on disk one per line."""
        output_file = tmp_path / "records.jsonl"
        stream = byte_chunks(b'{"url":"https://a.example"}\n{"u', b'rl":"https://b.example"}\nnot json\n', b'{"url":"c"}')

        with JsonlRecordWriter(output_file) as writer:
            written = await writer.consume(iter_jsonl_records(stream))

        assert written == 3
        urls = [json.loads(line)["url"] for line in output_file.read_text().splitlines()]
        assert urls == ["https://a.example", "https://b.example", "c"]

    async def test_consume_keeps_records_before_failure(self, tmp_path):
        """Records already received stay on disk when the source fails."""

        async def failing():
            yield {"url": "kept"}
            raise ConnectionError("reset")

        output_file = tmp_path / "records.jsonl"
        with JsonlRecordWriter(output_file) as writer:
            with pytest.raises(ConnectionError):
                await writer.consume(failing())

        assert json.loads(output_file.read_text()) == {"url": "kept"}
