"""Result formatting and JSONL record files."""

import json
from collections.abc import AsyncIterable
from pathlib import Path
from typing import Any, TextIO


def format_result(data: Any) -> str:
    """Render an API result as the text handed back to the tool caller."""
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False)


class JsonlRecordWriter:
    """Appends decoded records to a JSONL file as they arrive.

    Each record is flushed on its own line, so a crawl interrupted midway
    still leaves every record received so far on disk.
    """

    def __init__(self, output_path: str | Path):
        self.output_path = Path(output_path)
        self._file: TextIO | None = None
        self._count = 0

    def __enter__(self) -> "JsonlRecordWriter":
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.output_path.open("w", encoding="utf-8")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._file is not None:
            self._file.close()
            self._file = None

    def write(self, record: Any):
        if self._file is None:
            raise RuntimeError("JsonlRecordWriter is not open; use it as a context manager")
        self._file.write(json.dumps(record, ensure_ascii=False))
        self._file.write("\n")
        self._file.flush()
        self._count += 1

    async def consume(self, records: AsyncIterable[Any]) -> int:
        """Write every record from ``records``; returns how many this call wrote."""
        before = self._count
        try:
            async for record in records:
                self.write(record)
        finally:
            aclose = getattr(records, "aclose", None)
            if aclose is not None:
                await aclose()
        return self._count - before

    @property
    def count(self) -> int:
        """Records written since the file was opened."""
        return self._count
