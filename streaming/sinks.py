# streaming/sinks.py
from __future__ import annotations
import csv
import os
from typing import Any, Dict, List, Optional, TextIO

from core.interfaces import Sink


class ListSink:
    """Collects every emitted value in memory."""
    def __init__(self):
        self.values: List[float] = []
        self.closed = False

    def emit(self, value: float) -> None:
        self.values.append(value)

    def close(self) -> None:
        self.closed = True


class TextSink:
    """Writes one value per line to an open text stream. Does not close it."""
    def __init__(self, stream: TextIO, fmt: str = "{!r}"):
        self._stream = stream
        self._fmt = fmt

    def emit(self, value: float) -> None:
        self._stream.write(self._fmt.format(value) + "\n")

    def close(self) -> None:
        self._stream.flush()


class CSVSink:
    """Append-only CSV writer with header auto-discovery or predefined schema.

    Each emitted value becomes a row {"index": i, "mean": value}; callers that
    want extra columns use `log()` directly.
    """
    def __init__(self, path: str, fieldnames: Optional[List[str]] = None):
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self.path = path
        self._fieldnames = fieldnames
        self._file: Optional[TextIO] = open(path, "a", newline="")
        self._writer: Optional[csv.DictWriter] = None
        self._index = 0

    def emit(self, value: float) -> None:
        self.log({"index": self._index, "mean": value})
        self._index += 1

    def log(self, row: Dict[str, Any]) -> None:
        if self._file is None:
            raise RuntimeError(f"CSVSink({self.path}) is closed")
        if self._writer is None:
            if self._fieldnames is None:
                self._fieldnames = list(row.keys())
            self._writer = csv.DictWriter(
                self._file,
                fieldnames=self._fieldnames,
                extrasaction="ignore",
            )
            if self._file.tell() == 0:
                self._writer.writeheader()
        self._writer.writerow(row)

    def flush(self) -> None:
        if self._file is not None:
            self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


class TeeSink:
    """Fans each value out to several sinks, in order."""
    def __init__(self, *sinks: Sink):
        self._sinks = sinks

    def emit(self, value: float) -> None:
        for s in self._sinks:
            s.emit(value)

    def close(self) -> None:
        self._close_from(0)

    def _close_from(self, i: int) -> None:
        # later sinks are closed even when an earlier close raises
        if i >= len(self._sinks):
            return
        try:
            self._sinks[i].close()
        finally:
            self._close_from(i + 1)
