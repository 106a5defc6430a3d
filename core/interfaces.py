# core/interfaces.py
from __future__ import annotations
from typing import Iterator, Optional, Protocol


class Consumer(Protocol):
    """Accepts one sample at a time; returns the value it emitted, if any."""
    def consume(self, value: float) -> Optional[float]: ...


class Producer(Protocol):
    """Receives each value emitted downstream of a Consumer."""
    def emit(self, value: float) -> None: ...


class Sink(Producer, Protocol):
    def close(self) -> None: ...


class Source(Protocol):
    def __iter__(self) -> Iterator[float]: ...
    def describe(self) -> str: ...
