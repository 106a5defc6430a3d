# streaming/sources.py
from __future__ import annotations
import os
from typing import Iterable, Iterator, List, Optional, TextIO, Union

import numpy as np

PathLike = Union[str, os.PathLike]


class ArraySource:
    """Replays a fixed sequence of samples."""
    def __init__(self, values: Iterable[float]):
        self._values: List[float] = [float(v) for v in values]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def describe(self) -> str:
        return f"array(n={len(self._values)})"


class RandomSource:
    """Uniform samples in [low, high) from a numpy Generator.

    Iterating twice with the same seed yields the same sequence.
    """
    def __init__(self, count: int, seed: Optional[int] = None,
                 low: float = 0.0, high: float = 1.0):
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        self.count = int(count)
        self.seed = seed
        self.low = float(low)
        self.high = float(high)

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[float]:
        rng = np.random.default_rng(self.seed)
        for v in rng.uniform(self.low, self.high, size=self.count):
            yield float(v)

    def describe(self) -> str:
        return f"random(n={self.count}, seed={self.seed})"


class TextSource:
    """
    One number per line from a path or an open text stream (e.g. sys.stdin).
    Blank lines and lines starting with '#' are skipped.
    """
    def __init__(self, src: Union[PathLike, TextIO]):
        self._src = src

    def __iter__(self) -> Iterator[float]:
        if isinstance(self._src, (str, os.PathLike)):
            with open(self._src, "r") as f:
                yield from self._parse(f)
        else:
            yield from self._parse(self._src)

    def _parse(self, f: Iterable[str]) -> Iterator[float]:
        for lineno, line in enumerate(f, start=1):
            s = line.strip()
            if not s or s.startswith("#"):
                continue
            try:
                yield float(s)
            except ValueError:
                raise ValueError(f"{self.describe()}:{lineno}: not a number: {s!r}") from None

    def describe(self) -> str:
        if isinstance(self._src, (str, os.PathLike)):
            return os.fspath(self._src)
        return str(getattr(self._src, "name", "<stream>"))
