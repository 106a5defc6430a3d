# core/moving_mean.py
from __future__ import annotations
import math
import numbers
import sys
from decimal import Decimal
from typing import Any, Iterable, List, Optional

import numpy as np

from .interfaces import Producer

DEFAULT_WINDOW = 5
MAX_WINDOW = sys.maxsize

_MISSING = object()


class InvalidConfiguration(ValueError):
    """Raised when a window size is not usable."""


def _is_finite(value: Any) -> bool:
    if isinstance(value, numbers.Integral):
        return True
    if isinstance(value, Decimal):
        return value.is_finite()
    try:
        return math.isfinite(value)
    except OverflowError:
        # a Fraction too large for a float is still finite
        return True


def _check_finite(value: Any) -> None:
    # bool is an int subclass; Decimal is a Number but not Real
    numeric = isinstance(value, numbers.Number) and (
        isinstance(value, numbers.Real) or not isinstance(value, numbers.Complex))
    if isinstance(value, (bool, np.bool_)) or not numeric:
        raise InvalidConfiguration(
            f"window must be a finite number, got {type(value).__name__}: {value!r}"
        )
    if not _is_finite(value):
        raise InvalidConfiguration(f"window must be a finite number, got {value!r}")


def check_window(value: Any) -> int:
    """Validates `value` as a usable window and returns it as an int."""
    _check_finite(value)
    if value <= 0 or value != int(value):
        raise InvalidConfiguration(f"window must be a positive integer, got {value!r}")
    if value > MAX_WINDOW:
        raise InvalidConfiguration(f"window must be at most {MAX_WINDOW}, got {value!r}")
    return int(value)


class MovingMeanTransform:
    """Sliding-window mean over a pushed stream of samples.

    - Samples live in a float64 numpy ring of capacity W; the head index points
      at the oldest sample once the window is full.
    - While filling, the mean is updated with Welford's step
      (`mean += (x - mean) / count`) and nothing is emitted until the W-th sample.
    - After that every sample evicts the oldest one and the mean moves by
      `(x - old) / W`, so each call is O(1) regardless of W.

    Each emitted mean is handed to the bound producer (if any) and returned.
    Not safe for concurrent producers.
    """

    def __init__(self, window: int, sink: Optional[Producer] = None) -> None:
        self._w = check_window(window)
        self._buf = np.zeros(self._w, dtype=np.float64)
        self._head = 0
        self._count = 0
        self._mean = 0.0
        self._full = False
        self._sink = sink

    @property
    def window(self) -> int:
        return self._w

    @property
    def count(self) -> int:
        return self._count

    @property
    def full(self) -> bool:
        return self._full

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def sink(self) -> Optional[Producer]:
        return self._sink

    def bind(self, sink: Optional[Producer]) -> "MovingMeanTransform":
        self._sink = sink
        return self

    def values(self) -> List[float]:
        """Buffered samples in arrival order, oldest first."""
        if not self._full:
            return [float(v) for v in self._buf[:self._count]]
        return [float(v) for v in np.roll(self._buf, -self._head)]

    def consume(self, value: float) -> Optional[float]:
        x = float(value)

        if not self._full:
            self._buf[self._count] = x
            self._count += 1
            self._mean += (x - self._mean) / self._count
            if self._count < self._w:
                return None
            self._full = True
            return self._emit(self._mean)

        old = float(self._buf[self._head])
        self._buf[self._head] = x
        self._head = (self._head + 1) % self._w
        self._mean += (x - old) / self._w
        return self._emit(self._mean)

    def feed(self, values: Iterable[float]) -> List[float]:
        """Consumes `values` in order and returns every mean emitted."""
        out = []
        for v in values:
            m = self.consume(v)
            if m is not None:
                out.append(m)
        return out

    def _emit(self, value: float) -> float:
        if self._sink is not None:
            self._sink.emit(value)
        return value

    def __repr__(self) -> str:
        return (f"MovingMeanTransform(window={self._w}, count={self._count}, "
                f"full={self._full}, mean={self._mean!r})")


class MovingMean:
    """Window-size configuration and transform factory.

    The window can be changed at any time; transforms already handed out keep
    the window they were created with.
    """

    def __init__(self, window: Any = DEFAULT_WINDOW) -> None:
        self._window: Any = DEFAULT_WINDOW
        self.set_window(window)

    @property
    def window(self) -> Any:
        return self._window

    def set_window(self, value: Any = _MISSING) -> "MovingMean":
        if value is _MISSING:
            raise InvalidConfiguration("window must be a finite number, got no value")
        _check_finite(value)
        self._window = value
        return self

    def transform(self, sink: Optional[Producer] = None) -> MovingMeanTransform:
        return MovingMeanTransform(check_window(self._window), sink=sink)


def moving_mean() -> MovingMean:
    return MovingMean()
