# streaming/pipeline.py
from __future__ import annotations
import time
from dataclasses import dataclass
from typing import Optional

from core.interfaces import Sink, Source
from core.moving_mean import MovingMean, MovingMeanTransform


@dataclass(frozen=True)
class PipelineStats:
    samples: int
    emitted: int
    last_mean: Optional[float]
    elapsed_sec: float


class _Counting:
    def __init__(self, sink: Sink):
        self.sink = sink
        self.emitted = 0
        self.last: Optional[float] = None

    def emit(self, value: float) -> None:
        self.emitted += 1
        self.last = value
        self.sink.emit(value)


class Pipeline:
    """
    Source -> transform -> sink, one sample at a time.
    Each sample is fully processed (and its mean emitted) before the next one
    is pulled from the source. The sink is closed when the source is exhausted
    or an error propagates, and whatever producer the transform was bound to
    before the run is bound again.
    """
    def __init__(self, source: Source, transform: MovingMeanTransform, sink: Sink):
        self.source = source
        self.transform = transform
        self.sink = sink

    def run(self) -> PipelineStats:
        counter = _Counting(self.sink)
        prev = self.transform.sink
        self.transform.bind(counter)
        n = 0
        t0 = time.perf_counter()
        try:
            for x in self.source:
                self.transform.consume(x)
                n += 1
        finally:
            self.transform.bind(prev)
            self.sink.close()
        return PipelineStats(
            samples=n,
            emitted=counter.emitted,
            last_mean=counter.last,
            elapsed_sec=time.perf_counter() - t0,
        )


def run_pipeline(source: Source, window: int, sink: Sink) -> PipelineStats:
    return Pipeline(source, MovingMean().set_window(window).transform(), sink).run()
