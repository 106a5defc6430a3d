# runners/run_compare.py
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from config import AppConfig
from core.moving_mean import MovingMean
from core.reference import batch_moving_mean, resolve_device
from runners._common import log, make_source


@dataclass(frozen=True)
class CompareResult:
    samples: int
    emitted: int
    max_abs_drift: float
    device: str


def main(cfg: AppConfig) -> CompareResult:
    """Streams the source through the incremental transform and measures its
    drift against a one-shot torch computation of the same windows."""
    data = list(make_source(cfg))
    transform = MovingMean().set_window(cfg.window).transform()
    streamed = np.asarray(transform.feed(data), dtype=np.float64)

    device = resolve_device(cfg.device)
    batch = batch_moving_mean(data, transform.window, device=device)
    if streamed.shape != batch.shape:
        raise RuntimeError(f"output length mismatch: streamed={streamed.shape} batch={batch.shape}")

    drift = float(np.max(np.abs(streamed - batch))) if streamed.size else 0.0
    res = CompareResult(samples=len(data), emitted=int(streamed.size),
                        max_abs_drift=drift, device=device)
    log("compare", f"device={device}  window={transform.window}  samples={res.samples}  "
                   f"emitted={res.emitted}  max|drift|={drift:.3e}")
    return res
