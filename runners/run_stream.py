# runners/run_stream.py
from __future__ import annotations
import sys

from config import AppConfig
from core.moving_mean import MovingMean
from streaming.pipeline import Pipeline, PipelineStats
from streaming.sinks import CSVSink, TeeSink, TextSink
from runners._common import log, make_source


def main(cfg: AppConfig) -> PipelineStats:
    source = make_source(cfg)
    transform = MovingMean().set_window(cfg.window).transform()

    out = open(cfg.output_path, "w") if cfg.output_path else sys.stdout
    try:
        sink = TextSink(out)
        if cfg.csv_path:
            sink = TeeSink(sink, CSVSink(cfg.csv_path))
        log("stream", f"source={source.describe()}  window={transform.window}")
        stats = Pipeline(source, transform, sink).run()
    finally:
        if out is not sys.stdout:
            out.close()

    log("stream", f"samples={stats.samples}  emitted={stats.emitted}  "
                  f"last={stats.last_mean}  elapsed={stats.elapsed_sec:.3f}s")
    return stats
