# runners/run_live.py
from __future__ import annotations
from typing import Optional

from config import AppConfig
from core.moving_mean import MovingMean
from streaming.pipeline import Pipeline, PipelineStats
from streaming.sinks import CSVSink, TeeSink
from viz.live_plot import LivePlot, PlotClosed
from runners._common import log, make_source


def main(cfg: AppConfig) -> Optional[PipelineStats]:
    """Plays the stream into a live plot. Returns None if the window was closed early."""
    source = make_source(cfg)
    transform = MovingMean().set_window(cfg.window).transform()

    csv_sink = CSVSink(cfg.csv_path) if cfg.csv_path else None
    plot = LivePlot(cfg, window=transform.window)
    try:
        plot.open()
    except Exception:
        if csv_sink is not None:
            csv_sink.close()
        raise
    sink = TeeSink(plot, csv_sink) if csv_sink is not None else plot

    log("live", f"source={source.describe()}  window={transform.window}  fps={cfg.fps}")
    try:
        stats = Pipeline(source, transform, sink).run()
    except PlotClosed:
        log("live", f"window closed; stopped at mean={transform.mean}")
        return None
    log("live", f"samples={stats.samples}  emitted={stats.emitted}  last={stats.last_mean}")
    return stats
