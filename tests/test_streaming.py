# tests/test_streaming.py
import csv
import io

import pytest

from core.moving_mean import moving_mean
from streaming.pipeline import Pipeline, run_pipeline
from streaming.sinks import CSVSink, ListSink, TeeSink, TextSink
from streaming.sources import ArraySource, RandomSource, TextSource

def test_array_source_replays(step_data):
    src = ArraySource(step_data)
    assert list(src) == [float(x) for x in step_data]
    assert list(src) == list(src)
    assert len(src) == 12

def test_random_source_is_seeded():
    a = list(RandomSource(50, seed=7))
    b = list(RandomSource(50, seed=7))
    assert a == b and len(a) == 50
    assert all(0.0 <= x < 1.0 for x in a)
    assert list(RandomSource(50, seed=8)) != a

def test_random_source_rejects_negative_count():
    with pytest.raises(ValueError):
        RandomSource(-1)

def test_text_source_parses_lines(tmp_path):
    p = tmp_path / "data.txt"
    p.write_text("# header\n1\n\n2.5\n  -3e1 \n")
    assert list(TextSource(p)) == [1.0, 2.5, -30.0]
    assert TextSource(io.StringIO("4\n5\n")).describe() == "<stream>"

def test_text_source_reports_bad_line():
    src = TextSource(io.StringIO("1\n2\nabc\n"))
    with pytest.raises(ValueError, match=":3: not a number"):
        list(src)

def test_text_sink_writes_one_value_per_line():
    buf = io.StringIO()
    sink = TextSink(buf)
    sink.emit(2.4)
    sink.emit(3.0)
    sink.close()
    assert buf.getvalue() == "2.4\n3.0\n"

def test_csv_sink_writes_header_once(tmp_path):
    path = tmp_path / "out" / "means.csv"
    s = CSVSink(str(path))
    s.emit(1.5)
    s.emit(2.5)
    s.close()
    s2 = CSVSink(str(path))
    s2.emit(3.5)
    s2.close()
    s2.close()
    with path.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["mean"] for r in rows] == ["1.5", "2.5", "3.5"]
    assert [r["index"] for r in rows] == ["0", "1", "0"]

def test_csv_sink_rejects_use_after_close(tmp_path):
    s = CSVSink(str(tmp_path / "m.csv"))
    s.close()
    with pytest.raises(RuntimeError):
        s.emit(1.0)

def test_tee_sink_fans_out():
    a, b = ListSink(), ListSink()
    tee = TeeSink(a, b)
    tee.emit(1.0)
    tee.close()
    assert a.values == b.values == [1.0]
    assert a.closed and b.closed

def test_pipeline_counts_and_closes(step_data):
    sink = ListSink()
    t = moving_mean().transform()
    stats = Pipeline(ArraySource(step_data), t, sink).run()
    assert stats.samples == 12
    assert stats.emitted == 8 == len(sink.values)
    assert stats.last_mean == pytest.approx(4.6, abs=1e-3)
    assert sink.closed

def test_pipeline_underfilled_emits_nothing():
    sink = ListSink()
    stats = run_pipeline(ArraySource([1, 2]), 5, sink)
    assert stats.samples == 2 and stats.emitted == 0
    assert stats.last_mean is None
    assert sink.values == []

def test_pipeline_closes_sink_when_source_fails():
    sink = ListSink()
    with pytest.raises(ValueError):
        run_pipeline(TextSource(io.StringIO("1\n2\nx\n")), 2, sink)
    assert sink.closed
    assert sink.values == [1.5]

def test_pipeline_output_matches_direct_feed():
    src = RandomSource(300, seed=3)
    sink = ListSink()
    run_pipeline(src, 10, sink)
    assert sink.values == moving_mean().set_window(10).transform().feed(src)

def test_pipeline_restores_callers_sink():
    user, other = ListSink(), ListSink()
    t = moving_mean().set_window(2).transform(sink=user)
    Pipeline(ArraySource([1, 2]), t, other).run()
    assert other.values == [1.5]
    assert t.sink is user
    t.consume(3)
    assert user.values == [2.5]

def test_pipeline_restores_sink_when_source_fails():
    user = ListSink()
    t = moving_mean().set_window(2).transform(sink=user)
    with pytest.raises(ValueError):
        Pipeline(TextSource(io.StringIO("1\nx\n")), t, ListSink()).run()
    assert t.sink is user

class _FailingClose(ListSink):
    def close(self) -> None:
        super().close()
        raise OSError("disk gone")

def test_tee_sink_closes_every_sink_when_one_fails():
    first, bad, last = ListSink(), _FailingClose(), ListSink()
    with pytest.raises(OSError):
        TeeSink(first, bad, last).close()
    assert first.closed and bad.closed and last.closed
