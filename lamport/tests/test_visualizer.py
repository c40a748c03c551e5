import os

from lamport.recorder import EventRecorder
from lamport.visualizer import plot_event_timeline


def test_plot_writes_png(tmp_path):
    recorder = EventRecorder()
    recorder.record_local("a", "first")
    recorder.record_message(5, "remote")
    out = tmp_path / "plots" / "timeline.png"
    result = plot_event_timeline(recorder.snapshot().events, str(out))
    assert result == str(out)
    assert os.path.getsize(out) > 0


def test_plot_empty_log_returns_none(tmp_path):
    assert plot_event_timeline([], str(tmp_path / "empty.png")) is None
    assert not (tmp_path / "empty.png").exists()
