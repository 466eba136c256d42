import json
import os

import pytest

from nowall.profiler import (
    InstrumentationTimer,
    Instrumentor,
    ProfileResult,
    get_instrumentor,
)


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_empty_session_is_valid_trace(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session(str(path))
    inst.end_session()
    data = _read(path)
    assert data["traceEvents"] == []
    assert data["otherData"] == {}


def test_written_profiles_round_trip(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session(str(path))
    inst.write_profile(ProfileResult("solve", 100, 250, 7, 3))
    inst.write_profile(ProfileResult("assemble", 300, 310, 8, 4))
    inst.end_session()
    events = _read(path)["traceEvents"]
    assert len(events) == 2
    first = events[0]
    assert first["name"] == "solve"
    assert first["dur"] == 250 - 100
    assert first["ts"] == 100
    assert first["pid"] == 3
    assert first["tid"] == 7
    assert first["ph"] == "X"
    assert first["cat"] == "function"
    assert events[1]["name"] == "assemble"


def test_double_quotes_in_name_replaced(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session(str(path))
    inst.write_profile(ProfileResult('say "hi"', 0, 1, 0, 0))
    inst.end_session()
    assert _read(path)["traceEvents"][0]["name"] == "say 'hi'"


def test_write_without_session_raises():
    inst = Instrumentor()
    with pytest.raises(RuntimeError):
        inst.write_profile(ProfileResult("x", 0, 1, 0, 0))
    with pytest.raises(RuntimeError):
        inst.end_session()


def test_session_counter_resets(tmp_path):
    inst = Instrumentor()
    first = tmp_path / "a.json"
    second = tmp_path / "b.json"
    inst.begin_session(str(first))
    inst.write_profile(ProfileResult("one", 0, 1, 0, 0))
    inst.end_session()
    inst.begin_session(str(second))
    inst.write_profile(ProfileResult("two", 0, 1, 0, 0))
    inst.end_session()
    assert [e["name"] for e in _read(second)["traceEvents"]] == ["two"]
    assert inst.session_name is None


def test_timer_context_records_event(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session(str(path))
    with InstrumentationTimer("scope", inst) as timer:
        sum(range(100))
    inst.end_session()
    events = _read(path)["traceEvents"]
    assert timer.stopped
    assert len(events) == 1
    assert events[0]["name"] == "scope"
    assert events[0]["dur"] >= 0
    assert events[0]["pid"] == os.getpid()


def test_explicit_stop_records_once(tmp_path):
    path = tmp_path / "trace.json"
    inst = Instrumentor()
    inst.begin_session(str(path))
    with InstrumentationTimer("scope", inst) as timer:
        result = timer.stop()
    inst.end_session()
    events = _read(path)["traceEvents"]
    assert len(events) == 1
    assert result.duration == events[0]["dur"]


def test_global_instrumentor_is_shared(tmp_path):
    path = tmp_path / "global.json"
    get_instrumentor().begin_session(str(path))
    try:
        get_instrumentor().write_profile(ProfileResult("shared", 5, 9, 1, 2))
    finally:
        get_instrumentor().end_session()
    events = _read(path)["traceEvents"]
    assert [e["name"] for e in events] == ["shared"]
    assert events[0]["dur"] == 4
    assert get_instrumentor().session_name is None