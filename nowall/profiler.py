"""Scope profiler writing trace events in the Chrome tracing JSON format."""

from __future__ import annotations

import os
import threading
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class ProfileResult:
    """A timed scope: start and end in microseconds."""

    name: str
    start: int
    end: int
    thread_id: int
    proc_id: int

    @property
    def duration(self):
        return self.end - self.start


class Instrumentor:
    """Collects profile results of one session into a trace file."""

    def __init__(self):
        self._session = None
        self._stream = None
        self._count = 0

    @property
    def session_name(self):
        return self._session

    def begin_session(self, name):
        """Open the trace file called ``name`` and write the header."""
        if self._stream is not None:
            raise RuntimeError(f"profiling session {self._session!r} is already open")
        self._stream = open(name, "w", encoding="utf-8")
        self._stream.write('{"otherData": {},"traceEvents":[')
        self._stream.flush()
        self._session = name

    def end_session(self):
        """Write the footer and close the trace file."""
        if self._stream is None:
            raise RuntimeError("no profiling session is open")
        self._stream.write("]}")
        self._stream.flush()
        self._stream.close()
        self._stream = None
        self._session = None
        self._count = 0

    def write_profile(self, result):
        """Append one trace event for ``result``."""
        if self._stream is None:
            raise RuntimeError("no profiling session is open")
        if self._count > 0:
            self._stream.write(",")
        self._count += 1
        name = result.name.replace('"', "'")
        self._stream.write(
            "{"
            '"cat":"function",'
            f'"dur":{result.end - result.start},'
            f'"name":"{name}",'
            '"ph":"X",'
            f'"pid":{result.proc_id},'
            f'"tid":{result.thread_id},'
            f'"ts":{result.start}'
            "}"
        )
        self._stream.flush()


_INSTANCE = Instrumentor()


def get_instrumentor():
    """Return the process-wide instrumentor."""
    return _INSTANCE


def _now_us():
    return time.perf_counter_ns() // 1000


class InstrumentationTimer:
    """Times a scope from construction until stopped or the block exits."""

    def __init__(self, name, instrumentor=None):
        self.name = name
        self._instrumentor = get_instrumentor() if instrumentor is None else instrumentor
        self._start = _now_us()
        self.stopped = False

    def stop(self):
        """Record the elapsed time and return the written result."""
        result = ProfileResult(
            self.name,
            self._start,
            _now_us(),
            threading.get_ident() & 0xFFFFFFFF,
            os.getpid(),
        )
        self._instrumentor.write_profile(result)
        self.stopped = True
        return result

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self.stopped:
            self.stop()
        return None