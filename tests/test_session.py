"""
Tests for the session manager.

Runs go through the real launcher with the Python backend, so they execute
actual subprocesses in the test's temporary cache directory.
"""

from __future__ import annotations

import threading

import pytest

from sniprun.launcher import Launcher
from sniprun.models import ExecutionResult, RequestContext, RunRequest
from sniprun.session import Session


@pytest.fixture()
def session_for(work_dir):
    def _make(host, launcher=None):
        return Session(host, work_dir, launcher)

    return _make


def test_run_delivers_escaped_output(make_host, session_for):
    host = make_host(buffer=["print('He said \"hi\"')"])
    session = session_for(host)
    session.handle_event("run", [1, 1, "/plugin"])
    session.join()
    assert host.echoed == ['He said \\"hi\\"']
    assert host.errors == []


def test_run_uses_selected_lines_only(make_host, session_for):
    host = make_host(buffer=["print('a')", "print('b')", "print('c')", "print('d')"])
    session = session_for(host)
    session.run(RunRequest(start_line=2, end_line=3, sniprun_root_dir="/plugin"))
    session.join()
    assert host.echoed == ["b\nc"]


def test_run_falls_back_to_current_line(make_host, session_for):
    host = make_host(buffer=[""], line="print(40 + 2)")
    session = session_for(host)
    session.handle_event("run", [1, 1, "/plugin"])
    session.join()
    assert host.echoed == ["42"]


def test_errors_go_to_error_channel(make_host, session_for):
    host = make_host(filetype="cobol", buffer=['DISPLAY "X"'])
    session = session_for(host)
    session.handle_event("run", [1, 1, "/plugin"])
    session.join()
    assert host.echoed == []
    assert host.errors == ["Unsupported language: cobol"]


def test_runtime_error_is_not_escaped(make_host, session_for):
    host = make_host(buffer=['raise SystemExit("bad \\"quote\\"")'])
    session = session_for(host)
    session.handle_event("run", [1, 1, "/plugin"])
    session.join()
    assert host.echoed == []
    (message,) = host.errors
    assert message.startswith("Runtime error: ")
    assert 'bad \\"quote\\"' not in message
    assert 'bad "quote"' in message


def test_context_is_captured_then_reset(make_host, session_for, work_dir):
    captured = []

    class SpyLauncher(Launcher):
        def run(self, ctx):
            captured.append(ctx)
            return ExecutionResult(output="ok")

    host = make_host(filetype="python", buffer=["a", "b"], line="b", filepath="/src/x.py")
    session = session_for(host, SpyLauncher())
    session.handle_event("run", [1, 2, "/plugin"])
    session.join()

    (ctx,) = captured
    assert ctx.filetype == "python"
    assert ctx.current_line == "b"
    assert ctx.current_bloc == "a\nb"
    assert ctx.range == (1, 2)
    assert ctx.filepath == "/src/x.py"
    assert ctx.work_dir == str(work_dir.root)
    assert ctx.sniprun_root_dir == "/plugin"
    assert session.context == RequestContext.empty(str(work_dir.root))


def test_lock_not_held_during_execution(make_host, session_for):
    release = threading.Event()
    started = threading.Event()

    class BlockingLauncher(Launcher):
        def run(self, ctx):
            started.set()
            release.wait(5)
            return ExecutionResult(output="done")

    host = make_host(buffer=["x"])
    session = session_for(host, BlockingLauncher())
    session.handle_event("run", [1, 1, "/plugin"])
    assert started.wait(5)
    # A second capture must not wait for the first run to finish.
    session.handle_event("run", [1, 1, "/plugin"])
    assert session.context.current_bloc == "x"
    release.set()
    session.join()
    assert host.echoed == ["done", "done"]


def test_concurrent_runs_use_disjoint_directories(make_host, session_for, work_dir):
    host = make_host(buffer=["import os; print(os.getcwd())"])
    session = session_for(host)
    session.handle_event("run", [1, 1, "/plugin"])
    session.handle_event("run", [1, 1, "/plugin"])
    session.join()

    dirs = work_dir.list_private_dirs("python3_original")
    assert len(dirs) == 2
    assert sorted(host.echoed) == sorted(str(d) for d in dirs)
    for d in dirs:
        assert (d / "main.py").exists()


def test_unknown_and_malformed_events_are_ignored(make_host, session_for):
    host = make_host(buffer=["print(1)"])
    session = session_for(host)
    session.handle_event("frobnicate", [])
    session.handle_event("run", [])
    session.handle_event("run", ["one", 1, "/plugin"])
    session.join()
    assert host.echoed == []
    assert host.errors == []


def test_host_failure_is_contained(make_host, session_for):
    host = make_host(buffer=["print(1)"])

    def broken():
        raise ConnectionError("channel closed")

    host.filetype = broken
    session = session_for(host)
    session.handle_event("run", [1, 1, "/plugin"])
    session.join()
    assert host.echoed == []

    host.filetype = lambda: "python"
    session.handle_event("run", [1, 1, "/plugin"])
    session.join()
    assert host.echoed == ["1"]


def test_internal_failure_ends_only_its_run(make_host, session_for):
    class ExplodingLauncher(Launcher):
        def run(self, ctx):
            raise FileNotFoundError("rustc")

    host = make_host(buffer=["x"])
    session = session_for(host, ExplodingLauncher())
    session.handle_event("run", [1, 1, "/plugin"])
    session.join()
    assert host.errors == ["Internal error: rustc"]
    assert session.context.filetype == ""


def test_echo_failure_still_resets_context(make_host, session_for):
    host = make_host(buffer=["print(1)"])

    def broken_echo(text):
        raise ConnectionError("channel closed")

    host.echo = broken_echo
    session = session_for(host)
    session.handle_event("run", [1, 1, "/plugin"])
    session.join()
    assert session.context.filetype == ""


def test_clean_twice(make_host, session_for, work_dir):
    session = session_for(make_host())
    (work_dir.root / "python3_original" / "leftover").mkdir(parents=True)
    for _ in range(2):
        session.handle_event("clean", [])
        assert work_dir.root.is_dir()
        assert list(work_dir.root.iterdir()) == []
        probe = work_dir.root / "probe"
        probe.write_text("ok")
        probe.unlink()


def test_serve_dispatches_in_order(make_host, session_for, work_dir):
    host = make_host(buffer=["print('served')"])
    session = session_for(host)
    session.serve([("clean", []), ("run", [1, 1, "/plugin"]), ("noop", [])])
    session.join()
    assert host.echoed == ["served"]
    assert len(work_dir.list_private_dirs("python3_original")) == 1


def test_finished_runs_are_not_kept(make_host, session_for):
    class QuickLauncher(Launcher):
        def run(self, ctx):
            return ExecutionResult(output="ok")

    host = make_host(buffer=["x"])
    session = session_for(host, QuickLauncher())
    units = []
    for _ in range(20):
        unit = session.run(RunRequest(start_line=1, end_line=1, sniprun_root_dir="/plugin"))
        unit.join(5)
        units.append(unit)

    session.run(RunRequest(start_line=1, end_line=1, sniprun_root_dir="/plugin")).join(5)
    assert len(session._units) <= 1
    assert len({unit.name for unit in units}) == 20
    assert host.echoed == ["ok"] * 21
