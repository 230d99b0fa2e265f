"""test_context.py - Unit tests for DebugContext and the default context.

Covers:
    - create() memoizes handles per name
    - Registry introspection: names(), channel(), membership
    - History shared across channels, configurable capacity
    - from_config() wiring
    - Default context: lazy build from env, reset_context, create_logger, get_history
    - Concurrent creation and emission
    - Channel creation is reported on the package logger
"""

import io
import logging
import threading

import pytest

import chanlog.context as context_module
from chanlog.channel import LogHandle
from chanlog.config import DebugConfig
from chanlog.context import (
    DebugContext,
    create_logger,
    get_context,
    get_history,
    reset_context,
)
from chanlog.sink import StreamSink


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _context(**kwargs) -> DebugContext:
    kwargs.setdefault("filter_expr", "*")
    kwargs.setdefault("hide_date", True)
    kwargs.setdefault("sink", StreamSink(io.StringIO()))
    return DebugContext(**kwargs)


@pytest.fixture
def fresh_default(monkeypatch):
    """Isolate the process default context for one test."""
    monkeypatch.setattr(context_module, "_default", None)
    monkeypatch.delenv("DEBUG_HIDE_DATE", raising=False)
    yield
    monkeypatch.setattr(context_module, "_default", None)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_create_returns_log_handle(self):
        """create() returns a LogHandle."""
        assert isinstance(_context().create("app"), LogHandle)

    def test_create_same_name_returns_same_handle(self):
        """Both handles share one channel, so toggles are visible through each."""
        ctx = _context()
        first, second = ctx.create("x"), ctx.create("x")
        assert first is second
        first.enabled = False
        assert second.enabled is False

    def test_create_distinct_names_returns_distinct_channels(self):
        """Different names get different channels."""
        ctx = _context()
        assert ctx.create("a").channel is not ctx.create("b").channel

    def test_names_in_creation_order(self):
        """names() lists each channel once, in creation order."""
        ctx = _context()
        for name in ("b", "a", "c", "a"):
            ctx.create(name)
        assert ctx.names() == ["b", "a", "c"]
        assert len(ctx) == 3
        assert "a" in ctx and "z" not in ctx

    def test_channel_lookup_does_not_create(self):
        """channel() looks up without registering a new name."""
        ctx = _context()
        assert ctx.channel("missing") is None
        assert "missing" not in ctx
        handle = ctx.create("present")
        assert ctx.channel("present") is handle.channel

    def test_enablement_resolved_at_creation(self):
        """Changing the filter later does not affect existing channels."""
        ctx = _context(filter_expr="app")
        log = ctx.create("app")
        ctx.filter_expr = None
        assert log.enabled is True
        assert ctx.create("app2").enabled is False

    def test_creation_is_logged(self, caplog):
        """Creating a channel logs a DEBUG record on the package logger."""
        with caplog.at_level(logging.DEBUG, logger="chanlog.context"):
            _context().create("svc")
        assert any("svc" in r.getMessage() for r in caplog.records)


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


class TestContextHistory:
    def test_history_is_shared_by_all_channels(self):
        """All channels of a context write into one history."""
        ctx = _context()
        ctx.create("a")("one")
        ctx.create("b")("two")
        assert [(r.who, r.log) for r in ctx.history.records()] == [("a", "one"), ("b", "two")]

    def test_history_capacity_is_configurable(self):
        """history_capacity bounds the shared history."""
        ctx = _context(history_capacity=2)
        log = ctx.create("a")
        for i in range(5):
            log("%d", i)
        assert [r.log for r in ctx.history.records()] == ["3", "4"]

    def test_contexts_are_isolated(self):
        """Two contexts share neither registry nor history."""
        one, two = _context(), _context()
        one.create("a")("x")
        assert two.history.records() == []
        assert "a" not in two


# ---------------------------------------------------------------------------
# from_config
# ---------------------------------------------------------------------------


class TestFromConfig:
    def test_from_config_copies_settings(self):
        """from_config carries every DebugConfig field over."""
        sink = StreamSink(io.StringIO())
        cfg = DebugConfig(filter_expr="api*", hide_date=True, interactive=True)
        ctx = DebugContext.from_config(cfg, sink=sink, history_capacity=7)
        assert (ctx.filter_expr, ctx.hide_date, ctx.interactive) == ("api*", True, True)
        assert ctx.sink is sink
        assert ctx.history.capacity == 7


# ---------------------------------------------------------------------------
# Default context
# ---------------------------------------------------------------------------


class TestDefaultContext:
    def test_get_context_builds_from_env_once(self, fresh_default, monkeypatch):
        """The default context reads the environment only once."""
        monkeypatch.setenv("DEBUG", "worker:*")
        ctx = get_context()
        assert ctx.filter_expr == "worker:*"
        monkeypatch.setenv("DEBUG", "other")
        assert get_context() is ctx

    def test_reset_context_rereads_env(self, fresh_default, monkeypatch):
        """reset_context() builds a new context from the current environment."""
        monkeypatch.setenv("DEBUG", "one")
        first = get_context()
        monkeypatch.setenv("DEBUG", "two")
        second = reset_context()
        assert second is not first
        assert get_context().filter_expr == "two"

    def test_create_logger_and_get_history(self, fresh_default):
        """The module-level helpers work against the default context."""
        stream = io.StringIO()
        reset_context(_context(sink=StreamSink(stream)))
        log = create_logger("app")
        assert create_logger("app") is log
        log("hello %s", "there")
        assert stream.getvalue() == "app hello there\n"
        assert [(r.who, r.log) for r in get_history()] == [("app", "hello there")]


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


class TestConcurrency:
    def test_concurrent_create_yields_single_handle(self):
        """Threads racing on one name all receive the same handle."""
        ctx = _context()
        handles = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            handles.append(ctx.create("shared"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len({id(h) for h in handles}) == 1
        assert ctx.names() == ["shared"]

    def test_concurrent_emits_are_all_recorded(self):
        """No record or line is lost when threads emit together."""
        ctx = _context(history_capacity=1000)

        def worker(n: int):
            log = ctx.create(f"t{n}")
            for i in range(50):
                log("%d", i)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(ctx.history) == 200
        assert ctx.sink.stream.getvalue().count("\n") == 200
