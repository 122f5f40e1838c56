"""Tests for the logger dispatch pipeline"""

import pytest
import threading
from unittest.mock import Mock

from retain_logger import Logger, LoggerBuilder, LoggerConfig, LogLevel, SinkWriteError
from retain_logger.core.log_entry import LogEntry
from retain_logger.core.process_identity import ProcessIdentity
from retain_logger.writers.console_writer import ConsoleWriter


IDENTITY = ProcessIdentity(pid=4242, hostname="testhost", eol="\n")


class RecordingConsole(ConsoleWriter):
    """Console writer that records calls instead of printing."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def write(self, channel, *args):
        self.calls.append((channel, args))

    def channels(self):
        return [channel for channel, _ in self.calls]

    def lines(self):
        return [args[0] for _, args in self.calls]


class BrokenConsole(ConsoleWriter):
    """Console writer whose stream is gone."""

    def write(self, channel, *args):
        raise OSError("stream closed")


class FaultyConsole(ConsoleWriter):
    """Console writer with a bug of its own."""

    def write(self, channel, *args):
        raise RuntimeError("writer bug")


class UnprintableValue:
    __slots__ = ()

    def __str__(self):
        raise RuntimeError("no str")


class UnprintableError(Exception):
    def __str__(self):
        raise RuntimeError("no str")


class UnprintableFailureConsole(ConsoleWriter):
    """Console writer raising an error that cannot be printed."""

    def write(self, channel, *args):
        raise UnprintableError()


def make_logger(options=None, console=None):
    console = console if console is not None else RecordingConsole()
    return Logger(options, console=console, identity=IDENTITY), console


class TestDefaultRouting:
    """Test the default console routing."""

    def test_info_goes_to_log_channel_once(self):
        logger, console = make_logger()
        logger.info("hello")

        assert console.channels() == ["log"]
        assert "hello" in console.lines()[0]

    def test_default_format_is_applied_and_eol_stripped(self):
        logger, console = make_logger()
        logger.info("hello")

        line = console.lines()[0]
        assert line.startswith("[info][4242@testhost] ")
        assert line.endswith(": hello")
        assert not line.endswith("\n")

    def test_error_levels_go_to_error_channel(self):
        logger, console = make_logger()
        logger.warn("w").error("e").fatal("f")

        assert console.channels() == ["error", "error", "error"]

    def test_debug_and_file_go_to_log_channel(self):
        logger, console = make_logger()
        logger.debug("d")
        logger.file("ignored.log", "f")

        assert console.channels() == ["log", "log"]
        assert console.lines()[1].startswith("[][4242@testhost]")
        assert console.lines()[1].endswith(": f")

    def test_calls_chain(self):
        logger, _ = make_logger()
        assert logger.info("a").warn("b") is logger

    def test_warning_alias(self):
        logger, console = make_logger()
        logger.warning("careful")
        assert console.channels() == ["error"]

    def test_log_with_level_name(self):
        logger, console = make_logger()
        logger.log("INFO", "by name")
        assert "by name" in console.lines()[0]

    def test_unknown_level_is_noop(self):
        logger, console = make_logger()
        assert logger.log("verbose", "x") is logger
        assert console.calls == []
        assert logger.get_metrics()["suppressed"] == 1


class TestGating:
    """Test trace/debug gating and the debug cutoff."""

    def test_trace_disabled_by_default(self):
        logger, console = make_logger()
        logger.trace("hidden")
        assert console.calls == []

    def test_trace_appends_stack(self):
        logger, console = make_logger({"trace": True})
        logger.trace("visible")

        assert console.channels() == ["trace"]
        line = console.lines()[0]
        assert "visible" in line
        assert "Stack (most recent call last):" in line
        assert "test_trace_appends_stack" in line

    def test_enable_disable_trace(self):
        logger, console = make_logger()
        logger.enable_trace().trace("one")
        logger.disable_trace().trace("two")

        assert len(console.calls) == 1
        assert logger.trace_enabled is False

    def test_disable_debug(self):
        logger, console = make_logger()
        logger.disable_debug().debug("hidden")
        assert console.calls == []

        logger.enable_debug().debug("shown")
        assert len(console.calls) == 1

    def test_set_debug_level_false_only_suppresses_debug(self):
        logger, console = make_logger()
        logger.set_debug_level(False)

        logger.debug("a")
        logger.debug_level(1, "b")
        assert console.calls == []

        logger.info("i").warn("w").error("e").fatal("f")
        assert len(console.calls) == 4

    def test_set_debug_level_zero_disables(self):
        logger, _ = make_logger()
        logger.set_debug_level(0)
        assert logger.debug_enabled is False

    def test_set_debug_level_true_is_unlimited(self):
        logger, console = make_logger({"debugLevel": 2, "debug": False})
        logger.set_debug_level(True)

        assert logger.debug_enabled is True
        assert logger.debug_cutoff == -1
        logger.debug_level(1000, "deep")
        assert len(console.calls) == 1

    def test_set_debug_level_one_is_a_cutoff(self):
        logger, _ = make_logger()
        logger.set_debug_level(1)

        assert logger.debug_cutoff == 1
        assert logger.debug_enabled is True

    def test_cutoff_filters_verbose_messages(self):
        logger, console = make_logger({"debugLevel": 3})
        for n in range(1, 6):
            logger.debug_level(n, f"level {n}")

        assert len(console.calls) == 3
        assert "level 3" in console.lines()[-1]

    def test_debug_ignores_cutoff(self):
        logger, console = make_logger({"debugLevel": 0})
        logger.debug("always")
        assert len(console.calls) == 1

    def test_unlimited_cutoff(self):
        logger, console = make_logger()
        logger.debug_level(99, "very deep")
        assert len(console.calls) == 1


class TestRetention:
    """Test hold-and-release behavior."""

    def test_keep_last_scenario(self):
        logger, _ = make_logger({"keepLast": True, "debugLevel": 10})
        logger.set_debug_level(11)
        logger.debug_level(11, "should stay")
        logger.debug_level(12, "should be none")

        entries = logger.get_entries()
        assert len(entries) == 1
        assert "stay" in entries[0].message
        assert entries[0].level == LogLevel.DEBUG

    def test_drain_twice(self):
        logger, _ = make_logger({"keepLast": 10})
        logger.info("a").info("b")

        first = logger.get_entries()
        assert [e.message.endswith(m) for e, m in zip(first, "ab")] == [True, True]
        assert logger.get_entries() == []

    def test_retention_disabled_by_default(self):
        logger, _ = make_logger()
        logger.info("a")
        assert logger.retention_enabled is False
        assert logger.get_entries() == []

    def test_capacity_evicts_oldest(self):
        logger, _ = make_logger({"keepLast": 2, "format": "%m"})
        logger.info("a").info("b").info("c")

        assert [e.message for e in logger.get_entries()] == ["b", "c"]
        assert logger.get_metrics()["evicted"] == 1

    def test_one_entry_per_call_across_fanout(self):
        logger, console = make_logger({
            "keepLast": 10,
            "format": "%L:%m%E",
            "targets": [["info", "?consolelog"], ["info", "?consoleerror"]],
        })
        logger.info("x")

        entries = logger.get_entries()
        assert len(entries) == 1
        assert entries[0].message == "info:x"
        assert console.channels() == ["log", "error"]

    def test_entry_uses_first_matching_template(self):
        logger, _ = make_logger({
            "keepLast": 10,
            "targets": [["warn", "?consoleerror", "W %m"], ["*", "?consolelog", "A %m"]],
        })
        logger.info("i").warn("w")

        assert [e.message for e in logger.get_entries()] == ["A i", "W w"]

    def test_retain_only_skips_sinks(self):
        logger, console = make_logger({"keepLast": 5, "retainOnly": True})
        logger.info("held")

        assert console.calls == []
        assert len(logger.get_entries()) == 1

    def test_gated_calls_are_not_retained(self):
        logger, _ = make_logger({"keepLast": True})
        logger.trace("hidden")
        assert logger.get_entries() == []

    def test_display_entries_channels(self):
        logger, console = make_logger()
        entries = [
            LogEntry(LogLevel.DEBUG, "d"),
            LogEntry(LogLevel.TRACE, "t"),
            LogEntry(LogLevel.ERROR, "e"),
            LogEntry(LogLevel.FATAL, "f"),
            LogEntry(LogLevel.WARN, "w"),
            LogEntry(LogLevel.INFO, "i"),
            LogEntry(LogLevel.FILE, "x"),
        ]
        logger.display_entries(entries)

        assert console.channels() == ["debug", "debug", "error", "error", "warn", "info", "log"]
        assert console.lines() == ["d", "t", "e", "f", "w", "i", "x"]

    def test_display_entries_reversed(self):
        logger, console = make_logger()
        entries = [LogEntry(LogLevel.INFO, "1"), LogEntry(LogLevel.INFO, "2")]
        logger.display_entries(entries, reversed=True)

        assert console.lines() == ["2", "1"]
        assert [e.message for e in entries] == ["1", "2"]

    def test_concurrent_logging(self):
        logger, _ = make_logger({"keepLast": True})

        def worker():
            for _ in range(100):
                logger.info("x")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(logger.get_entries()) == 400


class TestConsoleNoFormat:
    """Test raw argument pass-through to the console."""

    def test_raw_arguments(self):
        logger, console = make_logger({"consoleNoFormat": True})
        payload = {"b": 1}
        logger.info("a", payload)

        assert console.calls == [("log", ("a", payload))]

    def test_trace_channel_still_rendered(self):
        logger, console = make_logger({"consoleNoFormat": True, "trace": True})
        logger.trace("t")

        channel, args = console.calls[0]
        assert channel == "trace"
        assert len(args) == 1
        assert "Stack" in args[0]

    def test_retained_entry_is_rendered(self):
        logger, _ = make_logger({"consoleNoFormat": True, "keepLast": 1, "format": "%L %m"})
        logger.info("a", 1)
        assert logger.get_entries()[0].message == "info a 1"


class TestFileTargets:
    """Test file sink resolution and writes."""

    def test_file_target_under_location(self, tmp_path):
        logger, _ = make_logger({
            "targets": [["*", "app-%L-%p.log"]],
            "logLocation": str(tmp_path) + "/",
        })
        logger.info("hello")

        written = (tmp_path / "app-info-4242.log").read_text()
        assert written.startswith("[info][4242@testhost] ")
        assert written.endswith(": hello\n")

    def test_file_targets_append(self, tmp_path):
        logger, _ = make_logger({
            "targets": [["*", "app.log", "%m%E"]],
            "logLocation": str(tmp_path),
        })
        logger.info("one").error("two")

        assert (tmp_path / "app.log").read_text() == "one\ntwo\n"

    def test_hostname_token(self, tmp_path):
        logger, _ = make_logger({
            "targets": [["*", "%h.log", "%m"]],
            "logLocation": str(tmp_path),
        })
        logger.info("x")
        assert (tmp_path / "testhost.log").read_text() == "x"

    def test_file_level_uses_override_filename(self, tmp_path):
        logger, _ = make_logger({
            "targets": [["file", "default.log", "%m%E"]],
            "logLocation": str(tmp_path / "unused"),
        })
        target = tmp_path / "custom.log"
        logger.file(str(target), "payload", 7)

        assert target.read_text() == "payload 7\n"
        assert not (tmp_path / "unused").exists()

    def test_file_level_location_token(self, tmp_path):
        logger, _ = make_logger({
            "targets": [["file", "default.log", "%m"]],
            "logLocation": str(tmp_path),
        })
        logger.file("%l/special-%L.log", "x")

        assert (tmp_path / "special-.log").read_text() == "x"

    def test_file_level_without_override_uses_rule_path(self, tmp_path):
        logger, _ = make_logger({
            "targets": [["file", str(tmp_path / "rule.log"), "%m"]],
            "logLocation": "",
        })
        logger.file(None, "x")
        assert (tmp_path / "rule.log").read_text() == "x"

    def test_write_failure_goes_to_error_handler(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        handler = Mock()
        logger, _ = make_logger({
            "targets": [["*", "sub/app.log"]],
            "logLocation": str(blocker),
            "errorHandler": handler,
        })

        assert logger.info("lost") is logger
        handler.assert_called_once()
        error = handler.call_args[0][0]
        assert isinstance(error, SinkWriteError)
        assert error.level == LogLevel.INFO
        assert isinstance(error.cause, OSError)
        assert logger.get_metrics()["sink_errors"] == 1

    def test_write_failure_reported_on_stderr(self, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        logger, _ = make_logger({
            "targets": [["*", "sub/app.log"]],
            "logLocation": str(blocker),
        })
        logger.error("lost")

        assert "Writer error:" in capsys.readouterr().err

    def test_console_failure_does_not_raise(self):
        handler = Mock()
        logger, _ = make_logger({"errorHandler": handler}, console=BrokenConsole())
        logger.info("x")

        assert handler.call_args[0][0].sink == "console:log"

    def test_unexpected_console_error_does_not_raise(self):
        handler = Mock()
        logger, _ = make_logger({"errorHandler": handler}, console=FaultyConsole())

        assert logger.error("x") is logger
        error = handler.call_args[0][0]
        assert isinstance(error, SinkWriteError)
        assert error.sink == "console:error"
        assert isinstance(error.cause, RuntimeError)
        assert logger.get_metrics()["sink_errors"] == 1

    def test_unprintable_writer_error_reported(self, capsys):
        logger, _ = make_logger(console=UnprintableFailureConsole())

        assert logger.warn("x") is logger
        assert "Writer error: console:error: UnprintableError" in capsys.readouterr().err
        assert logger.get_metrics()["sink_errors"] == 1

    def test_invalid_path_goes_to_error_handler(self, tmp_path):
        handler = Mock()
        logger, _ = make_logger({
            "targets": [["file", "default.log"]],
            "errorHandler": handler,
        })

        assert logger.file(str(tmp_path / "bad\0name.log"), "x") is logger
        error = handler.call_args[0][0]
        assert isinstance(error, SinkWriteError)
        assert error.level == LogLevel.FILE
        assert isinstance(error.cause, ValueError)

    def test_unencodable_message_goes_to_error_handler(self, tmp_path):
        handler = Mock()
        logger, _ = make_logger({
            "targets": [["*", "app.log", "%m"]],
            "logLocation": str(tmp_path),
            "errorHandler": handler,
        })

        assert logger.info("name \udcff") is logger
        error = handler.call_args[0][0]
        assert isinstance(error, SinkWriteError)
        assert isinstance(error.cause, UnicodeEncodeError)
        assert logger.get_metrics()["sink_errors"] == 1

    def test_unprintable_arguments_render_fallback(self):
        logger, console = make_logger({"format": "%m"})
        logger.info({"k": UnprintableValue()})
        logger.info(UnprintableError())

        assert console.lines() == ["dict(k)", "UnprintableError()"]


class TestMetrics:
    """Test logger metrics."""

    def test_counters(self):
        logger, _ = make_logger({"keepLast": 1})
        logger.info("a").info("b").trace("hidden")

        metrics = logger.get_metrics()
        assert metrics["logged"] == 2
        assert metrics["suppressed"] == 1
        assert metrics["dispatched"] == 2
        assert metrics["retained"] == 2
        assert metrics["evicted"] == 1


class TestLoggerBuilder:
    """Test fluent logger construction."""

    def test_builder(self, tmp_path):
        console = RecordingConsole()
        logger = (LoggerBuilder()
            .with_target("error,fatal", "?consoleerror", "E %m")
            .with_target("*", "all.log")
            .with_format("%L %m%E")
            .with_log_location(str(tmp_path))
            .with_keep_last(3)
            .with_debug(True, level=2)
            .with_console(console)
            .with_identity(IDENTITY)
            .build())

        logger.error("boom").debug_level(5, "too deep")

        assert console.calls == [("error", ("E boom",))]
        assert (tmp_path / "all.log").read_text() == "error boom\n"
        assert [e.message for e in logger.get_entries()] == ["E boom"]

    def test_builder_defaults_to_console_routing(self):
        logger = LoggerBuilder().with_identity(IDENTITY).build()
        assert [route.sink for route in logger.routes] == [
            "?consolelog", "?consoleerror", "?consoletrace",
        ]

    def test_config_object(self):
        console = RecordingConsole()
        logger = Logger(LoggerConfig.debug_config(), console=console, identity=IDENTITY)
        logger.trace("t")
        assert console.channels() == ["trace"]
