"""Tests for structured logging and stream session context."""

import json
import logging
import sys

import pytest

from src.logging_config.config import LogFormat, LoggingConfig, LogLevel
from src.logging_config.context import (
    StreamContext,
    generate_session_id,
    get_context_dict,
    get_session_id,
    get_subscriber,
)
from src.logging_config.performance import log_performance
from src.logging_config.setup import (
    ConsoleFormatter,
    StructuredFormatter,
    configure_logging,
    get_logger,
)


def _record(msg="test", level=logging.INFO, name="test", lineno=1, exc_info=None):
    return logging.LogRecord(
        name=name, level=level, pathname="test.py",
        lineno=lineno, msg=msg, args=(), exc_info=exc_info,
    )


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLoggingConfig:
    """Tests for logging configuration dataclasses."""

    def test_default_config_values(self):
        config = LoggingConfig()
        assert config.level == LogLevel.INFO
        assert config.format == LogFormat.CONSOLE
        assert config.include_caller is True
        assert config.slow_threshold_ms == 2000.0
        assert config.service_name == "signalstream"

    def test_quiet_loggers_default(self):
        config = LoggingConfig()
        assert "websockets" in config.quiet_loggers
        assert "httpx" in config.quiet_loggers

    def test_log_format_enum_values(self):
        assert LogFormat.JSON.value == "json"
        assert LogFormat.CONSOLE.value == "console"


class TestStreamContext:
    """Tests for stream session context propagation."""

    def test_generate_session_id_unique(self):
        ids = {generate_session_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(len(i) == 12 for i in ids)

    def test_context_sets_session_and_subscriber(self):
        with StreamContext(session_id="sess-1", subscriber="elite"):
            assert get_session_id() == "sess-1"
            assert get_subscriber() == "elite"

    def test_auto_generates_session_id(self):
        with StreamContext() as ctx:
            assert ctx.session_id
            assert get_session_id() == ctx.session_id

    def test_context_cleanup_on_exit(self):
        with StreamContext(session_id="temp", extra={"endpoint": "ws://x"}):
            pass
        assert get_session_id() == ""
        assert get_context_dict() == {}

    def test_get_context_dict(self):
        with StreamContext(session_id="s", subscriber="pro", extra={"endpoint": "ws://x"}):
            ctx = get_context_dict()
        assert ctx == {"session_id": "s", "subscriber": "pro", "endpoint": "ws://x"}

    def test_bind_extra_context(self):
        with StreamContext(session_id="s") as ctx:
            ctx.bind(symbol="BTCUSDT")
            assert get_context_dict()["symbol"] == "BTCUSDT"
            assert ctx.extra == {"symbol": "BTCUSDT"}

    def test_nested_contexts(self):
        with StreamContext(session_id="outer"):
            with StreamContext(session_id="inner"):
                assert get_session_id() == "inner"
            assert get_session_id() == "outer"

    def test_elapsed_seconds(self):
        ctx = StreamContext()
        assert ctx.elapsed_seconds >= 0


class TestStructuredFormatter:
    """Tests for JSON structured log formatting."""

    def test_formats_as_json(self):
        parsed = json.loads(StructuredFormatter().format(_record("hello world")))
        assert parsed["message"] == "hello world"
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test"
        assert parsed["service"] == "signalstream"
        assert "timestamp" in parsed

    def test_caller_info_toggle(self):
        with_caller = json.loads(StructuredFormatter(include_caller=True).format(_record(lineno=42)))
        without = json.loads(StructuredFormatter(include_caller=False).format(_record(lineno=42)))
        assert with_caller["line"] == 42
        assert "line" not in without

    def test_includes_stream_context(self):
        with StreamContext(session_id="ctx-test", subscriber="elite"):
            parsed = json.loads(StructuredFormatter().format(_record()))
        assert parsed["session_id"] == "ctx-test"
        assert parsed["subscriber"] == "elite"

    def test_formats_exception(self):
        try:
            raise ValueError("bad frame")
        except ValueError:
            record = _record("failed", level=logging.ERROR, exc_info=sys.exc_info())
        parsed = json.loads(StructuredFormatter().format(record))
        assert parsed["exception"]["type"] == "ValueError"
        assert "bad frame" in parsed["exception"]["message"]

    def test_includes_known_extra_fields(self):
        record = _record()
        record.attempt = 3
        record.delay_s = 4.0
        record.symbol = "BTCUSDT"
        record.unrelated = "dropped"
        parsed = json.loads(StructuredFormatter().format(record))
        assert parsed["attempt"] == 3
        assert parsed["delay_s"] == 4.0
        assert parsed["symbol"] == "BTCUSDT"
        assert "unrelated" not in parsed


class TestConsoleFormatter:
    """Tests for colored console log formatting."""

    def test_formats_readable_output(self):
        output = ConsoleFormatter().format(_record("hello", name="src.live_stream"))
        assert "src.live_stream" in output
        assert "hello" in output

    def test_includes_context_info(self):
        with StreamContext(session_id="abc"):
            output = ConsoleFormatter().format(_record())
        assert "session_id=abc" in output

    def test_has_color_codes(self):
        output = ConsoleFormatter().format(_record(level=logging.ERROR))
        assert "\033[31m" in output  # Red for ERROR

    def test_plain_output_without_color(self):
        output = ConsoleFormatter(use_color=False).format(_record(level=logging.ERROR))
        assert "\033[" not in output
        assert "ERROR" in output

    def test_includes_stream_extras(self):
        record = _record("Reconnecting")
        record.attempt = 2
        record.delay_s = 2.0
        output = ConsoleFormatter(use_color=False).format(record)
        assert "attempt=2" in output
        assert "delay_s=2.0" in output


class TestConfigureLogging:
    """Tests for the configure_logging setup function."""

    def test_configures_root_logger(self, restore_root_logger):
        configure_logging(LoggingConfig(format=LogFormat.CONSOLE))
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, ConsoleFormatter)

    def test_json_format(self, restore_root_logger):
        configure_logging(LoggingConfig(format=LogFormat.JSON))
        assert isinstance(restore_root_logger.handlers[0].formatter, StructuredFormatter)

    def test_sets_log_level(self, restore_root_logger):
        configure_logging(LoggingConfig(level=LogLevel.DEBUG))
        assert restore_root_logger.level == logging.DEBUG

    def test_quiets_noisy_loggers(self, restore_root_logger):
        configure_logging()
        assert logging.getLogger("websockets").level >= logging.WARNING

    def test_env_var_override_level(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("SIGNALSTREAM_LOG_LEVEL", "debug")
        configure_logging(LoggingConfig(level=LogLevel.ERROR))
        assert restore_root_logger.level == logging.DEBUG

    def test_env_var_override_format(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("SIGNALSTREAM_LOG_FORMAT", "JSON")
        configure_logging(LoggingConfig(format=LogFormat.CONSOLE))
        assert isinstance(restore_root_logger.handlers[0].formatter, StructuredFormatter)

    def test_invalid_env_values_ignored(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("SIGNALSTREAM_LOG_LEVEL", "chatty")
        configure_logging(LoggingConfig(level=LogLevel.WARNING))
        assert restore_root_logger.level == logging.WARNING

    def test_get_logger_returns_logger(self):
        logger = get_logger("src.live_stream.client")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "src.live_stream.client"


class TestPerformanceLogging:
    """Tests for the async timing decorator."""

    @pytest.mark.asyncio
    async def test_returns_result(self):
        @log_performance(threshold_ms=10000)
        async def fetch():
            return "ok"

        assert await fetch() == "ok"

    def test_preserves_name(self):
        @log_performance()
        async def get_status():
            """Fetch status."""

        assert get_status.__name__ == "get_status"
        assert get_status.__doc__ == "Fetch status."

    @pytest.mark.asyncio
    async def test_reraises_exception(self, caplog):
        @log_performance(threshold_ms=0, logger_name="perf.test")
        async def failing():
            raise RuntimeError("backend down")

        with caplog.at_level(logging.DEBUG, logger="perf.test"):
            with pytest.raises(RuntimeError, match="backend down"):
                await failing()
        levels = [r.levelno for r in caplog.records if r.name == "perf.test"]
        assert levels == [logging.ERROR]

    @pytest.mark.asyncio
    async def test_slow_call_warns(self, caplog):
        @log_performance(threshold_ms=0, logger_name="perf.test")
        async def slow():
            return 1

        with caplog.at_level(logging.DEBUG, logger="perf.test"):
            await slow()
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert hasattr(warnings[0], "duration_ms")
