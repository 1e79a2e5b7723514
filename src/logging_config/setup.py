"""Logging Setup.

Installs one handler on the root logger, writing either JSON lines (for
log shipping) or colored console text. The CLI prints the signal feed on
stdout, so log output goes to stderr.
"""

import json
import logging
import os
import sys
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Optional

from src.logging_config.config import DEFAULT_LOGGING_CONFIG, LogFormat, LoggingConfig, LogLevel
from src.logging_config.context import get_context_dict

# Attributes copied from records when a call passes them via extra=
EXTRA_FIELDS = ("duration_ms", "attempt", "delay_s", "symbol", "state", "extra_data")


def _record_time(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {key: getattr(record, key) for key in EXTRA_FIELDS if hasattr(record, key)}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record.

    Carries the bound stream session (session id, subscriber, endpoint),
    any stream extras such as ``attempt`` or ``symbol``, and the
    exception, if one is attached.
    """

    def __init__(self, service_name: str = "signalstream", include_caller: bool = True):
        super().__init__()
        self.service_name = service_name
        self.include_caller = include_caller

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": _record_time(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }
        if self.include_caller:
            entry.update(module=record.module, function=record.funcName, line=record.lineno)

        entry.update(get_context_dict())
        entry.update(_record_extras(record))

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info),
            }
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored single-line output for terminals."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        stamp = _record_time(record).strftime("%H:%M:%S.%f")[:-3]
        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        text = f"{stamp} {level} {record.name}: {record.getMessage()}"

        extras = _record_extras(record)
        if extras:
            text += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        ctx = get_context_dict()
        if ctx:
            text += " [" + ", ".join(f"{k}={v}" for k, v in ctx.items()) + "]"

        if record.exc_info and record.exc_info[0] is not None:
            text += "\n" + self.formatException(record.exc_info)
        return text


def _apply_env_overrides(config: LoggingConfig) -> LoggingConfig:
    level = os.environ.get("SIGNALSTREAM_LOG_LEVEL", "").upper()
    if level in LogLevel.__members__:
        config = replace(config, level=LogLevel(level))

    fmt = os.environ.get("SIGNALSTREAM_LOG_FORMAT", "").lower()
    if fmt in {f.value for f in LogFormat}:
        config = replace(config, format=LogFormat(fmt))
    return config


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Route all stream client logging through a single stderr handler.

    Call once at startup. SIGNALSTREAM_LOG_LEVEL and SIGNALSTREAM_LOG_FORMAT
    take precedence over *config*; unrecognised values are ignored.
    """
    config = _apply_env_overrides(config or DEFAULT_LOGGING_CONFIG)

    if config.format == LogFormat.JSON:
        formatter: logging.Formatter = StructuredFormatter(
            service_name=config.service_name,
            include_caller=config.include_caller,
        )
    else:
        formatter = ConsoleFormatter(use_color=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(config.level.value)

    for name in config.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
