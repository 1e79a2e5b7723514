"""Structured logging for the live signal stream client.

JSON or console output, stream-session context binding and
timing of backend calls.
"""

from src.logging_config.config import LogFormat, LoggingConfig, LogLevel
from src.logging_config.context import StreamContext, generate_session_id
from src.logging_config.performance import log_performance
from src.logging_config.setup import configure_logging, get_logger

__all__ = [
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "StreamContext",
    "configure_logging",
    "generate_session_id",
    "get_logger",
    "log_performance",
]
