"""Jumpgate Logging System.

Structured logging with JSON and text formatting, console and in-memory
handlers, and a process-wide log manager.
"""

from .core import (
    JumpgateLogger,
    LogConfig,
    LogContext,
    LogEntry,
    LogLevel,
    LogManager,
    get_logger,
    setup_logging,
    shutdown_logging,
)
from .formatters import JSONFormatter, LogFormatter, TextFormatter
from .handlers import ConsoleHandler, LogHandler, MemoryHandler

__all__ = [
    # Core
    "LogLevel",
    "LogConfig",
    "LogContext",
    "LogEntry",
    "LogManager",
    "JumpgateLogger",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    # Formatters
    "LogFormatter",
    "JSONFormatter",
    "TextFormatter",
    # Handlers
    "LogHandler",
    "ConsoleHandler",
    "MemoryHandler",
]
