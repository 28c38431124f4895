"""Structured logging for Jumpgate.

Log entries carry a ``LogContext`` naming the component (chain, bridge,
vault), the operation and, where one exists, the transaction and contract
involved. A single process-wide ``LogManager`` routes entries to its
handlers; modules hold a late-binding logger from ``get_logger(__name__)``
so they follow whatever manager ``setup_logging`` installs.
"""

import sys
import threading
import time
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .formatters import LogFormatter
    from .handlers import LogHandler


class LogLevel(Enum):
    """Log levels, least severe first."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {level: rank for rank, level in enumerate(LogLevel)}


@dataclass
class LogContext:
    """Where a log entry comes from."""

    component: Optional[str] = None
    operation: Optional[str] = None
    chain_id: Optional[int] = None
    tx_hash: Optional[str] = None
    contract: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def merged_with(self, other: "LogContext") -> "LogContext":
        """Layer ``other`` on top of this context; its set fields win."""
        merged = {
            f.name: getattr(other, f.name)
            if getattr(other, f.name) is not None
            else getattr(self, f.name)
            for f in fields(self)
            if f.name != "metadata"
        }
        return LogContext(metadata={**self.metadata, **other.metadata}, **merged)


@dataclass
class LogEntry:
    timestamp: float
    level: LogLevel
    message: str
    logger_name: str
    context: LogContext
    exception: Optional[BaseException] = None
    thread_id: int = field(default_factory=threading.get_ident)

    def to_dict(self) -> Dict[str, Any]:
        exception = None
        if self.exception is not None:
            exception = {"type": type(self.exception).__name__, "message": str(self.exception)}
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "message": self.message,
            "logger_name": self.logger_name,
            "context": self.context.to_dict(),
            "exception": exception,
            "thread_id": self.thread_id,
        }


@dataclass
class LogConfig:
    """Logging configuration.

    ``format_type`` picks the console formatter (``"text"`` or ``"json"``);
    ``console=False`` starts without a console handler.
    """

    level: LogLevel = LogLevel.INFO
    format_type: str = "text"
    console: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogConfig":
        return cls(
            level=LogLevel(data.get("level", LogLevel.INFO.value)),
            format_type=data.get("format_type", "text"),
            console=data.get("console", True),
        )


class LogManager:
    """Routes log entries from named loggers to every registered handler."""

    def __init__(self, config: Optional[LogConfig] = None):
        from .formatters import JSONFormatter, TextFormatter
        from .handlers import ConsoleHandler

        self.config = config or LogConfig()
        self.loggers: Dict[str, "JumpgateLogger"] = {}
        self.handlers: Dict[str, "LogHandler"] = {}
        self.formatters: Dict[str, "LogFormatter"] = {
            "json": JSONFormatter(),
            "text": TextFormatter(),
        }
        self._context = LogContext()
        self._lock = threading.RLock()

        if self.config.console:
            console = ConsoleHandler()
            console.set_formatter(
                self.formatters.get(self.config.format_type, self.formatters["text"])
            )
            self.handlers["console"] = console

    def get_logger(self, name: str) -> "JumpgateLogger":
        with self._lock:
            logger = self.loggers.get(name)
            if logger is None:
                logger = self.loggers[name] = JumpgateLogger(name, self, self.config.level)
            return logger

    def add_handler(self, name: str, handler: "LogHandler") -> None:
        with self._lock:
            self.handlers[name] = handler

    def remove_handler(self, name: str) -> None:
        with self._lock:
            handler = self.handlers.pop(name, None)
        if handler is not None:
            handler.close()

    def set_context(self, context: LogContext) -> None:
        """Context merged into every entry, e.g. the chain id of a simulation."""
        with self._lock:
            self._context = context

    def get_context(self) -> LogContext:
        return self._context

    def dispatch(self, entry: LogEntry) -> None:
        with self._lock:
            handlers = list(self.handlers.values())
        for handler in handlers:
            handler.handle(entry)

    def shutdown(self) -> None:
        with self._lock:
            handlers = list(self.handlers.values())
            self.handlers.clear()
            self.loggers.clear()
        for handler in handlers:
            handler.close()


class JumpgateLogger:
    """Named logger bound to a ``LogManager``."""

    def __init__(self, name: str, manager: LogManager, level: LogLevel = LogLevel.INFO):
        self.name = name
        self.manager = manager
        self.level = level

    def set_level(self, level: LogLevel) -> None:
        self.level = level

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.severity >= self.level.severity

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        exception: Optional[BaseException] = None,
    ) -> None:
        if not self.is_enabled_for(level):
            return

        base = self.manager.get_context()
        self.manager.dispatch(
            LogEntry(
                timestamp=time.time(),
                level=level,
                message=message,
                logger_name=self.name,
                context=base.merged_with(context) if context is not None else base,
                exception=exception,
            )
        )

    def trace(self, message: str, **kwargs) -> None:
        self.log(LogLevel.TRACE, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self.log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.log(LogLevel.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs) -> None:
        self.log(LogLevel.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log at error level, attaching the exception being handled."""
        kwargs.setdefault("exception", sys.exc_info()[1])
        self.log(LogLevel.ERROR, message, **kwargs)


_global_manager: Optional[LogManager] = None
_global_lock = threading.Lock()


def _manager() -> LogManager:
    global _global_manager
    with _global_lock:
        if _global_manager is None:
            _global_manager = LogManager()
        return _global_manager


class LoggerProxy:
    """Resolves its ``JumpgateLogger`` from the active manager on every call."""

    def __init__(self, name: str):
        self.name = name

    def __getattr__(self, attr: str) -> Any:
        return getattr(_manager().get_logger(self.name), attr)


def get_logger(name: str = "jumpgate") -> LoggerProxy:
    return LoggerProxy(name)


def setup_logging(config: LogConfig) -> LogManager:
    """Replace the process-wide manager with one built from ``config``."""
    global _global_manager
    with _global_lock:
        if _global_manager is not None:
            _global_manager.shutdown()
        _global_manager = LogManager(config)
        return _global_manager


def shutdown_logging() -> None:
    """Close all handlers; the next log call starts a default manager."""
    global _global_manager
    with _global_lock:
        if _global_manager is not None:
            _global_manager.shutdown()
            _global_manager = None
