"""Log handlers for Jumpgate."""

import sys
import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import IO, Any, Deque, Dict, List, Optional

from .core import LogEntry, LogLevel
from .formatters import LogFormatter, TextFormatter


class LogHandler(ABC):
    """Receives every entry the manager dispatches at or above ``level``."""

    def __init__(self, level: LogLevel = LogLevel.TRACE):
        self.level = level
        self.formatter: LogFormatter = TextFormatter()
        self._lock = threading.RLock()

    def set_formatter(self, formatter: LogFormatter) -> None:
        self.formatter = formatter

    def set_level(self, level: LogLevel) -> None:
        self.level = level

    def handle(self, entry: LogEntry) -> None:
        if entry.level.severity < self.level.severity:
            return
        with self._lock:
            self.emit(entry)

    @abstractmethod
    def emit(self, entry: LogEntry) -> None:
        pass

    def close(self) -> None:
        pass


class ConsoleHandler(LogHandler):
    """Writes formatted lines to a stream.

    Without an explicit stream it writes to whatever ``sys.stderr`` is at
    emit time, so command output on stdout stays parseable.
    """

    def __init__(self, stream: Optional[IO[str]] = None, level: LogLevel = LogLevel.TRACE):
        super().__init__(level)
        self.stream = stream
        self.closed = False

    def emit(self, entry: LogEntry) -> None:
        if self.closed:
            return
        stream = self.stream or sys.stderr
        stream.write(self.formatter.format(entry) + "\n")
        stream.flush()

    def close(self) -> None:
        self.closed = True


class MemoryHandler(LogHandler):
    """Keeps the most recent ``max_size`` entries as dictionaries."""

    def __init__(self, max_size: int = 1000, level: LogLevel = LogLevel.TRACE):
        super().__init__(level)
        self.buffer: Deque[Dict[str, Any]] = deque(maxlen=max_size)

    def emit(self, entry: LogEntry) -> None:
        self.buffer.append(entry.to_dict())

    def get_logs(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self.buffer)

    def clear_logs(self) -> None:
        with self._lock:
            self.buffer.clear()
