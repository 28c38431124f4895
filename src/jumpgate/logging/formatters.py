"""Log formatters for Jumpgate."""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .core import LogEntry

DEFAULT_TEXT_FORMAT = "%(timestamp)s [%(level)s] %(logger)s: %(message)s"


class LogFormatter(ABC):
    """Turns a log entry into one line of output."""

    @abstractmethod
    def format(self, entry: LogEntry) -> str:
        pass


class JSONFormatter(LogFormatter):
    """One JSON object per entry.

    ``timestamp_format`` is ``"iso"`` (UTC, millisecond precision),
    ``"unix"`` or a ``strftime`` pattern.
    """

    def __init__(self, timestamp_format: str = "iso", indent: Optional[int] = None):
        self.timestamp_format = timestamp_format
        self.indent = indent

    def format(self, entry: LogEntry) -> str:
        data: Dict[str, Any] = {
            "timestamp": self._timestamp(entry.timestamp),
            "level": entry.level.value,
            "logger": entry.logger_name,
            "message": entry.message,
            # drop unset fields to keep lines short
            "context": {
                key: value
                for key, value in entry.context.to_dict().items()
                if value not in (None, {})
            },
        }
        if entry.exception is not None:
            data["exception"] = {
                "type": type(entry.exception).__name__,
                "message": str(entry.exception),
            }
        return json.dumps(data, indent=self.indent, default=str)

    def _timestamp(self, timestamp: float) -> str:
        if self.timestamp_format == "unix":
            return str(timestamp)
        moment = datetime.fromtimestamp(timestamp, timezone.utc)
        if self.timestamp_format == "iso":
            return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return moment.strftime(self.timestamp_format)


class TextFormatter(LogFormatter):
    """``%``-style line format over ``timestamp``, ``level``, ``logger``, ``message``, ``tx_hash``."""

    def __init__(
        self,
        format_string: Optional[str] = None,
        timestamp_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        self.format_string = format_string or DEFAULT_TEXT_FORMAT
        self.timestamp_format = timestamp_format

    def format(self, entry: LogEntry) -> str:
        moment = datetime.fromtimestamp(entry.timestamp, timezone.utc)
        return self.format_string % {
            "timestamp": moment.strftime(self.timestamp_format),
            "level": entry.level.name,
            "logger": entry.logger_name,
            "message": entry.message,
            "tx_hash": entry.context.tx_hash or "-",
        }
