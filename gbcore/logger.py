"""Category-based logging to standard output."""

from __future__ import annotations

import sys
from enum import Enum
from typing import Any, TextIO

# Messages are cut to fit a buffer of this many bytes, terminator included.
_BUFFER_SIZE = 8192


class LogType(Enum):
    """Categories of log output, each switched on separately."""

    WARN = "warn"
    DEBUG = "debug"
    CPU = "cpu"
    INTERRUPTS = "interrupts"
    IO = "io"
    VIDEO = "video"
    MEMORY = "memory"


class Logger:
    """Writes printf-style messages for the categories that are enabled."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._enabled: set[LogType] = set()

    def enable_logging(self, log_type: LogType, enable: bool) -> None:
        """Switch one category on or off."""
        if enable:
            self._enabled.add(log_type)
        else:
            self._enabled.discard(log_type)

    def is_enabled(self, log_type: LogType) -> bool:
        return log_type in self._enabled

    def str_format(self, fmt: str, args: tuple[Any, ...]) -> str:
        """Apply printf-style formatting, truncated to the message buffer."""
        message = fmt % tuple(args)
        return message[: _BUFFER_SIZE - 1]

    def log(self, log_type: LogType, fmt: str, *args: Any, newline: bool = True) -> None:
        """Write a message if its category is enabled."""
        if log_type not in self._enabled:
            return
        message = self.str_format(fmt, args)
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(message + "\n" if newline else message)


logger = Logger()


def enable_logging(log_type: LogType, enable: bool) -> None:
    """Switch a category on or off on the shared logger."""
    logger.enable_logging(log_type, enable)


def log_warn(fmt: str, *args: Any) -> None:
    logger.log(LogType.WARN, fmt, *args)


def log_debug(fmt: str, *args: Any) -> None:
    logger.log(LogType.DEBUG, fmt, *args)


def log_cpu(fmt: str, *args: Any) -> None:
    logger.log(LogType.CPU, fmt, *args)


def log_interrupts(fmt: str, *args: Any) -> None:
    logger.log(LogType.INTERRUPTS, fmt, *args)