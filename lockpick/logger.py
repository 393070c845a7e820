"""Leveled logger writing entries built from a wildcard format string."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, List, Optional, TextIO, Union

DEFAULT_FORMAT = "[%H:%M:%s] %L: %u"


class LogLevel(IntEnum):
    """Severity thresholds; a logger emits entries at or above its level."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4
    OFF = 5


class LogFormatError(ValueError):
    """Raised when a log entry format string is malformed."""


def _styled(text: str, color_code: int) -> str:
    return f"\033[1;{color_code}m{text}\033[0m"


LEVEL_LABELS = {
    LogLevel.DEBUG: _styled("DEBUG", 37),
    LogLevel.INFO: _styled("INFO", 34),
    LogLevel.WARNING: _styled("WARNING", 33),
    LogLevel.ERROR: _styled("ERROR", 31),
    LogLevel.CRITICAL: _styled("CRITICAL", 35),
}

_TIME_WILDCARDS = frozenset("sMHdmy")


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str = ""


def _two_digits(value: int) -> str:
    return f"{value // 10 % 10}{value % 10}"


def _parse_format(fmt: str) -> List[_Token]:
    tokens: List[_Token] = []
    literal: List[str] = []
    user_count = 0
    level_count = 0
    chars = iter(fmt)
    for char in chars:
        if char != "%":
            literal.append(char)
            continue
        wildcard = next(chars, None)
        if wildcard is None:
            raise LogFormatError("Unexpected end of format string")
        if wildcard == "%":
            literal.append("%")
            continue
        if wildcard == "L":
            level_count += 1
            if level_count > 1:
                raise LogFormatError(
                    "Log entry format can't contain more than one log level string wildcard (%L)"
                )
        elif wildcard == "u":
            user_count += 1
            if user_count > 1:
                raise LogFormatError(
                    "Log entry format can't contain more than one user message wildcard (%u)"
                )
        elif wildcard not in _TIME_WILDCARDS:
            raise LogFormatError(f"Unexpected wildcard '%{wildcard}'")
        if literal:
            tokens.append(_Token("text", "".join(literal)))
            literal.clear()
        tokens.append(_Token(wildcard))
    if literal:
        tokens.append(_Token("text", "".join(literal)))
    if user_count != 1:
        raise LogFormatError(
            "Log entry format string must contain exactly one user message wildcard (%u)"
        )
    if level_count != 1:
        raise LogFormatError(
            "Log entry format string must contain exactly one log level string wildcard (%L)"
        )
    return tokens


def _to_level(level: Union[LogLevel, int]) -> LogLevel:
    try:
        return LogLevel(level)
    except ValueError:
        raise ValueError(f"Invalid level {level}") from None


class Logger:
    """Writes formatted entries whose level reaches the configured threshold."""

    def __init__(
        self,
        fmt: str = DEFAULT_FORMAT,
        level: Union[LogLevel, int] = LogLevel.DEBUG,
        stream: Optional[TextIO] = None,
    ) -> None:
        if fmt is None:
            raise ValueError("Expected log entry format string, but got None")
        self.format = fmt
        self._tokens = _parse_format(fmt)
        self.level = _to_level(level)
        self._stream = stream
        self.last_log_ts: Optional[float] = None

    @property
    def stream(self) -> TextIO:
        """Destination of entries; standard error unless one was given."""
        return self._stream if self._stream is not None else sys.stderr

    def set_level(self, level: Union[LogLevel, int]) -> None:
        """Change the minimal level of entries that get written."""
        self.level = _to_level(level)

    def format_entry(
        self,
        message: str,
        level: Union[LogLevel, int],
        timestamp: Optional[float] = None,
    ) -> str:
        """Build the entry text for ``message`` at ``level`` and local ``timestamp``."""
        level = _to_level(level)
        if level is LogLevel.OFF:
            raise ValueError("Entries can't be formatted at level OFF")
        moment = time.localtime(time.time() if timestamp is None else timestamp)
        parts = []
        for token in self._tokens:
            kind = token.kind
            if kind == "text":
                parts.append(token.text)
            elif kind == "u":
                parts.append(message)
            elif kind == "L":
                parts.append(LEVEL_LABELS[level])
            elif kind == "s":
                parts.append(_two_digits(moment.tm_sec))
            elif kind == "M":
                parts.append(_two_digits(moment.tm_min))
            elif kind == "H":
                parts.append(_two_digits(moment.tm_hour))
            elif kind == "d":
                parts.append(_two_digits(moment.tm_mday))
            elif kind == "m":
                # Months are counted from zero, as in the broken-down time structure.
                parts.append(_two_digits(moment.tm_mon - 1))
            elif kind == "y":
                parts.append(f"{moment.tm_year % 10000:04d}")
        return "".join(parts)

    def _log(self, level: LogLevel, message: str, args: tuple) -> None:
        if self.level > level:
            return
        self.last_log_ts = time.time()
        text = message % args if args else message
        self.stream.write(self.format_entry(text, level, self.last_log_ts) + "\n")

    def debug(self, message: str, *args: Any) -> None:
        """Write a debug entry; ``args`` are %-formatted into ``message``."""
        self._log(LogLevel.DEBUG, message, args)

    def info(self, message: str, *args: Any) -> None:
        """Write an info entry."""
        self._log(LogLevel.INFO, message, args)

    def warning(self, message: str, *args: Any) -> None:
        """Write a warning entry."""
        self._log(LogLevel.WARNING, message, args)

    def error(self, message: str, *args: Any) -> None:
        """Write an error entry."""
        self._log(LogLevel.ERROR, message, args)

    def critical(self, message: str, *args: Any) -> None:
        """Write a critical entry."""
        self._log(LogLevel.CRITICAL, message, args)


_default_logger: Optional[Logger] = None


def init(log_level: Union[LogLevel, int] = LogLevel.DEBUG) -> Logger:
    """Create the package-wide logger; may be called only once."""
    global _default_logger
    if _default_logger is not None:
        raise RuntimeError("Multiple call for 'init' is not allowed")
    log = Logger(DEFAULT_FORMAT, log_level)
    _default_logger = log
    log.debug("Initialization successful!")
    return log


def get_logger() -> Logger:
    """Return the package-wide logger created by :func:`init`."""
    if _default_logger is None:
        raise RuntimeError("Call 'init' before using the package logger")
    return _default_logger