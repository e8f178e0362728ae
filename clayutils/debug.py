"""Debug-message formatting, simple logging and small bit-twiddling helpers."""

from __future__ import annotations

import enum
import sys
from typing import Iterable, Optional, TextIO


class Severity(enum.IntFlag):
    """Severity bits of a runtime debug message."""

    VERBOSE = 0x0001
    INFO = 0x0010
    WARNING = 0x0100
    ERROR = 0x1000


class MessageType(enum.IntFlag):
    """Type bits of a runtime debug message."""

    GENERAL = 0x0001
    VALIDATION = 0x0002
    PERFORMANCE = 0x0004
    CONFORMANCE = 0x0008


_SEVERITY_LABELS = (
    (Severity.VERBOSE, "VERBOSE"),
    (Severity.INFO, "INFO"),
    (Severity.WARNING, "WARN"),
    (Severity.ERROR, "ERROR"),
)

_TYPE_LABELS = (
    (MessageType.GENERAL, "GEN"),
    (MessageType.VALIDATION, "SPEC"),
    (MessageType.PERFORMANCE, "PERF"),
)


def bitwise_check(value: int, check_value: int) -> bool:
    """True if every bit of ``check_value`` is set in ``value``."""
    return (int(value) & int(check_value)) == int(check_value)


def align(value: int, alignment: int) -> int:
    """Round ``value`` up to a multiple of ``alignment`` (a power of two)."""
    if alignment <= 0 or alignment & (alignment - 1):
        raise ValueError(f"alignment must be a positive power of two, got {alignment}")
    return (value + (alignment - 1)) & ~(alignment - 1)


def contains_string(items: Iterable[str], name: str) -> bool:
    """True if ``name`` equals one of ``items``."""
    return any(item == name for item in items)


def severity_names(severity: int) -> str:
    """Comma-separated labels of the severity bits set in ``severity``."""
    return ",".join(label for flag, label in _SEVERITY_LABELS if bitwise_check(severity, flag))


def message_type_names(message_type: int) -> str:
    """Comma-separated labels of the message-type bits set in ``message_type``."""
    return ",".join(label for flag, label in _TYPE_LABELS if bitwise_check(message_type, flag))


def format_debug_message(
    function_name: Optional[str],
    severity: int,
    message_type: int,
    message_id: Optional[str],
    message: Optional[str],
) -> str:
    """Build the one-line report for a runtime debug message; missing parts become empty."""
    return (
        f"{function_name or ''}({severity_names(severity)} / {message_type_names(message_type)})"
        f": msgNum: {message_id or ''} - {message or ''}"
    )


def _log(prefix: str, message: str, stream: Optional[TextIO]) -> None:
    target = sys.stdout if stream is None else stream
    target.write(f"{prefix}{message}\n")


def log_info(message: str, stream: Optional[TextIO] = None) -> None:
    """Write an informational line to ``stream`` (standard output by default)."""
    _log("Info: ", message, stream)


def log_warning(message: str, stream: Optional[TextIO] = None) -> None:
    """Write a warning line to ``stream`` (standard output by default)."""
    _log("Warning: ", message, stream)


def log_error(message: str, stream: Optional[TextIO] = None) -> None:
    """Write an error line to ``stream`` (standard output by default)."""
    _log("Error: ", message, stream)


class LineSplitter:
    """Collects text written in arbitrary pieces and hands back complete lines."""

    def __init__(self) -> None:
        self._buffer = ""

    def feed(self, text: str) -> list[str]:
        """Add ``text`` and return every line it completes, without newlines."""
        self._buffer += text
        *lines, self._buffer = self._buffer.split("\n")
        return lines

    def pending(self) -> str:
        """Text received after the last newline."""
        return self._buffer