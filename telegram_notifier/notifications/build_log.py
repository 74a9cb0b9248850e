"""Build log sinks: where human-readable progress lines go.

The host build system owns the console log of a build; the notifier only
writes lines to it through the BuildLog protocol.
"""

import logging
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from telegram_notifier.logging import LoggerLike, get_logger

LINE_PREFIX = "Telegram Notifier: "


@runtime_checkable
class BuildLog(Protocol):
    """Receives progress and diagnostic lines for one build."""

    def info(self, line: str) -> None:
        ...

    def error(self, line: str) -> None:
        ...


class LoggerBuildLog:
    """BuildLog that forwards lines to a Python logger."""

    def __init__(self, logger_instance: Optional[LoggerLike] = None):
        """Initialize the build log.

        Args:
            logger_instance: Logger receiving the lines (uses a build_log logger if None)
        """
        self.logger = logger_instance or get_logger(__name__, component="build_log")

    def info(self, line: str) -> None:
        """Write an informational line.

        Args:
            line: Text of the line, without trailing newline
        """
        self.logger.info(line, extra={"event": "build_log.line"})

    def error(self, line: str) -> None:
        """Write an error line.

        Args:
            line: Text of the line, without trailing newline
        """
        self.logger.error(line, extra={"event": "build_log.line"})


class MemoryBuildLog:
    """BuildLog that keeps lines in memory, in order, with their level."""

    def __init__(self):
        """Initialize an empty build log."""
        self.lines: List[Tuple[int, str]] = []

    def info(self, line: str) -> None:
        """Record a line at info level.

        Args:
            line: Text of the line
        """
        self.lines.append((logging.INFO, line))

    def error(self, line: str) -> None:
        """Record a line at error level.

        Args:
            line: Text of the line
        """
        self.lines.append((logging.ERROR, line))

    @property
    def text(self) -> str:
        """All lines joined with newlines."""
        return "\n".join(line for _, line in self.lines)

    def errors(self) -> List[str]:
        """Lines written at error level."""
        return [line for level, line in self.lines if level == logging.ERROR]
