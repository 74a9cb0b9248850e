"""Notification service for sending Telegram alerts about completed builds.

This module provides the notification pipeline entry point:
- BuildNotifier: trigger check, credential lookup, formatting and delivery
- NotificationResult: diagnostic outcome of one attempt
- BuildLog: protocol for the host's per-build log sink
"""

from .build_log import LINE_PREFIX, BuildLog, LoggerBuildLog, MemoryBuildLog
from .models import (
    STATUS_FAILED,
    STATUS_MISSING_CREDENTIALS,
    STATUS_SENT,
    STATUS_SKIPPED,
    NotificationResult,
)
from .service import BuildNotifier

__all__ = [
    # Main service
    "BuildNotifier",
    # Models and results
    "NotificationResult",
    "STATUS_SKIPPED",
    "STATUS_MISSING_CREDENTIALS",
    "STATUS_SENT",
    "STATUS_FAILED",
    # Build log sinks
    "BuildLog",
    "LoggerBuildLog",
    "MemoryBuildLog",
    "LINE_PREFIX",
]
