"""Data models for the notification service.

This module defines the result type returned by BuildNotifier.notify()
and the status values it can carry.
"""

from dataclasses import dataclass
from typing import Optional

from telegram_notifier.delivery.models import DeliveryResult

STATUS_SKIPPED = "skipped"
STATUS_MISSING_CREDENTIALS = "missing_credentials"
STATUS_SENT = "sent"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class NotificationResult:
    """Diagnostic outcome of one notification attempt.

    Never affects the status of the build being reported on; it only
    records what happened for logs and tests.

    Attributes:
        job_name: Job the build belongs to (None if no context was given)
        build_number: Build number (None if no context was given)
        status: Outcome status (skipped, missing_credentials, sent, failed)
        reason: Optional explanation for skipped/failed attempts
        delivery: DeliveryResult when delivery was attempted
    """

    job_name: Optional[str]
    build_number: Optional[int]
    status: str
    reason: Optional[str] = None
    delivery: Optional[DeliveryResult] = None

    def is_success(self) -> bool:
        """Check if the notification was delivered."""
        return self.status == STATUS_SENT

    def delivery_attempted(self) -> bool:
        """Check if a request was handed to the delivery client."""
        return self.delivery is not None
