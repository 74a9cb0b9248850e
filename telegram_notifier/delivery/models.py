"""Result type for Telegram delivery attempts."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one sendMessage attempt.

    Only used for diagnostics and logging; never persisted.

    Attributes:
        success: True iff the Bot API answered with a 2xx status
        status_code: HTTP status code, if a response was received
        error_type: Failure classification (validation, Timeout, ConnectionError, ...)
        detail: Human-readable diagnostic (response body or error message)
    """

    success: bool
    status_code: Optional[int] = None
    error_type: Optional[str] = None
    detail: Optional[str] = None

    @classmethod
    def rejected(cls, reason: str) -> "DeliveryResult":
        """Result for input rejected before any network I/O."""
        return cls(success=False, error_type="validation", detail=reason)

    def describe(self) -> str:
        """Short one-line description for log sinks."""
        if self.success:
            return f"delivered (HTTP {self.status_code})"
        if self.status_code is not None:
            return f"HTTP {self.status_code}: {self.detail}"
        return f"{self.error_type}: {self.detail}"
