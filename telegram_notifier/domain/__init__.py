"""Domain models for completed builds."""

from .models import UNKNOWN_CAUSE, BuildContext, Outcome, primary_cause

__all__ = ["BuildContext", "Outcome", "UNKNOWN_CAUSE", "primary_cause"]
