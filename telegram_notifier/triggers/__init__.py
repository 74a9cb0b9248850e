"""Trigger evaluation: which build outcomes produce a notification."""

from .models import TRIGGER_OUTCOMES, Trigger, should_notify, triggers_from_flags

__all__ = [
    "Trigger",
    "TRIGGER_OUTCOMES",
    "should_notify",
    "triggers_from_flags",
]
