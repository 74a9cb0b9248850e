"""Test helper utilities for the build notifier tests."""

from .recording_adapter import RecordingAdapter, form_fields, session_factory

__all__ = ["RecordingAdapter", "form_fields", "session_factory"]
