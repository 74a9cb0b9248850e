"""Custom exceptions for message formatting."""


class FormattingError(Exception):
    """Base exception for message formatting errors."""

    pass


class MessageTemplateError(FormattingError):
    """Raised when the packaged status template cannot be loaded or rendered."""

    pass
