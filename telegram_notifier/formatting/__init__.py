"""Message formatting for build notifications.

This module provides:
- MessageFormatter: renders a BuildContext as a Telegram Markdown message
- TemplateRenderer: Jinja2 rendering of the packaged status template
- substitute_placeholders: ${...} expansion for user-supplied templates
- format_duration, escape_markdown, truncate_message: formatting helpers
"""

from .duration import format_duration
from .exceptions import FormattingError, MessageTemplateError
from .formatter import (
    INVALID_BUILD_MESSAGE,
    STATUS_GLYPHS,
    MessageFormatter,
    format_message,
    get_default_formatter,
    glyph_for,
)
from .markdown import DEFAULT_ESCAPED_CHARS, escape_markdown, truncate_message
from .templates import (
    PLACEHOLDER_TOKENS,
    TemplateRenderer,
    placeholder_values,
    substitute_placeholders,
)

__all__ = [
    # Main formatter
    "MessageFormatter",
    "format_message",
    "get_default_formatter",
    "INVALID_BUILD_MESSAGE",
    "STATUS_GLYPHS",
    "glyph_for",
    # Templates
    "TemplateRenderer",
    "PLACEHOLDER_TOKENS",
    "placeholder_values",
    "substitute_placeholders",
    # Helpers
    "format_duration",
    "escape_markdown",
    "truncate_message",
    "DEFAULT_ESCAPED_CHARS",
    # Exceptions
    "FormattingError",
    "MessageTemplateError",
]
