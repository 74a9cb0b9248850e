"""Telegram Markdown helpers: escaping and length bounding."""

from typing import Iterable, Optional

from telegram_notifier.config.telegram import MAX_MESSAGE_LENGTH, TRUNCATION_SUFFIX

# Underscore toggles italics in Telegram's legacy Markdown; the parser is
# lenient enough with the other delimiters for job names and causes.
DEFAULT_ESCAPED_CHARS = ("_",)


def escape_markdown(text: Optional[str], escaped_chars: Iterable[str] = DEFAULT_ESCAPED_CHARS) -> str:
    """
    Escape Markdown-significant characters so they render literally.

    Args:
        text: Text to escape (None is treated as empty)
        escaped_chars: Characters to prefix with a backslash

    Returns:
        Escaped text, e.g. "My_Job" -> "My\\_Job"
    """
    if text is None:
        return ""

    for char in escaped_chars:
        text = text.replace(char, "\\" + char)
    return text


def truncate_message(message: Optional[str]) -> str:
    """
    Bound a message to the maximum length accepted by Telegram.

    Longer messages are cut so that the truncation marker still fits and
    the result is exactly MAX_MESSAGE_LENGTH characters.

    Args:
        message: Message to bound (None is treated as empty)

    Returns:
        The message unchanged if short enough, else the cut message ending
        with the truncation marker
    """
    if message is None:
        return ""

    if len(message) <= MAX_MESSAGE_LENGTH:
        return message

    max_length = MAX_MESSAGE_LENGTH - len(TRUNCATION_SUFFIX)
    return message[:max_length] + TRUNCATION_SUFFIX
