"""Build status message formatting.

MessageFormatter turns a BuildContext and an optional custom template into
the Markdown text sent to Telegram:

    ❌ Build *FAILURE*

    *Job:* backend/deploy\\_prod
    *Build:* #42
    *Duration:* 1m 5s
    *Started by:* Started by user admin

    <custom message>

    [View build](https://ci.example.com/job/deploy_prod/42/)
"""

import threading
from typing import Any, Dict, Iterable, Mapping, Optional

from telegram_notifier.domain.models import BuildContext, Outcome
from telegram_notifier.logging import LoggerLike, get_logger

from .duration import format_duration
from .exceptions import MessageTemplateError
from .markdown import DEFAULT_ESCAPED_CHARS, escape_markdown, truncate_message
from .templates import TemplateRenderer, substitute_placeholders

logger = get_logger(__name__, component="formatting")

INVALID_BUILD_MESSAGE = "Invalid build information"

GLYPH_UNKNOWN = "\u2753"  # question mark

STATUS_GLYPHS: Mapping[Outcome, str] = {
    Outcome.SUCCESS: "\u2705",  # check mark
    Outcome.FAILURE: "\u274C",  # cross mark
    Outcome.UNSTABLE: "\u26A0\uFE0F",  # warning sign
    Outcome.ABORTED: "\U0001F6D1",  # stop sign
    Outcome.NOT_BUILT: "\u23F8\uFE0F",  # pause
}


def glyph_for(outcome: Optional[Outcome]) -> str:
    """Get the status glyph for an outcome (❓ when absent or unmapped)."""
    if outcome is None:
        return GLYPH_UNKNOWN
    return STATUS_GLYPHS.get(outcome, GLYPH_UNKNOWN)


class MessageFormatter:
    """Formats build notifications as Telegram Markdown.

    Stateless apart from its immutable settings, so one instance can be
    shared by any number of concurrent notification attempts.
    """

    def __init__(
        self,
        template_renderer: Optional[TemplateRenderer] = None,
        escaped_chars: Iterable[str] = DEFAULT_ESCAPED_CHARS,
        logger_instance: Optional[LoggerLike] = None,
    ):
        """Initialize the formatter.

        Args:
            template_renderer: Renderer for the status header (creates default if None)
            escaped_chars: Characters escaped in the job name and cause
            logger_instance: Logger instance (uses module logger if None)
        """
        self.escaped_chars = tuple(escaped_chars)
        self.template_renderer = template_renderer or TemplateRenderer(
            escaped_chars=self.escaped_chars
        )
        self.logger = logger_instance or logger

    def format_message(
        self, context: Optional[BuildContext], custom_message: Optional[str] = None
    ) -> str:
        """Format the notification text for a completed build.

        Never raises: an absent context yields a fixed sentinel, a broken
        status template yields the same layout built from plain strings.

        Args:
            context: Build facts, or None if the host could not supply them
            custom_message: Optional user template with ${...} placeholders

        Returns:
            Markdown message, at most MAX_MESSAGE_LENGTH characters
        """
        if context is None:
            return INVALID_BUILD_MESSAGE

        variables = self.build_template_context(context, custom_message)

        try:
            message = self.template_renderer.render(variables)
        except MessageTemplateError as e:
            self.logger.error(
                f"Falling back to plain message rendering: {e}",
                extra={"event": "formatting.template.failed"},
            )
            message = self._render_plain(variables)

        return truncate_message(message)

    def build_template_context(
        self, context: BuildContext, custom_message: Optional[str] = None
    ) -> Dict[str, Any]:
        """Build the variables for the status template.

        Args:
            context: Build facts
            custom_message: Optional user template

        Returns:
            Template variables; job_name and cause are still unescaped.
            custom_block is None only when the custom template is blank
        """
        custom_block = None
        if custom_message and custom_message.strip():
            custom_block = substitute_placeholders(custom_message, context)

        cause = context.cause if context.cause and context.cause.strip() else None

        return {
            "glyph": glyph_for(context.outcome),
            "status": context.status_name,
            "job_name": context.job_name,
            "build_number": context.build_number,
            "duration": format_duration(context.duration_ms),
            "cause": cause,
            "custom_block": custom_block,
            "build_url": context.url,
        }

    def _render_plain(self, variables: Dict[str, Any]) -> str:
        """Render the full layout with plain strings, without the template engine."""
        job_name = escape_markdown(variables["job_name"], self.escaped_chars)
        lines = [
            f"{variables['glyph']} Build *{variables['status']}*",
            "",
            f"*Job:* {job_name}",
            f"*Build:* #{variables['build_number']}",
            f"*Duration:* {variables['duration']}",
        ]
        if variables["cause"]:
            lines.append(f"*Started by:* {escape_markdown(variables['cause'], self.escaped_chars)}")
        if variables["custom_block"] is not None:
            lines.extend(["", variables["custom_block"]])
        lines.extend(["", f"[View build]({variables['build_url']})"])
        return "\n".join(lines)


_default_formatter: Optional[MessageFormatter] = None
_default_formatter_lock = threading.Lock()


def get_default_formatter() -> MessageFormatter:
    """Get the shared MessageFormatter, creating it on first use."""
    global _default_formatter
    with _default_formatter_lock:
        if _default_formatter is None:
            _default_formatter = MessageFormatter()
        return _default_formatter


def format_message(context: Optional[BuildContext], custom_message: Optional[str] = None) -> str:
    """Format a message with the shared default MessageFormatter."""
    return get_default_formatter().format_message(context, custom_message)
