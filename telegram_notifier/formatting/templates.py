"""Template handling for build status messages.

Two kinds of templates are involved:
- the fixed status header, a packaged Jinja2 template rendered by
  TemplateRenderer
- the user's custom message, a plain string with ${...} placeholders that
  substitute_placeholders() expands in a single literal pass
"""

import logging
import re
from typing import Any, Dict, Iterable

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from telegram_notifier.domain.models import UNKNOWN_CAUSE, BuildContext

from .duration import format_duration
from .exceptions import MessageTemplateError
from .markdown import DEFAULT_ESCAPED_CHARS, escape_markdown

logger = logging.getLogger(__name__)

PLACEHOLDER_TOKENS = (
    "BUILD_STATUS",
    "JOB_NAME",
    "BUILD_NUMBER",
    "BUILD_DURATION",
    "BUILD_URL",
    "CAUSE",
)

_PLACEHOLDER_PATTERN = re.compile(
    r"\$\{(" + "|".join(PLACEHOLDER_TOKENS) + r")\}"
)


def placeholder_values(context: BuildContext) -> Dict[str, str]:
    """
    Compute the replacement value of every recognized placeholder.

    Values are the raw strings; no Markdown escaping is applied.

    Args:
        context: Build facts

    Returns:
        Mapping of placeholder token (without ${}) to its value
    """
    cause = context.cause if context.cause and context.cause.strip() else UNKNOWN_CAUSE
    return {
        "BUILD_STATUS": context.status_name,
        "JOB_NAME": context.job_name,
        "BUILD_NUMBER": str(context.build_number),
        "BUILD_DURATION": format_duration(context.duration_ms),
        "BUILD_URL": context.url,
        "CAUSE": cause,
    }


def substitute_placeholders(template: str, context: BuildContext) -> str:
    """
    Expand ${...} placeholders in a user-supplied template.

    Every occurrence of a recognized token is replaced in one pass, so a
    value that itself contains a token is never expanded again. Unknown
    placeholders are left as they are.

    Args:
        template: Custom message template
        context: Build facts

    Returns:
        Template with recognized placeholders replaced
    """
    values = placeholder_values(context)
    return _PLACEHOLDER_PATTERN.sub(lambda match: values[match.group(1)], template)


class TemplateRenderer:
    """Renders the fixed status header from a packaged Jinja2 template.

    Autoescaping is off because the output is Telegram Markdown, not HTML;
    fields that need escaping go through the md_escape filter explicitly.
    Templates are cached by the Jinja2 environment after the first load.
    """

    def __init__(
        self,
        template_dir: str = "message_templates",
        status_template: str = "build_status.md.j2",
        escaped_chars: Iterable[str] = DEFAULT_ESCAPED_CHARS,
    ):
        """Initialize the Jinja2 environment.

        Args:
            template_dir: Directory name within the telegram_notifier.formatting package
            status_template: Filename of the status message template
            escaped_chars: Characters the md_escape filter escapes
        """
        self.status_template_name = status_template
        self.escaped_chars = tuple(escaped_chars)

        self.env = Environment(
            loader=PackageLoader("telegram_notifier.formatting", template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["md_escape"] = self._escape

        logger.debug(f"Initialized TemplateRenderer with templates from {template_dir}")

    def _escape(self, value: Any) -> str:
        return escape_markdown(str(value), self.escaped_chars)

    def render(self, context: Dict[str, Any]) -> str:
        """Render the status template with the provided variables.

        Args:
            context: Template variables (glyph, status, job_name, build_number,
                duration, cause, custom_block, build_url)

        Returns:
            Rendered message text

        Raises:
            MessageTemplateError: If the template cannot be loaded or rendered
        """
        try:
            template = self.env.get_template(self.status_template_name)
            return template.render(context)
        except TemplateError as e:
            error_msg = f"Status template rendering failed: {e}"
            logger.error(error_msg, exc_info=True)
            raise MessageTemplateError(error_msg) from e
        except Exception as e:
            error_msg = f"Unexpected error during template rendering: {e}"
            logger.error(error_msg, exc_info=True)
            raise MessageTemplateError(error_msg) from e
