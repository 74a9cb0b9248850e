"""Unit tests for MessageFormatter."""

from unittest.mock import Mock

import pytest

from telegram_notifier.config.telegram import MAX_MESSAGE_LENGTH, TRUNCATION_SUFFIX
from telegram_notifier.domain.models import BuildContext, Outcome
from telegram_notifier.formatting import (
    INVALID_BUILD_MESSAGE,
    MessageFormatter,
    MessageTemplateError,
    TemplateRenderer,
    format_message,
    get_default_formatter,
)
from telegram_notifier.formatting import formatter as formatter_module


@pytest.fixture
def formatter():
    return MessageFormatter()


@pytest.fixture
def context():
    """Successful build started by a user."""
    return BuildContext(
        job_name="TestJob",
        build_number=42,
        outcome=Outcome.SUCCESS,
        duration_ms=65000,
        url="http://jenkins.example.com/job/TestJob/42/",
        cause="Started by user admin",
    )


def test_format_message_with_success(formatter, context):
    """Test the complete layout of a successful build message."""
    message = formatter.format_message(context, None)

    assert message == (
        "✅ Build *SUCCESS*\n"
        "\n"
        "*Job:* TestJob\n"
        "*Build:* #42\n"
        "*Duration:* 1m 5s\n"
        "*Started by:* Started by user admin\n"
        "\n"
        "[View build](http://jenkins.example.com/job/TestJob/42/)"
    )


def test_format_message_with_failure(formatter, context):
    failed = context.model_copy(update={"outcome": Outcome.FAILURE})
    message = formatter.format_message(failed, "")

    assert message.startswith("❌ Build *FAILURE*")
    assert "TestJob" in message


def test_format_message_with_custom_message(formatter, context):
    """Test the custom block sits between the header and the link."""
    custom = "Build ${BUILD_NUMBER} of ${JOB_NAME} completed with status ${BUILD_STATUS}"
    message = formatter.format_message(context, custom)

    assert "Build 42 of TestJob completed with status SUCCESS" in message
    assert message.endswith(
        "*Started by:* Started by user admin\n"
        "\n"
        "Build 42 of TestJob completed with status SUCCESS\n"
        "\n"
        "[View build](http://jenkins.example.com/job/TestJob/42/)"
    )


@pytest.mark.parametrize("custom", [None, "", "   ", "\n\t"])
def test_blank_custom_message_adds_nothing(formatter, context, custom):
    assert formatter.format_message(context, custom) == formatter.format_message(context, None)


def test_format_message_with_null_build(formatter):
    assert formatter.format_message(None, "anything") == INVALID_BUILD_MESSAGE
    assert format_message(None, None) == "Invalid build information"


def test_underscores_in_job_name_are_escaped(formatter, context):
    underscored = context.model_copy(update={"job_name": "Test_Job_With_Underscores"})
    message = formatter.format_message(underscored, "Raw: ${JOB_NAME}")

    assert "*Job:* Test\\_Job\\_With\\_Underscores\n" in message
    # Template values are substituted raw
    assert "Raw: Test_Job_With_Underscores" in message


def test_cause_is_escaped(formatter, context):
    caused = context.model_copy(update={"cause": "Started by user john_doe"})
    message = formatter.format_message(caused)

    assert "*Started by:* Started by user john\\_doe\n" in message


@pytest.mark.parametrize("cause", [None, "", "  "])
def test_started_by_line_omitted_without_cause(formatter, context, cause):
    bare = context.model_copy(update={"cause": cause})
    message = formatter.format_message(bare)

    assert "Started by" not in message
    assert "*Duration:* 1m 5s\n\n[View build](" in message


def test_unknown_outcome(formatter, context):
    running = context.model_copy(update={"outcome": None})
    message = formatter.format_message(running)

    assert message.startswith("❓ Build *UNKNOWN*")


def test_unknown_duration(formatter, context):
    message = formatter.format_message(context.model_copy(update={"duration_ms": -1}))

    assert "*Duration:* N/A\n" in message


@pytest.mark.parametrize(
    "outcome,glyph",
    [
        (Outcome.SUCCESS, "✅"),
        (Outcome.FAILURE, "❌"),
        (Outcome.UNSTABLE, "\u26A0"),
        (Outcome.ABORTED, "\U0001F6D1"),
        (Outcome.NOT_BUILT, "\u23F8"),
    ],
)
def test_status_glyphs(formatter, context, outcome, glyph):
    message = formatter.format_message(context.model_copy(update={"outcome": outcome}))

    assert message.startswith(glyph)
    assert f"Build *{outcome.value}*" in message


def test_message_truncation(formatter, context):
    """Test an oversized custom message is cut with the truncation marker."""
    message = formatter.format_message(context, "A" * 5000)

    assert len(message) == MAX_MESSAGE_LENGTH
    assert message.endswith(TRUNCATION_SUFFIX)
    assert message.startswith("✅ Build *SUCCESS*")


def test_custom_escaped_chars(context):
    formatter = MessageFormatter(escaped_chars=("_", "*"))
    message = formatter.format_message(context.model_copy(update={"job_name": "a*b_c"}))

    assert "*Job:* a\\*b\\_c\n" in message


def test_template_failure_falls_back_to_plain_rendering(context):
    """Test a broken status template still yields the full layout."""
    renderer = Mock(spec=TemplateRenderer)
    renderer.render.side_effect = MessageTemplateError("boom")
    logger = Mock()
    formatter = MessageFormatter(template_renderer=renderer, logger_instance=logger)
    build = context.model_copy(update={"job_name": "My_Job", "build_number": 3})

    message = formatter.format_message(build, "CUSTOM ${BUILD_NUMBER}")

    assert message == (
        "✅ Build *SUCCESS*\n"
        "\n"
        "*Job:* My\\_Job\n"
        "*Build:* #3\n"
        "*Duration:* 1m 5s\n"
        "*Started by:* Started by user admin\n"
        "\n"
        "CUSTOM 3\n"
        "\n"
        "[View build](http://jenkins.example.com/job/TestJob/42/)"
    )
    logger.error.assert_called_once()


@pytest.mark.parametrize(
    "update,custom",
    [
        ({}, None),
        ({}, "Owner: ${JOB_NAME}"),
        ({"cause": None}, "${CAUSE}"),
        ({"job_name": ""}, "${JOB_NAME}"),
    ],
)
def test_plain_rendering_matches_template(context, update, custom):
    build = context.model_copy(update=update)
    renderer = Mock(spec=TemplateRenderer)
    renderer.render.side_effect = MessageTemplateError("boom")
    fallback = MessageFormatter(template_renderer=renderer, logger_instance=Mock())

    assert fallback.format_message(build, custom) == MessageFormatter().format_message(build, custom)


def test_custom_message_substituted_to_empty_keeps_block(formatter, context):
    """Test a non-blank template whose values are all empty still adds its block."""
    build = context.model_copy(update={"job_name": ""})

    message = formatter.format_message(build, "${JOB_NAME}")

    assert message.endswith(
        "*Started by:* Started by user admin\n"
        "\n"
        "\n"
        "\n"
        "[View build](http://jenkins.example.com/job/TestJob/42/)"
    )
    assert message != formatter.format_message(build, None)


def test_default_formatter_is_created_on_first_use(monkeypatch, context):
    """Test the shared formatter is built lazily and then reused."""
    created = []

    class CountingFormatter(MessageFormatter):
        def __init__(self, *args, **kwargs):
            created.append(self)
            super().__init__(*args, **kwargs)

    monkeypatch.setattr(formatter_module, "_default_formatter", None)
    monkeypatch.setattr(formatter_module, "MessageFormatter", CountingFormatter)
    assert created == []

    first = format_message(context, "CUSTOM ${BUILD_NUMBER}")
    second = format_message(context)

    assert len(created) == 1
    assert get_default_formatter() is created[0]
    assert "CUSTOM 42" in first
    assert second.startswith("✅ Build *SUCCESS*")


def test_context_is_not_mutated(formatter, context):
    before = context.model_dump()
    formatter.format_message(context, "${JOB_NAME}")

    assert context.model_dump() == before
