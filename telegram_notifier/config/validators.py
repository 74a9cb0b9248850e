"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

TRIGGER_FLAGS = (
    "notify_on_success",
    "notify_on_failure",
    "notify_on_unstable",
    "notify_on_aborted",
    "notify_on_not_built",
)

# Flags that default to True in NotifierConfig
DEFAULT_ENABLED_FLAGS = ("notify_on_failure", "notify_on_unstable")


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for settings that silently disable notifications.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    notifier = config_dict.get("notifier", {})
    if not isinstance(notifier, dict):
        return warning_messages

    # Blank credential ids mean every attempt stops before delivery
    for key, label in (
        ("token_credential_id", "bot token"),
        ("chat_id_credential_id", "chat ID"),
    ):
        value = notifier.get(key)
        if not isinstance(value, str) or not value.strip():
            warning_messages.append(
                f"No {label} credential selected ({key}); notifications will not be sent"
            )

    enabled = [
        flag
        for flag in TRIGGER_FLAGS
        if notifier.get(flag, flag in DEFAULT_ENABLED_FLAGS) is True
    ]
    if not enabled:
        warning_messages.append(
            "No notification trigger is enabled; no build outcome will produce a notification"
        )

    custom_message = notifier.get("custom_message")
    if isinstance(custom_message, str) and len(custom_message) > 4096:
        warning_messages.append(
            f"custom_message is {len(custom_message)} characters long; rendered messages will be truncated"
        )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
