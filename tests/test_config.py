"""Integration tests for configuration module."""

from pathlib import Path

import pytest

from telegram_notifier.config import (
    AppConfig,
    ConfigurationError,
    NotifierConfig,
    load_config,
    load_environment_config,
    parse_config,
)
from telegram_notifier.config.validators import check_for_warnings
from telegram_notifier.triggers import Trigger

# Test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove logging-related environment variables and restore them afterwards."""
    for name in ("LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT"):
        # setenv records the original state so values loaded from .env files are undone
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self):
        """Test loading a configuration that sets every field."""
        config = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert isinstance(config, AppConfig)
        assert config.notifier.token_credential_id == "telegram-bot-token"
        assert config.notifier.chat_id_credential_id == "team-chat-id"
        assert config.notifier.configured_triggers() == frozenset(
            {Trigger.SUCCESS, Trigger.FAILURE, Trigger.ABORTED}
        )
        assert config.notifier.custom_message == "Build ${BUILD_NUMBER} of ${JOB_NAME}: ${BUILD_STATUS}"
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "json"

    def test_load_minimal_config(self):
        """Test defaults: failure and unstable notify, logging at INFO."""
        config = load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert config.notifier.configured_triggers() == frozenset(
            {Trigger.FAILURE, Trigger.UNSTABLE}
        )
        assert config.notifier.custom_message == ""
        assert config.logging.level == "INFO"
        assert config.logging.format == "key-value"

    def test_config_file_not_found(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert "not found" in str(exc_info.value).lower()
        assert exc_info.value.suggestions

    def test_invalid_yaml_syntax(self, tmp_path):
        invalid_yaml = tmp_path / "invalid.yaml"
        invalid_yaml.write_text("notifier:\n  token_credential_id: 'unterminated\n  bad: [")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(invalid_yaml)

        assert "parse" in str(exc_info.value).lower()

    def test_empty_file(self, tmp_path):
        empty = tmp_path / "empty.yaml"
        empty.write_text("# nothing here\n")

        with pytest.raises(ConfigurationError, match="empty"):
            load_config(empty)


class TestConfigurationValidation:
    """Test configuration validation rules."""

    def test_missing_notifier_section(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config({"logging": {"level": "INFO"}})

        assert "Missing required field: notifier" in exc_info.value.errors

    def test_invalid_trigger_type(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_trigger_type.yaml")

        assert len(exc_info.value.errors) == 1
        assert "notify_on_failure" in exc_info.value.errors[0]
        assert "expected bool" in exc_info.value.errors[0]

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "invalid_log_level.yaml")

        assert "logging -> level" in str(exc_info.value)

    def test_non_mapping_config(self):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            parse_config(["notifier"])

    def test_error_message_lists_all_errors(self):
        """Test every field error is reported at once."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config(
                {
                    "notifier": {
                        "token_credential_id": "t",
                        "chat_id_credential_id": "c",
                        "notify_on_success": "perhaps",
                        "notify_on_aborted": [1],
                    }
                }
            )

        message = str(exc_info.value)
        assert len(exc_info.value.errors) == 2
        assert "Validation Errors:" in message
        assert "  1. " in message and "  2. " in message
        assert "Suggestions:" in message


class TestConfigurationWarnings:
    """Test warnings for settings that silently disable notifications."""

    def test_no_triggers_warns(self):
        with pytest.warns(UserWarning, match="No notification trigger is enabled"):
            config = load_config(FIXTURES_DIR / "no_triggers_config.yaml")

        assert config.notifier.configured_triggers() == frozenset()

    def test_blank_credential_ids_warn(self):
        with pytest.warns(UserWarning) as record:
            config = parse_config({"notifier": {"token_credential_id": "  "}})

        messages = [str(w.message) for w in record]
        assert any("bot token" in m for m in messages)
        assert any("chat ID" in m for m in messages)
        assert config.notifier.token_credential_id == ""

    def test_long_custom_message_warns(self):
        notifier = {
            "token_credential_id": "t",
            "chat_id_credential_id": "c",
            "custom_message": "x" * 5000,
        }

        assert check_for_warnings({"notifier": notifier}) == [
            "custom_message is 5000 characters long; rendered messages will be truncated"
        ]

    def test_valid_config_has_no_warnings(self):
        assert check_for_warnings({"notifier": {"token_credential_id": "t", "chat_id_credential_id": "c"}}) == []


class TestNotifierConfig:
    """Test NotifierConfig defaults and normalization."""

    def test_defaults(self):
        config = NotifierConfig()

        assert config.token_credential_id == ""
        assert config.notify_on_failure is True
        assert config.notify_on_unstable is True
        assert config.notify_on_success is False
        assert config.notify_on_aborted is False
        assert config.notify_on_not_built is False

    def test_none_credential_id_becomes_empty(self):
        assert NotifierConfig(chat_id_credential_id=None).chat_id_credential_id == ""

    def test_all_triggers(self):
        config = NotifierConfig(
            notify_on_success=True,
            notify_on_aborted=True,
            notify_on_not_built=True,
        )

        assert config.configured_triggers() == frozenset(Trigger)


class TestEnvironmentConfig:
    """Test environment variable overrides."""

    def test_defaults_when_unset(self, clean_env):
        env_config = load_environment_config()

        assert env_config.log_level is None
        assert env_config.log_format is None
        assert env_config.environment == "local"

    def test_values_are_normalized(self, clean_env):
        clean_env.setenv("LOG_LEVEL", " debug ")
        clean_env.setenv("LOG_FORMAT", "JSON")
        clean_env.setenv("ENVIRONMENT", "ci")

        env_config = load_environment_config()

        assert env_config.log_level == "DEBUG"
        assert env_config.log_format == "json"
        assert env_config.environment == "ci"

    def test_invalid_values_are_collected(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "LOUD")
        clean_env.setenv("LOG_FORMAT", "xml")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert len(exc_info.value.errors) == 2

    def test_dotenv_file(self, clean_env, tmp_path):
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("LOG_FORMAT=key-value\nENVIRONMENT=staging\n")

        env_config = load_environment_config(str(dotenv_file))

        assert env_config.log_format == "key-value"
        assert env_config.environment == "staging"
