"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, Field, field_validator

from telegram_notifier.triggers.models import Trigger, triggers_from_flags


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class NotifierConfig(BaseModel):
    """Per-job notification settings owned by the host.

    Credential ids reference secrets held by the host's credential store;
    the secret values themselves never appear in configuration.
    """

    token_credential_id: str = Field(
        "", description="Credential id of the Telegram bot token"
    )
    chat_id_credential_id: str = Field(
        "", description="Credential id of the target chat identifier"
    )
    notify_on_success: bool = Field(False, description="Notify when the build succeeds")
    notify_on_failure: bool = Field(True, description="Notify when the build fails")
    notify_on_unstable: bool = Field(True, description="Notify when the build is unstable")
    notify_on_aborted: bool = Field(False, description="Notify when the build is aborted")
    notify_on_not_built: bool = Field(False, description="Notify when the build is not built")
    custom_message: Optional[str] = Field(
        "", description="Optional message template with ${...} placeholders"
    )

    @field_validator("token_credential_id", "chat_id_credential_id", mode="before")
    @classmethod
    def strip_credential_id(cls, v: Optional[str]) -> str:
        """Strip whitespace from credential ids (None becomes empty)."""
        if v is None:
            return ""
        return str(v).strip()

    def configured_triggers(self) -> FrozenSet[Trigger]:
        """Get the set of enabled notification triggers."""
        return triggers_from_flags(
            on_success=self.notify_on_success,
            on_failure=self.notify_on_failure,
            on_unstable=self.notify_on_unstable,
            on_aborted=self.notify_on_aborted,
            on_not_built=self.notify_on_not_built,
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the build notifier."""

    notifier: NotifierConfig = Field(..., description="Notification settings")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
