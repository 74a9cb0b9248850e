"""Configuration loader for the build notifier."""

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings


def load_config(config_path: Path) -> AppConfig:
    """
    Load and validate notifier configuration from a YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_path = Path(config_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {config_path}",
            suggestions=[
                f"Ensure {config_path} exists and is readable",
                "Check the path and try again",
            ],
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_path} is readable",
                "Check file permissions",
            ],
        )

    if not config_dict:
        raise ConfigurationError(
            "Configuration file is empty",
            suggestions=["Add a 'notifier' section with credential ids and triggers"],
        )

    return parse_config(config_dict)


def parse_config(config_dict: Dict[str, Any]) -> AppConfig:
    """
    Validate an already-loaded configuration mapping.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationError: If the mapping does not match the schema
    """
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration must be a mapping, got {type(config_dict).__name__}",
            suggestions=["Put settings under a top-level 'notifier' key"],
        )

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            e,
            suggestions=[
                "Check that the 'notifier' section is present",
                "Trigger flags (notify_on_*) must be true or false",
            ],
        )
