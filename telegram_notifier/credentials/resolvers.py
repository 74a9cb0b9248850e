"""Credential lookup for bot tokens and chat identifiers.

The notifier only ever refers to secrets by credential id; a resolver maps
an id (and an optional scope, such as the job the build belongs to) to the
secret value. "Not found" is reported as None, never as an exception.
"""

import os
import re
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from dotenv import dotenv_values

from telegram_notifier.logging import get_logger

logger = get_logger(__name__, component="credentials")


@runtime_checkable
class CredentialResolver(Protocol):
    """Looks up secret values by credential id."""

    def lookup(self, credential_id: str, scope: Any = None) -> Optional[str]:
        """Return the secret for credential_id, or None if it does not exist."""
        ...


def resolve_credential(
    resolver: CredentialResolver, credential_id: Optional[str], scope: Any = None
) -> Optional[str]:
    """Resolve a credential, treating blank ids and blank secrets as absent.

    Args:
        resolver: Credential resolver to query
        credential_id: Credential id from job configuration
        scope: Optional lookup scope passed through to the resolver

    Returns:
        Secret value with surrounding whitespace removed, or None
    """
    if not credential_id or not credential_id.strip():
        return None

    secret = resolver.lookup(credential_id.strip(), scope)
    if secret is None or not str(secret).strip():
        return None
    return str(secret).strip()


_ENV_NAME_PATTERN = re.compile(r"[^A-Z0-9]+")


def credential_env_name(credential_id: str, prefix: str = "") -> str:
    """Derive the environment variable name for a credential id.

    Examples:
        >>> credential_env_name("telegram-bot-token")
        'TELEGRAM_BOT_TOKEN'
        >>> credential_env_name("chat.id", prefix="CI_SECRET_")
        'CI_SECRET_CHAT_ID'
    """
    name = _ENV_NAME_PATTERN.sub("_", credential_id.strip().upper()).strip("_")
    return f"{prefix}{name}"


class EnvironmentCredentialResolver:
    """Resolves credentials from environment variables.

    The credential id is upper-cased and non-alphanumeric runs become
    underscores ("telegram-bot-token" -> TELEGRAM_BOT_TOKEN). Values from an
    optional .env file are used when the variable is not set in the
    process environment. The scope is ignored.
    """

    def __init__(
        self,
        prefix: str = "",
        dotenv_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize the resolver.

        Args:
            prefix: Prefix prepended to every derived variable name
            dotenv_path: Optional .env file read once at construction
            environ: Mapping to read instead of os.environ (for testing)
        """
        self.prefix = prefix
        self.environ = environ if environ is not None else os.environ
        self.dotenv: Dict[str, Optional[str]] = (
            dict(dotenv_values(dotenv_path)) if dotenv_path else {}
        )

    def lookup(self, credential_id: str, scope: Any = None) -> Optional[str]:
        """Look up a credential in the environment, then in the .env file.

        Args:
            credential_id: Identifier of the credential
            scope: Ignored; environment variables are global

        Returns:
            Raw secret, or None if neither source defines the variable
        """
        name = credential_env_name(credential_id, self.prefix)
        value = self.environ.get(name)
        if value is None:
            value = self.dotenv.get(name)
        if value is None:
            logger.debug(
                f"Credential {credential_id} not found in environment",
                extra={"event": "credentials.lookup.missing", "variable": name},
            )
        return value


class StaticCredentialResolver:
    """Resolves credentials from an in-memory mapping.

    Scoped secrets ({scope: {credential_id: secret}}) take precedence over
    global ones ({credential_id: secret}) when a scope is given.
    """

    def __init__(
        self,
        secrets: Optional[Mapping[str, str]] = None,
        scoped_secrets: Optional[Mapping[Any, Mapping[str, str]]] = None,
    ):
        """Initialize the resolver.

        Args:
            secrets: Global secrets keyed by credential id
            scoped_secrets: Per-scope secrets keyed by scope, then credential id
        """
        self.secrets = dict(secrets or {})
        self.scoped_secrets = {
            scope: dict(values) for scope, values in (scoped_secrets or {}).items()
        }

    def lookup(self, credential_id: str, scope: Any = None) -> Optional[str]:
        """Look up a credential, preferring the scoped secret.

        Args:
            credential_id: Identifier of the credential
            scope: Optional scope (e.g. a job) whose secrets are checked first

        Returns:
            Raw secret, or None if no mapping holds it
        """
        if scope is not None:
            scoped = self.scoped_secrets.get(scope, {})
            if credential_id in scoped:
                return scoped[credential_id]
        return self.secrets.get(credential_id)
