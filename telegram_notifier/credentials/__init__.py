"""Credential resolution for the bot token and chat identifier."""

from .resolvers import (
    CredentialResolver,
    EnvironmentCredentialResolver,
    StaticCredentialResolver,
    credential_env_name,
    resolve_credential,
)

__all__ = [
    "CredentialResolver",
    "EnvironmentCredentialResolver",
    "StaticCredentialResolver",
    "credential_env_name",
    "resolve_credential",
]
