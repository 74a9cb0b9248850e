"""Core domain models for completed builds.

This module defines the data structures shared by the trigger, formatting
and notification layers:
- Outcome: terminal status of a build
- BuildContext: immutable snapshot of the facts needed to render a message
"""

from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field, field_validator

UNKNOWN_CAUSE = "Unknown"


class Outcome(str, Enum):
    """Terminal build states reported by the build system.

    An absent outcome (build still running, result not recorded) is
    represented by ``None``, never by a member of this enum.
    """

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    UNSTABLE = "UNSTABLE"
    ABORTED = "ABORTED"
    NOT_BUILT = "NOT_BUILT"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Outcome"]:
        """Parse an outcome name, case-insensitively.

        Args:
            value: Outcome name such as "failure" or "NOT_BUILT"

        Returns:
            Matching Outcome, or None if value is absent or unrecognized
        """
        if value is None:
            return None

        normalized = value.strip().upper().replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError:
            return None


def primary_cause(causes: Optional[Iterable[str]]) -> str:
    """Pick the description of the primary triggering cause.

    The first non-blank description wins (e.g. "Started by user admin").

    Args:
        causes: Cause descriptions in the order the build system recorded them

    Returns:
        First non-blank cause, or UNKNOWN_CAUSE when none is recorded
    """
    for cause in causes or ():
        if cause and cause.strip():
            return cause.strip()
    return UNKNOWN_CAUSE


class BuildContext(BaseModel):
    """Read-only facts about one completed build.

    Produced once per completed build by the host build system and consumed
    by the formatter. Instances are frozen so a notification attempt can
    never mutate the snapshot it was given.
    """

    job_name: str = Field(..., description="Full display name of the job")
    build_number: int = Field(..., gt=0, description="Build number")
    outcome: Optional[Outcome] = Field(None, description="Terminal build status")
    duration_ms: int = Field(
        -1, description="Build duration in milliseconds (negative = unknown)"
    )
    url: str = Field(..., description="Absolute URL of the build")
    cause: Optional[str] = Field(
        UNKNOWN_CAUSE, description="Description of the primary triggering cause"
    )

    @field_validator("outcome", mode="before")
    @classmethod
    def parse_outcome(cls, v):
        """Accept outcome names as plain strings."""
        if v is None or isinstance(v, Outcome):
            return v
        if isinstance(v, str):
            return Outcome.parse(v)
        return v

    model_config = {"frozen": True, "json_schema_extra": {"example": {
        "job_name": "backend/deploy",
        "build_number": 42,
        "outcome": "FAILURE",
        "duration_ms": 65000,
        "url": "https://ci.example.com/job/backend/job/deploy/42/",
        "cause": "Started by user admin",
    }}}

    @property
    def status_name(self) -> str:
        """Outcome name, or UNKNOWN when the outcome is absent."""
        return self.outcome.value if self.outcome is not None else "UNKNOWN"
