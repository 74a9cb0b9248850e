"""Notification triggers and the notify/skip decision.

A trigger selects one build outcome that should produce a notification.
The mapping between triggers and outcomes is one-to-one and total.
"""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional

from telegram_notifier.domain.models import Outcome


class Trigger(Enum):
    """Outcome kinds a job can be configured to notify on."""

    SUCCESS = "Success"
    FAILURE = "Failure"
    UNSTABLE = "Unstable"
    ABORTED = "Aborted"
    NOT_BUILT = "Not Built"

    @property
    def display_name(self) -> str:
        """Human-readable name shown in job configuration."""
        return self.value

    @property
    def outcome(self) -> Outcome:
        """The single outcome this trigger matches."""
        return TRIGGER_OUTCOMES[self]

    def matches(self, outcome: Optional[Outcome]) -> bool:
        """Check whether this trigger matches the given build outcome.

        Args:
            outcome: Terminal build outcome, or None when absent

        Returns:
            True only for the outcome this trigger maps to
        """
        if outcome is None:
            return False
        return TRIGGER_OUTCOMES[self] is outcome


TRIGGER_OUTCOMES: Dict[Trigger, Outcome] = {
    Trigger.SUCCESS: Outcome.SUCCESS,
    Trigger.FAILURE: Outcome.FAILURE,
    Trigger.UNSTABLE: Outcome.UNSTABLE,
    Trigger.ABORTED: Outcome.ABORTED,
    Trigger.NOT_BUILT: Outcome.NOT_BUILT,
}


def should_notify(
    triggers: Optional[Iterable[Trigger]], outcome: Optional[Outcome]
) -> bool:
    """Decide whether a build outcome needs a notification.

    Args:
        triggers: Enabled triggers (None or empty means nothing is enabled)
        outcome: Terminal build outcome, or None when absent

    Returns:
        True iff at least one enabled trigger matches the outcome
    """
    if not triggers or outcome is None:
        return False
    return any(trigger.matches(outcome) for trigger in triggers)


def triggers_from_flags(
    on_success: bool = False,
    on_failure: bool = False,
    on_unstable: bool = False,
    on_aborted: bool = False,
    on_not_built: bool = False,
) -> FrozenSet[Trigger]:
    """Build the set of enabled triggers from per-outcome flags.

    Returns:
        Frozen set containing one trigger per enabled flag
    """
    flags = {
        Trigger.SUCCESS: on_success,
        Trigger.FAILURE: on_failure,
        Trigger.UNSTABLE: on_unstable,
        Trigger.ABORTED: on_aborted,
        Trigger.NOT_BUILT: on_not_built,
    }
    return frozenset(trigger for trigger, enabled in flags.items() if enabled)
