"""Notification service for sending build status messages.

This module provides the BuildNotifier class that orchestrates one
notification attempt per completed build: trigger evaluation, credential
resolution, message formatting and delivery.
"""

from typing import Any, Optional

from telegram_notifier.config.models import NotifierConfig
from telegram_notifier.credentials.resolvers import CredentialResolver, resolve_credential
from telegram_notifier.delivery.client import TelegramClient
from telegram_notifier.domain.models import BuildContext
from telegram_notifier.formatting.formatter import MessageFormatter
from telegram_notifier.logging import LoggerLike, get_logger
from telegram_notifier.logging.context import log_context
from telegram_notifier.triggers.models import should_notify

from .build_log import LINE_PREFIX, BuildLog, LoggerBuildLog
from .models import (
    STATUS_FAILED,
    STATUS_MISSING_CREDENTIALS,
    STATUS_SENT,
    STATUS_SKIPPED,
    NotificationResult,
)

logger = get_logger(__name__, component="notification")


class BuildNotifier:
    """Sends a Telegram notification for a completed build.

    Coordinates the notification flow:
    1. Check whether an enabled trigger matches the build outcome
    2. Resolve the bot token and chat ID through the credential resolver
    3. Format the message
    4. Deliver it through the Telegram client

    Notification problems never fail the build: notify() reports them in
    its result, perform() always returns True.
    """

    def __init__(
        self,
        config: NotifierConfig,
        credential_resolver: CredentialResolver,
        formatter: Optional[MessageFormatter] = None,
        client: Optional[TelegramClient] = None,
        logger_instance: Optional[LoggerLike] = None,
    ):
        """Initialize the notifier.

        Args:
            config: Job notification settings
            credential_resolver: Resolver for the bot token and chat ID credentials
            formatter: Message formatter (creates default if None)
            client: Telegram client (creates default if None)
            logger_instance: Logger instance (uses module logger if None)
        """
        self.config = config
        self.credential_resolver = credential_resolver
        self.formatter = formatter or MessageFormatter()
        self.client = client or TelegramClient()
        self.logger = logger_instance or logger

    def perform(
        self,
        context: Optional[BuildContext],
        scope: Any = None,
        build_log: Optional[BuildLog] = None,
    ) -> bool:
        """Run the notification step of a build.

        Args:
            context: Facts about the completed build
            scope: Lookup scope passed to the credential resolver
            build_log: Sink for progress lines (logs through Python logging if None)

        Returns:
            Always True: the surrounding build is never failed by notification
        """
        try:
            self.notify(context, scope=scope, build_log=build_log)
        except Exception as e:
            self.logger.error(
                f"Unexpected error in notification step: {e}",
                exc_info=True,
                extra={"event": "notification.error", "error_type": type(e).__name__},
            )
        return True

    def notify(
        self,
        context: Optional[BuildContext],
        scope: Any = None,
        build_log: Optional[BuildLog] = None,
    ) -> NotificationResult:
        """Notify about a completed build if its outcome is enabled.

        Args:
            context: Facts about the completed build
            scope: Lookup scope passed to the credential resolver
            build_log: Sink for progress lines (logs through Python logging if None)

        Returns:
            NotificationResult describing what happened
        """
        build_log = build_log or LoggerBuildLog(self.logger)
        job_name = context.job_name if context is not None else None
        build_number = context.build_number if context is not None else None
        outcome = context.outcome if context is not None else None

        with log_context(job_name=job_name, build_number=build_number):
            # Step 1: Trigger evaluation
            triggers = self.config.configured_triggers()
            if not should_notify(triggers, outcome):
                status_name = context.status_name if context is not None else "UNKNOWN"
                build_log.info(
                    f"{LINE_PREFIX}No notification needed for build result: {status_name}"
                )
                self.logger.info(
                    f"Skipping notification for build result {status_name}",
                    extra={
                        "event": "notification.skip",
                        "reason": "no_matching_trigger",
                        "triggers": sorted(trigger.name for trigger in triggers),
                    },
                )
                return NotificationResult(
                    job_name=job_name,
                    build_number=build_number,
                    status=STATUS_SKIPPED,
                    reason="no_matching_trigger",
                )

            # Step 2: Credentials
            bot_token = self._resolve(self.config.token_credential_id, scope)
            if bot_token is None:
                return self._missing_credential(
                    "Bot token", self.config.token_credential_id, job_name, build_number, build_log
                )

            chat_id = self._resolve(self.config.chat_id_credential_id, scope)
            if chat_id is None:
                return self._missing_credential(
                    "Chat ID", self.config.chat_id_credential_id, job_name, build_number, build_log
                )

            # Step 3: Format
            message = self.formatter.format_message(context, self.config.custom_message)

            # Step 4: Deliver
            build_log.info(f"{LINE_PREFIX}Sending notification...")
            delivery = self.client.deliver(bot_token, chat_id, message)

            if delivery.success:
                build_log.info(f"{LINE_PREFIX}Notification sent successfully")
                self.logger.info(
                    "Notification sent",
                    extra={
                        "event": "notification.send.success",
                        "status_code": delivery.status_code,
                        "message_length": len(message),
                    },
                )
                return NotificationResult(
                    job_name=job_name,
                    build_number=build_number,
                    status=STATUS_SENT,
                    delivery=delivery,
                )

            build_log.error(f"{LINE_PREFIX}Failed to send notification")
            self.logger.warning(
                f"Notification delivery failed: {delivery.describe()}",
                extra={
                    "event": "notification.send.failure",
                    "status_code": delivery.status_code,
                    "error_type": delivery.error_type,
                },
            )
            return NotificationResult(
                job_name=job_name,
                build_number=build_number,
                status=STATUS_FAILED,
                reason=delivery.describe(),
                delivery=delivery,
            )

    def _resolve(self, credential_id: str, scope: Any) -> Optional[str]:
        try:
            return resolve_credential(self.credential_resolver, credential_id, scope)
        except Exception as e:
            self.logger.error(
                f"Credential lookup failed for ID {credential_id}: {e}",
                extra={"event": "credentials.lookup.failed", "error_type": type(e).__name__},
            )
            return None

    def _missing_credential(
        self,
        label: str,
        credential_id: str,
        job_name: Optional[str],
        build_number: Optional[int],
        build_log: BuildLog,
    ) -> NotificationResult:
        build_log.error(f"{LINE_PREFIX}{label} credential not found or empty")
        self.logger.warning(
            f"{label} credential not found for ID: {credential_id}",
            extra={"event": "notification.skip", "reason": "missing_credentials"},
        )
        return NotificationResult(
            job_name=job_name,
            build_number=build_number,
            status=STATUS_MISSING_CREDENTIALS,
            reason=f"{label} credential not found or empty",
        )
