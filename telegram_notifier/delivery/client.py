"""HTTP client for the Telegram Bot API sendMessage method.

TelegramClient performs exactly one synchronous HTTPS POST per call and
reduces every failure mode to a DeliveryResult; no exception crosses its
public methods. It keeps no per-call state: each call opens and closes its
own requests.Session, so calls on different threads with different
credentials are independent. Requests go through Session.post, so CA bundle
and proxy settings from the environment (REQUESTS_CA_BUNDLE, HTTPS_PROXY)
apply.
"""

from typing import Callable, List, Optional, Tuple

import requests
from urllib3.util import Timeout

from telegram_notifier.config.telegram import (
    PARSE_MODE,
    REQUEST_TIMEOUT_SECONDS,
    SEND_MESSAGE_METHOD,
    TELEGRAM_API_URL,
    TOTAL_TIMEOUT_SECONDS,
)
from telegram_notifier.logging import LoggerLike, get_logger

from .models import DeliveryResult

logger = get_logger(__name__, component="delivery")

REDACTED_TOKEN = "<redacted>"

# Longest response body kept in logs and diagnostics
MAX_LOGGED_BODY = 500


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


class TelegramClient:
    """Sends messages to a Telegram chat through the Bot API.

    Attributes:
        api_url: Base URL the bot token and method name are appended to
        session_factory: Callable returning a requests.Session (for mocking)
    """

    def __init__(
        self,
        api_url: str = TELEGRAM_API_URL,
        session_factory: Optional[Callable[[], requests.Session]] = None,
        logger_instance: Optional[LoggerLike] = None,
    ):
        """Initialize client settings.

        Args:
            api_url: Base URL of the Bot API (default https://api.telegram.org/bot)
            session_factory: Factory for per-call sessions (defaults to requests.Session)
            logger_instance: Logger instance (uses module logger if None)
        """
        self.api_url = api_url
        self.session_factory = session_factory or requests.Session
        self.logger = logger_instance or logger

    def send(self, token: Optional[str], chat_id: Optional[str], message: Optional[str]) -> bool:
        """Send a message and report whether Telegram accepted it.

        Args:
            token: Bot token
            chat_id: Target chat identifier
            message: Markdown message text

        Returns:
            True if the Bot API answered with a 2xx status, False otherwise
        """
        return self.deliver(token, chat_id, message).success

    def deliver(
        self, token: Optional[str], chat_id: Optional[str], message: Optional[str]
    ) -> DeliveryResult:
        """Send a message and return the detailed delivery outcome.

        Blank inputs are rejected without network I/O. Timeouts, transport
        errors, non-2xx responses and unexpected errors are logged and
        turned into a failed DeliveryResult.

        Args:
            token: Bot token
            chat_id: Target chat identifier
            message: Markdown message text

        Returns:
            DeliveryResult describing the attempt
        """
        for value, reason in (
            (token, "Bot token is empty, cannot send message"),
            (chat_id, "Chat ID is empty, cannot send message"),
            (message, "Message is empty, nothing to send"),
        ):
            if _is_blank(value):
                self.logger.warning(
                    reason, extra={"event": "delivery.request.rejected"}
                )
                return DeliveryResult.rejected(reason)

        try:
            url = self.build_url(token)
            form = self.build_form(chat_id, message)

            self.logger.debug(
                f"POST {self._redacted_url()}",
                extra={
                    "event": "delivery.request.started",
                    "message_length": len(message),
                },
            )

            with self.session_factory() as session:
                response = session.post(url, data=form, timeout=self.build_timeout())

            if 200 <= response.status_code < 300:
                self.logger.info(
                    "Message sent to Telegram",
                    extra={
                        "event": "delivery.request.succeeded",
                        "status_code": response.status_code,
                    },
                )
                return DeliveryResult(success=True, status_code=response.status_code)

            body = self._redact((response.text or "")[:MAX_LOGGED_BODY], token)
            self.logger.warning(
                f"Telegram rejected the message. Status code: {response.status_code}, response: {body}",
                extra={
                    "event": "delivery.request.failed",
                    "status_code": response.status_code,
                },
            )
            return DeliveryResult(
                success=False,
                status_code=response.status_code,
                error_type="HTTPStatus",
                detail=body,
            )

        except requests.exceptions.Timeout as e:
            detail = self._redact(str(e), token)
            self.logger.warning(
                f"Request to Telegram timed out after {TOTAL_TIMEOUT_SECONDS} seconds: {detail}",
                extra={
                    "event": "delivery.request.failed",
                    "error_type": type(e).__name__,
                },
            )
            return DeliveryResult(success=False, error_type=type(e).__name__, detail=detail)
        except requests.exceptions.RequestException as e:
            detail = self._redact(str(e), token)
            self.logger.error(
                f"I/O error while sending message to Telegram: {detail}",
                extra={
                    "event": "delivery.request.failed",
                    "error_type": type(e).__name__,
                },
            )
            return DeliveryResult(success=False, error_type=type(e).__name__, detail=detail)
        except Exception as e:
            detail = self._redact(str(e), token)
            self.logger.error(
                f"Unexpected error while sending message to Telegram: {detail}",
                exc_info=True,
                extra={
                    "event": "delivery.request.failed",
                    "error_type": type(e).__name__,
                },
            )
            return DeliveryResult(success=False, error_type=type(e).__name__, detail=detail)

    def build_url(self, token: str) -> str:
        """Build the sendMessage endpoint URL for a bot token.

        Args:
            token: Bot token

        Returns:
            Full URL, e.g. https://api.telegram.org/bot<token>/sendMessage
        """
        return f"{self.api_url}{str(token).strip()}/{SEND_MESSAGE_METHOD}"

    @staticmethod
    def build_form(chat_id: str, message: str) -> List[Tuple[str, str]]:
        """Build the sendMessage form fields.

        requests encodes them as an application/x-www-form-urlencoded UTF-8 body.

        Args:
            chat_id: Target chat identifier
            message: Markdown message text

        Returns:
            Ordered (name, value) pairs: chat_id, text, parse_mode
        """
        return [
            ("chat_id", str(chat_id).strip()),
            ("text", message),
            ("parse_mode", PARSE_MODE),
        ]

    @staticmethod
    def build_timeout() -> Timeout:
        """Connect/read timeout with a total ceiling for one request."""
        return Timeout(
            connect=REQUEST_TIMEOUT_SECONDS,
            read=REQUEST_TIMEOUT_SECONDS,
            total=TOTAL_TIMEOUT_SECONDS,
        )

    def _redacted_url(self) -> str:
        return f"{self.api_url}{REDACTED_TOKEN}/{SEND_MESSAGE_METHOD}"

    @staticmethod
    def _redact(text: str, token: Optional[str]) -> str:
        """Remove the bot token from text that may embed the request URL."""
        if token and str(token).strip():
            return text.replace(str(token).strip(), REDACTED_TOKEN)
        return text
