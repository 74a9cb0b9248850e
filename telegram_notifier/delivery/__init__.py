"""Delivery of rendered messages to the Telegram Bot API."""

from .client import TelegramClient
from .models import DeliveryResult

__all__ = ["DeliveryResult", "TelegramClient"]
