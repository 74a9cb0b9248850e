"""Fixed settings for communicating with the Telegram Bot API."""

# Base URL of the Bot API; the bot token and method name are appended.
TELEGRAM_API_URL = "https://api.telegram.org/bot"

SEND_MESSAGE_METHOD = "sendMessage"

# Connect timeout and total ceiling for one sendMessage request (seconds)
REQUEST_TIMEOUT_SECONDS = 30
TOTAL_TIMEOUT_SECONDS = 30

PARSE_MODE = "Markdown"

# Maximum message length accepted by the Bot API
MAX_MESSAGE_LENGTH = 4096

TRUNCATION_SUFFIX = "\n\n... (message truncated)"
