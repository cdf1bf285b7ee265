"""
Telegram Bot API client.
Only the handful of methods the bot needs, over plain HTTPS with requests.
"""

import logging
from typing import Any, Optional

import requests

from apps.rates.domain.interfaces import BaseChatTransport

logger = logging.getLogger(__name__)


class TelegramApiError(Exception):
    """Raised when the Bot API can't be reached or answers with ok=false."""

    def __init__(self, description: str, error_code: Optional[int] = None):
        super().__init__(f"Telegram API error [{error_code}]: {description}")
        self.description = description
        self.error_code = error_code


class TelegramBotTransport(BaseChatTransport):

    def __init__(self, token: str, api_url: str = "https://api.telegram.org", timeout: float = 10):
        if not token:
            raise ValueError("Telegram bot token is not configured")
        self.base_url = f"{api_url.rstrip('/')}/bot{token}"
        self.timeout = timeout

    def call(self, method: str, payload: Optional[dict] = None, timeout: Optional[float] = None) -> Any:
        """
        Call a Bot API method and return its ``result``.

        Raises:
            TelegramApiError: transport failure, non-JSON answer or ok=false
        """
        try:
            response = requests.post(
                f"{self.base_url}/{method}",
                json=payload or {},
                timeout=timeout or self.timeout,
            )
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise TelegramApiError(f"{method} failed: {e}") from e
        except ValueError as e:
            raise TelegramApiError(f"{method} returned invalid JSON", response.status_code) from e

        if not data.get("ok"):
            raise TelegramApiError(data.get("description", "unknown error"), data.get("error_code"))

        return data.get("result")

    def send_text(self, chat_id: int, text: str) -> None:
        self.call("sendMessage", {"chat_id": chat_id, "text": text})

    def send_typing(self, chat_id: int) -> None:
        self.call("sendChatAction", {"chat_id": chat_id, "action": "typing"})

    def get_updates(self, offset: Optional[int] = None, timeout: int = 30) -> list[dict]:
        """Long-poll for new updates; ``offset`` acknowledges everything before it."""
        payload: dict[str, Any] = {
            "timeout": timeout,
            "allowed_updates": ["message", "edited_message"],
        }
        if offset is not None:
            payload["offset"] = offset
        # Give the HTTP request a little longer than the long poll itself
        return self.call("getUpdates", payload, timeout=timeout + self.timeout)

    def set_webhook(self, url: str, secret_token: str = "") -> None:
        payload = {"url": url, "allowed_updates": ["message", "edited_message"]}
        if secret_token:
            payload["secret_token"] = secret_token
        self.call("setWebhook", payload)

    def delete_webhook(self) -> None:
        self.call("deleteWebhook")
