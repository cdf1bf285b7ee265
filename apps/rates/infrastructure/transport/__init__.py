from django.conf import settings

from apps.rates.infrastructure.transport.telegram import TelegramApiError, TelegramBotTransport


def get_transport() -> TelegramBotTransport:
    return TelegramBotTransport(
        token=settings.TELEGRAM_BOT_TOKEN,
        api_url=settings.TELEGRAM_API_URL,
        timeout=settings.RATES_HTTP_TIMEOUT,
    )


__all__ = ("TelegramApiError", "TelegramBotTransport", "get_transport")
