"""
Celery tasks for background processing.
Every incoming chat message is answered by its own task.
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from celery import shared_task
from django.conf import settings
from django.utils import timezone

from apps.rates.domain.models import IncomingMessage
from apps.rates.domain.parser import QueryParser
from apps.rates.domain.services import QueryProcessor
from apps.rates.infrastructure.providers.registry import get_configured_provider
from apps.rates.infrastructure.transport import get_transport

logger = logging.getLogger(__name__)


def build_query_processor() -> QueryProcessor:
    """
    Wire parser and provider from settings.

    Raises:
        ValueError: RATES_PROVIDER names no registered provider
    """
    provider = get_configured_provider()
    if provider is None:
        raise ValueError(f"Unknown rates provider '{settings.RATES_PROVIDER}'")

    return QueryProcessor(
        parser=QueryParser(provider.supported_currencies),
        provider=provider,
        base_currency=settings.RATES_BASE_CURRENCY,
        today=timezone.localdate,
    )


@shared_task(name="process_chat_message")
def process_chat_message(chat_id: int, message_id: int, text: Optional[str], timestamp: str) -> Dict:
    """
    Answer one chat message.

    Args:
        chat_id: Chat to reply to
        message_id: Telegram message id, used for logging
        text: Message text, None for stickers, voice notes, documents...
        timestamp: ISO 8601 time the message was sent

    Returns:
        Dict with the replies that were sent
    """
    message = IncomingMessage(
        chat_id=chat_id,
        message_id=message_id,
        text=text,
        timestamp=datetime.fromisoformat(timestamp),
    )

    replies = build_query_processor().process(message, get_transport())

    return {
        "chat_id": chat_id,
        "message_id": message_id,
        "replies": replies,
    }


def dispatch_message(message: IncomingMessage, inline: bool = False) -> Optional[str]:
    """
    Hand ``message`` over for processing.

    Returns:
        Celery task id, or None when the message was processed inline
    """
    args = (message.chat_id, message.message_id, message.text, message.timestamp.isoformat())

    if inline:
        process_chat_message(*args)
        return None

    task = process_chat_message.delay(*args)
    logger.debug("Message %s dispatched as task %s", message.message_id, task.id)
    return task.id
