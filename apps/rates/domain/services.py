"""
Domain services - Core business logic.
Implements the query pipeline: parse -> fetch -> format -> reply.
"""

import logging
from datetime import date
from typing import Callable, Optional

from apps.rates.domain import messages
from apps.rates.domain.formatter import format_rate
from apps.rates.domain.interfaces import BaseChatTransport, BaseExchangeRateProvider
from apps.rates.domain.models import IncomingMessage, RateQuery, Rejection
from apps.rates.domain.parser import QueryParser

logger = logging.getLogger(__name__)


class QueryProcessor:
    """
    Answers one chat message with one or two replies.

    Outcomes:
    1. Invalid input -> rejection message + instruction
    2. Provider unreachable -> "service unavailable"
    3. Provider has no data -> provider message
    4. Success -> formatted rate
    """

    def __init__(
        self,
        parser: QueryParser,
        provider: BaseExchangeRateProvider,
        base_currency: str,
        today: Optional[Callable[[], date]] = None,
    ):
        self.parser = parser
        self.provider = provider
        self.base_currency = base_currency.upper()
        self._today = today or provider.today

    def build_replies(self, message: IncomingMessage) -> list[str]:
        """
        Compute the replies for ``message`` without sending anything.

        Example:
            >>> processor.build_replies(IncomingMessage(1, 7, "USD 16.05.2021", now))
            ['16.05.2021, 1 USD =  70,52 RUB']
        """
        parsed = self.parser.parse(message.text, self._today())
        if isinstance(parsed, Rejection):
            logger.info("Unable to make out message %s: %s", message.message_id, parsed.reason.value)
            return self._reject(parsed)

        logger.info("Message %s parsed: %s on %s", message.message_id, parsed.target_currency, parsed.date)
        rate = self.provider.fetch_rate(self.base_currency, parsed.target_currency, parsed.date)
        if isinstance(rate, Rejection):
            logger.info("No rate for message %s: %s", message.message_id, rate.reason.value)
            return self._reject(rate)

        return [self._reply(parsed, format_rate(rate))]

    def process(self, message: IncomingMessage, transport: BaseChatTransport) -> list[str]:
        """Build the replies for ``message`` and send them to its chat."""
        logger.info("Start processing message %s from chat %s", message.message_id, message.chat_id)
        transport.send_typing(message.chat_id)

        replies = self.build_replies(message)
        for reply in replies:
            transport.send_text(message.chat_id, reply)

        logger.info("Message %s processed, %d replies sent", message.message_id, len(replies))
        return replies

    @staticmethod
    def _reject(rejection: Rejection) -> list[str]:
        if rejection.reason.is_input_error:
            return [rejection.message, messages.INSTRUCTION]
        return [rejection.message]

    def _reply(self, query: RateQuery, formatted_rate: str) -> str:
        return messages.REPLY.format(
            date=query.date.strftime(messages.DISPLAY_DATE_FORMAT),
            currency=query.target_currency,
            rate=formatted_rate,
            base=self.base_currency,
        )
