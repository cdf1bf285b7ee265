import logging
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from apps.rates.domain import messages
from apps.rates.domain.currencies import SUPPORTED_CURRENCIES
from apps.rates.domain.models import DateWindow, Rejection, RejectionReason

logger = logging.getLogger(__name__)


class BaseExchangeRateProvider(ABC):
    """
    Common contract of every rate source.

    ``fetch_rate`` validates the request locally and only then hands over to
    ``request_rate``, so no implementation ever hits the network for a
    request that is known to be unanswerable.
    """

    def __init__(
        self,
        date_window: DateWindow,
        supported_currencies: frozenset[str] = SUPPORTED_CURRENCIES,
        today: Optional[Callable[[], date]] = None,
    ):
        self.date_window = date_window
        self.supported_currencies = supported_currencies
        self._today = today or date.today

    def today(self) -> date:
        return self._today()

    def fetch_rate(self, base_currency: str, target_currency: str, valuation_date: date) -> Decimal | Rejection:
        """
        Get the price of one unit of ``base_currency`` in ``target_currency``.

        Returns:
            The rate as returned by the source, or a Rejection explaining why there is none
        """
        base_currency = base_currency.upper()
        target_currency = target_currency.upper()

        rejection = self.check_request_parameters(base_currency, target_currency, valuation_date)
        if rejection is not None:
            return rejection

        return self.request_rate(base_currency, target_currency, valuation_date)

    def check_request_parameters(self, base_currency: str, target_currency: str, valuation_date: date) -> Rejection | None:
        if base_currency not in self.supported_currencies or target_currency not in self.supported_currencies:
            logger.info("Unsupported currency pair %s/%s", base_currency, target_currency)
            return Rejection.of(RejectionReason.UNKNOWN_CURRENCY_CODE)

        if self.date_window.is_in_future(valuation_date, self.today()):
            logger.info("Requested date %s is in the future", valuation_date)
            return Rejection.of(RejectionReason.DATE_IN_FUTURE)

        if self.date_window.is_too_early(valuation_date):
            logger.info("No data before %s, requested %s", self.date_window.earliest, valuation_date)
            return Rejection.of(
                RejectionReason.NO_DATA_FOR_DATE,
                messages.NO_DATA_BEFORE.format(date=self.date_window.earliest.strftime(messages.DISPLAY_DATE_FORMAT)),
            )

        return None

    @abstractmethod
    def request_rate(self, base_currency: str, target_currency: str, valuation_date: date) -> Decimal | Rejection:
        pass


class BaseChatTransport(ABC):
    """Outbound side of the chat: how replies reach the user."""

    @abstractmethod
    def send_text(self, chat_id: int, text: str) -> None:
        pass

    @abstractmethod
    def send_typing(self, chat_id: int) -> None:
        pass
