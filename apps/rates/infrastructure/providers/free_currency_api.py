import logging
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional

import requests

from apps.rates.domain import messages
from apps.rates.domain.currencies import SUPPORTED_CURRENCIES
from apps.rates.domain.interfaces import BaseExchangeRateProvider
from apps.rates.domain.models import DateWindow, Rejection, RejectionReason

logger = logging.getLogger(__name__)


class FreeCurrencyApiProvider(BaseExchangeRateProvider):
    """
    freecurrencyapi.net provider.
    Uses /latest for today's date and /historical for any other date.
    """

    MAX_ATTEMPTS = 3
    API_DATE_FORMAT = "%Y-%m-%d"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        date_window: DateWindow,
        timeout: float = 10,
        supported_currencies: frozenset[str] = SUPPORTED_CURRENCIES,
        today: Optional[Callable[[], date]] = None,
    ):
        super().__init__(date_window, supported_currencies, today)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def build_request_uri(self, base_currency: str, valuation_date: date, latest: Optional[bool] = None) -> str:
        # Format: https://freecurrencyapi.net/api/v2/historical?apikey=KEY&base_currency=RUB&date_from=2021-05-16&date_to=2021-05-16
        if latest is None:
            latest = valuation_date == self.today()
        if latest:
            return f"{self.base_url}/api/v2/latest?apikey={self.api_key}&base_currency={base_currency}"

        date_str = valuation_date.strftime(self.API_DATE_FORMAT)
        return (
            f"{self.base_url}/api/v2/historical"
            f"?apikey={self.api_key}"
            f"&base_currency={base_currency}"
            f"&date_from={date_str}"
            f"&date_to={date_str}"
        )

    def request_rate(self, base_currency: str, target_currency: str, valuation_date: date) -> Decimal | Rejection:
        """
        Fetch the rate of ``target_currency`` for one unit of ``base_currency``.

        Returns:
            Exchange rate as Decimal, or a Rejection (TRANSPORT_FAILURE / NO_DATA_FOR_DATE)
        """
        is_latest = valuation_date == self.today()
        url = self.build_request_uri(base_currency, valuation_date, latest=is_latest)

        response = self._send_request(url)
        if response is None:
            return Rejection.of(RejectionReason.TRANSPORT_FAILURE)

        try:
            payload = response.json(parse_float=Decimal, parse_int=Decimal)
        except ValueError as e:
            logger.error("Invalid JSON from freecurrencyapi: %s", e)
            return self._no_data(target_currency, valuation_date)

        # Response format: latest {"data": {"USD": 0.0134}}, historical {"data": {"2021-05-16": {"USD": 0.0134}}}
        rates = self._extract_rates(payload, None if is_latest else valuation_date.strftime(self.API_DATE_FORMAT))
        rate = self._to_decimal(rates.get(target_currency)) if rates is not None else None

        if rate is None or rate <= 0:
            logger.info("No %s exchange rate data as of %s", target_currency, valuation_date)
            return self._no_data(target_currency, valuation_date)

        logger.info("Exchange rate %s/%s on %s received", base_currency, target_currency, valuation_date)
        return rate

    def _send_request(self, url: str) -> Optional[requests.Response]:
        """GET ``url``, retrying transport failures back to back. None once all attempts failed."""
        logger.info("Sending request to freecurrencyapi")
        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            try:
                response = requests.get(url, timeout=self.timeout)
                response.raise_for_status()
                return response
            except requests.exceptions.RequestException as e:
                if attempt == self.MAX_ATTEMPTS:
                    logger.warning(
                        "Attempts to get response from freecurrencyapi exhausted (%d): %s",
                        self.MAX_ATTEMPTS,
                        e,
                    )
                    return None
                logger.info("Unsuccessful attempt %d to get response from freecurrencyapi: %s", attempt, e)
        return None

    @staticmethod
    def _extract_rates(payload: Any, date_key: Optional[str]) -> Optional[dict]:
        if not isinstance(payload, dict):
            return None
        rates = payload.get("data")
        if date_key is not None and isinstance(rates, dict):
            rates = rates.get(date_key)
        return rates if isinstance(rates, dict) else None

    @staticmethod
    def _to_decimal(value: Any) -> Optional[Decimal]:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            return None
        rate = Decimal(str(value))
        return rate if rate.is_finite() else None

    @staticmethod
    def _no_data(target_currency: str, valuation_date: date) -> Rejection:
        return Rejection.of(
            RejectionReason.NO_DATA_FOR_DATE,
            messages.NO_DATA_FOR_DATE.format(
                currency=target_currency,
                date=valuation_date.strftime(messages.DISPLAY_DATE_FORMAT),
            ),
        )
