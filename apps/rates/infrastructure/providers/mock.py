"""
Mock provider for development and tests.
Generates deterministic but realistic exchange rates without any network access.
"""

import logging
import random
from datetime import date
from decimal import Decimal

from apps.rates.domain import messages
from apps.rates.domain.interfaces import BaseExchangeRateProvider
from apps.rates.domain.models import Rejection, RejectionReason

logger = logging.getLogger(__name__)


class MockProvider(BaseExchangeRateProvider):
    """
    Offline provider with the same validation as the real one.
    Useful for:
    - Running the bot without an API key
    - Tests that need a rate but not HTTP
    """

    # Units of each currency per one RUB (approximate real-world values)
    BASE_RATES = {
        "RUB": Decimal("1"),
        "USD": Decimal("0.01418"),
        "EUR": Decimal("0.01165"),
        "GBP": Decimal("0.01003"),
        "CHF": Decimal("0.01276"),
        "CNY": Decimal("0.09125"),
        "JPY": Decimal("1.5470"),
        "KZT": Decimal("6.0512"),
        "BYR": Decimal("358.9810"),
        "UZS": Decimal("149.6180"),
    }

    def request_rate(self, base_currency: str, target_currency: str, valuation_date: date) -> Decimal | Rejection:
        source_rate = self.BASE_RATES.get(base_currency)
        target_rate = self.BASE_RATES.get(target_currency)

        if source_rate is None or target_rate is None:
            logger.info("MockProvider: no rates for %s/%s", base_currency, target_currency)
            return Rejection.of(
                RejectionReason.NO_DATA_FOR_DATE,
                messages.NO_DATA_FOR_DATE.format(
                    currency=target_currency,
                    date=valuation_date.strftime(messages.DISPLAY_DATE_FORMAT),
                ),
            )

        cross_rate = target_rate / source_rate

        # Small variation (±2%) seeded by pair and date for reproducibility
        rng = random.Random(f"{base_currency}{target_currency}{valuation_date}")
        variation = Decimal(str(rng.uniform(0.98, 1.02)))

        return (cross_rate * variation).quantize(Decimal("0.000001"))
