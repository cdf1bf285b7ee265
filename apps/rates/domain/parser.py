"""
Turns a raw chat message into a RateQuery.
"""

import logging
from datetime import date, datetime
from typing import Optional

from apps.rates.domain.currencies import SUPPORTED_CURRENCIES, is_currency_code, is_supported_currency
from apps.rates.domain.models import RateQuery, Rejection, RejectionReason

logger = logging.getLogger(__name__)

# Tried in order, first match wins. "/" is the date separator of the bot's
# locale, which is "."; a literal "/" is accepted as well.
DATE_FORMATS = ("%d.%m/%Y", "%m-%d-%Y", "%Y-%m-%d", "%d/%m/%Y")
LOCALE_DATE_SEPARATOR = "."


def _candidate_formats() -> list[str]:
    candidates = []
    for fmt in DATE_FORMATS:
        for candidate in (fmt.replace("/", LOCALE_DATE_SEPARATOR), fmt):
            if candidate not in candidates:
                candidates.append(candidate)
    return candidates


_CANDIDATE_FORMATS = _candidate_formats()


def parse_date(token: str) -> Optional[date]:
    """
    Parse ``token`` with the first matching accepted format.

    Matching is exact: strptime alone would also take "1.5.2021", so the
    parsed value must format back to the very same token.
    """
    for fmt in _CANDIDATE_FORMATS:
        try:
            parsed = datetime.strptime(token, fmt).date()
        except ValueError:
            continue
        if parsed.strftime(fmt) == token:
            return parsed
    return None


class QueryParser:

    def __init__(self, supported_currencies: frozenset[str] = SUPPORTED_CURRENCIES):
        self.supported_currencies = supported_currencies

    def parse(self, raw_text: Optional[str], now: date) -> RateQuery | Rejection:
        """
        Validate a message of the form "<currency-code> <date>".

        Args:
            raw_text: Message text, None when the message carries no text
            now: Current calendar date, dates after it are rejected

        Returns:
            RateQuery on success, otherwise a Rejection
        """
        if raw_text is None:
            return Rejection.of(RejectionReason.NOT_TEXT)

        tokens = raw_text.split()

        if not tokens or not is_currency_code(tokens[0]):
            logger.debug("Invalid currency code in %r", raw_text)
            return Rejection.of(RejectionReason.UNKNOWN_CURRENCY_CODE)
        currency = tokens[0].upper()

        requested_date = parse_date(tokens[1]) if len(tokens) > 1 else None
        if requested_date is None:
            logger.debug("Invalid date in %r", raw_text)
            return Rejection.of(RejectionReason.INVALID_DATE_FORMAT)

        # A future date wins over an unsupported but well-formed code
        if requested_date > now:
            logger.debug("Date in future in %r", raw_text)
            return Rejection.of(RejectionReason.DATE_IN_FUTURE)

        if not is_supported_currency(currency, self.supported_currencies):
            logger.debug("Unsupported currency %s", currency)
            return Rejection.of(RejectionReason.UNKNOWN_CURRENCY_CODE)

        return RateQuery(target_currency=currency, date=requested_date)
