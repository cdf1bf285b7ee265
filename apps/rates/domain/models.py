"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from apps.rates.domain import messages


class RejectionReason(Enum):
    """Every expected way a query can fail."""

    NOT_TEXT = "not_text"
    UNKNOWN_CURRENCY_CODE = "unknown_currency_code"
    INVALID_DATE_FORMAT = "invalid_date_format"
    DATE_IN_FUTURE = "date_in_future"
    NO_DATA_FOR_DATE = "no_data_for_date"
    TRANSPORT_FAILURE = "transport_failure"

    @property
    def is_input_error(self) -> bool:
        """Input errors are answered with the instruction message as well."""
        return self in _INPUT_ERRORS

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_INPUT_ERRORS = frozenset({
    RejectionReason.NOT_TEXT,
    RejectionReason.UNKNOWN_CURRENCY_CODE,
    RejectionReason.INVALID_DATE_FORMAT,
    RejectionReason.DATE_IN_FUTURE,
})

_DEFAULT_MESSAGES = {
    RejectionReason.NOT_TEXT: messages.NOT_TEXT,
    RejectionReason.UNKNOWN_CURRENCY_CODE: messages.UNKNOWN_CURRENCY_CODE,
    RejectionReason.INVALID_DATE_FORMAT: messages.INVALID_DATE,
    RejectionReason.DATE_IN_FUTURE: messages.DATE_IN_FUTURE,
    RejectionReason.NO_DATA_FOR_DATE: messages.NO_DATA,
    RejectionReason.TRANSPORT_FAILURE: messages.SERVICE_UNAVAILABLE,
}


@dataclass(frozen=True)
class Rejection:
    """Why a query could not be answered, with the text shown to the user."""

    reason: RejectionReason
    message: str

    @classmethod
    def of(cls, reason: RejectionReason, message: Optional[str] = None) -> "Rejection":
        return cls(reason=reason, message=message if message is not None else reason.default_message)


@dataclass(frozen=True)
class RateQuery:
    """A validated request for one currency on one date."""

    target_currency: str
    date: date

    def __post_init__(self):
        if len(self.target_currency) != 3 or not self.target_currency.isupper():
            raise ValueError(f"Currency code must be 3 upper-case letters, got '{self.target_currency}'")


@dataclass(frozen=True)
class DateWindow:
    """Inclusive range of dates the provider has data for; the upper bound is always today."""

    earliest: date

    def is_too_early(self, value: date) -> bool:
        return value < self.earliest

    def is_in_future(self, value: date, today: date) -> bool:
        return value > today


@dataclass(frozen=True)
class IncomingMessage:
    """A chat message as handed over by the transport. ``text`` is None for non-text payloads."""

    chat_id: int
    message_id: int
    text: Optional[str]
    timestamp: datetime
