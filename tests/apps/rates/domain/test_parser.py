import pytest
from datetime import date

from apps.rates.domain.currencies import SUPPORTED_CURRENCIES
from apps.rates.domain.models import RateQuery, Rejection, RejectionReason
from apps.rates.domain.parser import QueryParser, parse_date

TODAY = date(2021, 5, 20)


@pytest.fixture
def parser():
    return QueryParser()


@pytest.mark.parametrize("token", [
    "16.05.2021",
    "16.05/2021",
    "05-16-2021",
    "2021-05-16",
    "16/05/2021",
])
def test_parse_accepted_date_formats(parser, token):
    """
    Test that every accepted date format yields the same query.
    """
    result = parser.parse(f"USD {token}", TODAY)

    assert result == RateQuery(target_currency="USD", date=date(2021, 5, 16))


def test_parse_every_supported_currency(parser):
    """
    Test that every code of the allow-list is accepted.
    """
    for code in SUPPORTED_CURRENCIES:
        result = parser.parse(f"{code} 2021-05-16", TODAY)

        assert isinstance(result, RateQuery), code
        assert result.target_currency == code


def test_parse_normalizes_currency_to_upper_case(parser):
    result = parser.parse("eur 16.05.2021", TODAY)

    assert result == RateQuery(target_currency="EUR", date=date(2021, 5, 16))


def test_parse_ignores_extra_tokens_and_whitespace(parser):
    result = parser.parse("  usd    16.05.2021 please  thanks ", TODAY)

    assert result == RateQuery(target_currency="USD", date=date(2021, 5, 16))


def test_parse_today_is_accepted(parser):
    result = parser.parse("USD 20.05.2021", TODAY)

    assert result == RateQuery(target_currency="USD", date=TODAY)


def test_parse_not_text(parser):
    result = parser.parse(None, TODAY)

    assert isinstance(result, Rejection)
    assert result.reason == RejectionReason.NOT_TEXT


@pytest.mark.parametrize("text", [
    "qwerty",
    "123",
    "dollar 03.04.2021",
    "XXX 03.04.2021",
    "US 03.04.2021",
    "U$D 03.04.2021",
    "",
    "   ",
])
def test_parse_unknown_currency_code(parser, text):
    """
    Test that anything but a supported 3-letter code is rejected when the date is not in the future.
    """
    result = parser.parse(text, TODAY)

    assert isinstance(result, Rejection)
    assert result.reason == RejectionReason.UNKNOWN_CURRENCY_CODE


@pytest.mark.parametrize("text", [
    "USD 31.02.2020",
    "EUR 195",
    "JPY asd",
    "USD",
    "USD 1.5.2021",
    "USD 2021/05/16",
    "USD 16-05-2021",
])
def test_parse_invalid_date(parser, text):
    result = parser.parse(text, TODAY)

    assert isinstance(result, Rejection)
    assert result.reason == RejectionReason.INVALID_DATE_FORMAT


def test_parse_date_in_future(parser):
    result = parser.parse("USD 21.05.2021", TODAY)

    assert isinstance(result, Rejection)
    assert result.reason == RejectionReason.DATE_IN_FUTURE
    assert result.message == RejectionReason.DATE_IN_FUTURE.default_message


@pytest.mark.parametrize("text", [
    "gbp 2030-01-01",
    "XXX 2030-01-01",
    "xyz 21.05.2021",
])
def test_parse_date_in_future_regardless_of_currency_validity(parser, text):
    """
    Test that a future date is reported for supported and unsupported 3-letter codes alike.
    """
    result = parser.parse(text, TODAY)

    assert isinstance(result, Rejection)
    assert result.reason == RejectionReason.DATE_IN_FUTURE


def test_parse_malformed_code_is_checked_before_future_date(parser):
    result = parser.parse("dollar 2030-01-01", TODAY)

    assert result.reason == RejectionReason.UNKNOWN_CURRENCY_CODE


def test_parse_respects_custom_allow_list():
    parser = QueryParser(frozenset({"USD"}))

    assert isinstance(parser.parse("USD 16.05.2021", TODAY), RateQuery)
    assert parser.parse("EUR 16.05.2021", TODAY).reason == RejectionReason.UNKNOWN_CURRENCY_CODE


def test_parse_date_first_format_wins():
    """
    Test that "05-06-2021" is read as month-day-year, the only dash format with year last.
    """
    assert parse_date("05-06-2021") == date(2021, 5, 6)
