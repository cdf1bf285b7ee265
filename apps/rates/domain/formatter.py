"""
Rendering of exchange rates for chat replies.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext

MIN_DECIMALS_FOR_CHEAP_CURRENCIES = 3
EXPENSIVE_CURRENCY_DECIMALS = 2
DECIMAL_MARK = ","
THOUSANDS_SEPARATOR = " "
PRECISION_MARGIN = 2


def display_decimals(rate: Decimal) -> int:
    """
    Number of decimals to show for the inverse of ``rate``.

    The cheaper the target currency (the larger the raw rate), the more
    digits the inverse needs: one extra digit per power of ten above 10.
    """
    if rate < 1:
        return EXPENSIVE_CURRENCY_DECIMALS

    decimals = MIN_DECIMALS_FOR_CHEAP_CURRENCIES
    power = 1
    while rate / Decimal(10) ** power > 1:
        decimals += 1
        power += 1
    return decimals


def _integer_digits(rate: Decimal) -> int:
    """Upper bound on the digits before the decimal mark of 1 / rate."""
    return max(1, 1 - rate.adjusted())


def format_rate(rate: Decimal) -> str:
    """
    Format the price of one unit of the target currency in the base currency.

    ``rate`` is what the provider returns (target units per one base unit),
    so the displayed value is its inverse.

    Example:
        >>> format_rate(Decimal("0.01418"))
        '70,52'
    """
    decimals = display_decimals(rate)
    with localcontext() as ctx:
        # quantize raises once the result needs more than ctx.prec digits
        ctx.prec = max(ctx.prec, _integer_digits(rate) + decimals + PRECISION_MARGIN)
        value = (Decimal(1) / rate).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    formatted = f"{value:,.{decimals}f}"
    return formatted.translate(str.maketrans({",": THOUSANDS_SEPARATOR, ".": DECIMAL_MARK}))
