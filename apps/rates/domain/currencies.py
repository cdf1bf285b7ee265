"""
Static list of currency codes the rate API can quote.
"""

SUPPORTED_CURRENCIES: frozenset[str] = frozenset({
    "AED", "NGN", "PYG", "PLN", "PKR", "PHP", "PGK", "PEN", "PAB", "OMR", "NZD", "NPR", "NOK", "NIO",
    "NAD", "RON", "MYR", "MXN", "MWK", "MVR", "MUR", "MOP", "MNT", "MMK", "MKD", "MDL", "MAD", "LYD",
    "QAR", "RUB", "LRD", "TRY", "YER", "XPF", "XOF", "XAF", "VND", "UZS", "USD", "UGX", "UAH", "TZS",
    "TWD", "TTD", "TND", "RWF", "TJS", "THB", "SZL", "SYP", "SVC", "STD", "SOS", "SLL", "SGD", "SEK",
    "SCR", "SAR", "LSL", "LKR", "ALL", "CAD", "DZD", "DOP", "DKK", "DJF", "CZK", "CVE", "CRC", "COP",
    "CNY", "CLP", "CHF", "CDF", "BYR", "ETB", "BWP", "BSD", "BRL", "BOB", "BND", "BIF", "BHD", "BGN",
    "BDT", "AUD", "ARS", "AMD", "EGP", "EUR", "LBP", "IQD", "LAK", "KZT", "KRW", "KMF", "KHR", "KGS",
    "KES", "JPY", "JOD", "ISK", "IRR", "INR", "FJD", "ILS", "IDR", "HUF", "HTG", "HNL", "HKD",
    "GYD", "GTQ", "GNF", "GMD", "GEL", "GBP", "ZAR",
})

CURRENCY_CODE_LENGTH = 3


def is_currency_code(code: str) -> bool:
    """Shape check only: 3 ASCII letters, any case."""
    return len(code) == CURRENCY_CODE_LENGTH and code.isascii() and code.isalpha()


def is_supported_currency(code: str, supported: frozenset[str] = SUPPORTED_CURRENCIES) -> bool:
    """Case-insensitive membership check, also enforcing the 3-letter alphabetic shape."""
    return is_currency_code(code) and code.upper() in supported
