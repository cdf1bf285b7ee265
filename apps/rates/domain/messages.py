"""
User-facing texts sent back to the chat.
"""

NOT_TEXT = "Sorry, I can only read text messages."
UNKNOWN_CURRENCY_CODE = "I don't know this currency code."
INVALID_DATE = "I couldn't make out the date."
DATE_IN_FUTURE = "The date can't be in the future."
NO_DATA_FOR_DATE = "There is no {currency} exchange rate data as of {date}."
NO_DATA = "There is no exchange rate data for this date."
NO_DATA_BEFORE = "Exchange rates are only available from {date}."
SERVICE_UNAVAILABLE = "The exchange rate service is unavailable right now. Please try again later."

INSTRUCTION = (
    "Send me a currency code and a date separated by a space, for example:\n"
    "USD 16.05.2021\n"
    "Accepted date formats: dd.mm.yyyy, mm-dd-yyyy, yyyy-mm-dd, dd/mm/yyyy."
)

# Note the two spaces after "=": clients rely on this exact layout
REPLY = "{date}, 1 {currency} =  {rate} {base}"

DISPLAY_DATE_FORMAT = "%d.%m.%Y"
