"""Amount to words for the invoice summary ("One Thousand ... Rupees only")"""

from decimal import Decimal
from typing import Optional, Union

from app.config import settings

ONES = [
    "Zero", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# First value printed as a plain numeral instead of words
WORDS_LIMIT = 100_000


def _convert(n: int) -> str:
    if n < 0 or n >= WORDS_LIMIT:
        return str(n)
    if n < 20:
        return ONES[n]
    if n < 100:
        return TENS[n // 10] + (" " + ONES[n % 10] if n % 10 else "")
    if n < 1000:
        return ONES[n // 100] + " Hundred" + (" and " + _convert(n % 100) if n % 100 else "")
    return _convert(n // 1000) + " Thousand" + (" " + _convert(n % 1000) if n % 1000 else "")


def amount_to_words(amount: Union[int, float, Decimal], currency_label: Optional[str] = None) -> str:
    """
    Spell out the integer part of an amount.

    The fractional part is dropped, not rounded: 1250.75 reads the same as 1250.
    Amounts of 100,000 and above are written as a numeral.

    >>> amount_to_words(105)
    'One Hundred and Five Rupees only'
    """
    label = currency_label if currency_label is not None else settings.CURRENCY_LABEL
    return f"{_convert(int(Decimal(str(amount))))} {label}"
