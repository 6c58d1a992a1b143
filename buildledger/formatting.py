"""
Display formatting for amounts, dates and sizes.

BDT, INR and PKR amounts use South-Asian digit grouping: the last three
digits, then groups of two (12,34,567). Other currencies group by three.
"""

from datetime import date, datetime, timedelta
from typing import Union

from buildledger.reference.currency import (
    DEFAULT_CURRENCY_CODE,
    LAKH_GROUPED_CURRENCIES,
    get_currency,
)

DateLike = Union[str, date]

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_BYTE_UNITS = ("B", "KB", "MB", "GB")


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.split("T", 1)[0])


def format_plain_number(value: float) -> str:
    """Print a number without a trailing ``.0``: 40.0 -> ``40``, 7.5 -> ``7.5``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _group_lakh(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs) + "," + tail


def format_number(amount: float, decimal_places: int = 0, lakh: bool = False) -> str:
    """Group digits and fix the number of decimals. Sign is kept."""
    text = f"{abs(amount):.{decimal_places}f}"
    whole, _, fraction = text.partition(".")
    whole = _group_lakh(whole) if lakh else f"{int(whole):,}"
    result = f"{whole}.{fraction}" if fraction else whole
    if amount < 0 and text.strip("0.") != "":
        result = "-" + result
    return result


def _format_amount(amount: float, code: str) -> tuple[str, str]:
    currency = get_currency(code)
    number = format_number(
        amount,
        currency.decimal_places,
        lakh=currency.code in LAKH_GROUPED_CURRENCIES,
    )
    return currency.symbol, number


def format_currency(amount: float, code: str = DEFAULT_CURRENCY_CODE) -> str:
    """
    Format an amount in a currency, e.g. ``৳12,34,567`` or ``$1,234.50``.

    Unknown codes fall back to BDT.
    """
    symbol, number = _format_amount(amount, code)
    if number.startswith("-"):
        return f"-{symbol}{number[1:]}"
    return f"{symbol}{number}"


def format_currency_symbol(amount: float, code: str = DEFAULT_CURRENCY_CODE) -> str:
    symbol, number = _format_amount(amount, code)
    return f"{symbol} {number}"


def format_date(value: DateLike) -> str:
    """``2025-01-05`` -> ``5 Jan 2025``."""
    d = _as_date(value)
    return f"{d.day} {_MONTHS[d.month - 1]} {d.year}"


def format_date_ddmmyyyy(value: DateLike) -> str:
    """``2025-01-05`` -> ``05/01/2025``, the date format used in CSV exports."""
    return _as_date(value).strftime("%d/%m/%Y")


def format_week_range(week_start: DateLike) -> str:
    start = _as_date(week_start)
    end = start + timedelta(days=6)
    return f"{start.day} {_MONTHS[start.month - 1]} - {end.day} {_MONTHS[end.month - 1]}"


def format_bytes(size: int) -> str:
    """Human-readable byte size with up to two decimals: ``1.5 KB``."""
    if size <= 0:
        return "0 B"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_BYTE_UNITS) - 1:
        value /= 1024
        unit += 1
    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {_BYTE_UNITS[unit]}"


def csv_text(value: object) -> str:
    """Quote a free-text CSV field, doubling any embedded quotes."""
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def number_to_bengali_words(amount: float) -> str:
    # Simplified wording; full Bengali numerals are not generated.
    return f"টাকা {format_plain_number(amount)} মাত্র"
