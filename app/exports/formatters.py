"""
Display formatting for amounts, rates, dates and statuses.
Invalid or missing values render as a dash instead of raising.
"""
import math
from datetime import datetime
from typing import Any, Dict, Optional

PLACEHOLDER = "-"

CURRENCY_SYMBOLS = {
    "MAD": "MAD",
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "CHF": "CHF",
    "CAD": "$ CA",
}

STATUS_LABELS = {
    "pending": "Pending",
    "reviewing": "Under review",
    "accepted": "Accepted",
    "rejected": "Rejected",
}


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _group(number: float) -> str:
    """1234567.891 -> '1 234 567,89'"""
    text = f"{abs(number):,.2f}".replace(",", " ").replace(".", ",")
    return f"-{text}" if number < 0 and text.strip("0, ") else text


class CurrencyFormatter:
    """Formats amounts for one currency: two fixed decimals, symbol suffix."""

    def __init__(self, code: str):
        self.code = code.upper()
        self.symbol = CURRENCY_SYMBOLS.get(self.code, self.code)

    def format(self, value: Any) -> str:
        number = _as_number(value)
        if number is None:
            return PLACEHOLDER
        return f"{_group(number)} {self.symbol}"


class FormatterRegistry:
    """
    Lookup of currency formatters by ISO code.
    One instance is built per application and handed to exporters, so the cache lives with its owner.
    """

    def __init__(self, default_currency: str = "MAD"):
        self.default_currency = default_currency.upper()
        self._formatters: Dict[str, CurrencyFormatter] = {}

    def get(self, currency: Optional[str] = None) -> CurrencyFormatter:
        code = (currency or self.default_currency).upper()
        if code not in self._formatters:
            self._formatters[code] = CurrencyFormatter(code)
        return self._formatters[code]

    def currency(self, value: Any, currency: Optional[str] = None) -> str:
        return self.get(currency).format(value)


def format_percent(value: Any) -> str:
    number = _as_number(value)
    if number is None:
        return PLACEHOLDER
    return f"{number:.2f} %"


def format_date(value: Any) -> str:
    if not value:
        return PLACEHOLDER
    if isinstance(value, datetime):
        moment = value
    else:
        try:
            moment = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return PLACEHOLDER
    return moment.strftime("%d/%m/%Y %H:%M")


def format_status(status: Any) -> str:
    if not status:
        return "Unknown"
    key = getattr(status, "value", status)
    return STATUS_LABELS.get(key, str(key))
