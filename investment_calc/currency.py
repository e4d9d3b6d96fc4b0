"""Display currencies: symbol and number formatting only, no conversion."""

from decimal import Decimal
from enum import Enum

from investment_calc.engine import round_display

DEFAULT_CURRENCY = "USD"


class Currency(Enum):
    """Currency code → (symbol, thousands separator, decimal separator, symbol after amount)"""
    USD = ("$", ",", ".", False)
    EUR = ("€", " ", ",", True)  # fr_FR style: 1 234,56 €
    GBP = ("£", ",", ".", False)
    JPY = ("¥", ",", ".", False)
    CAD = ("C$", ",", ".", False)
    AUD = ("A$", ",", ".", False)

    def __init__(self, symbol: str, group_sep: str, decimal_sep: str, suffix: bool):
        self.symbol = symbol
        self.group_sep = group_sep
        self.decimal_sep = decimal_sep
        self.suffix = suffix

    @property
    def code(self) -> str:
        return self.name

    @property
    def option_label(self) -> str:
        """Label used in currency pickers, e.g. "USD ($)"."""
        return f"{self.name} ({self.symbol})"


def get_currency(code: "str | Currency | None") -> Currency:
    """Resolve a currency code. Accepts "EUR" or "EUR (€)"; unknown → USD."""
    if isinstance(code, Currency):
        return code
    if not code:
        return Currency[DEFAULT_CURRENCY]
    key = str(code).split()[0].strip().upper()
    try:
        return Currency[key]
    except KeyError:
        return Currency[DEFAULT_CURRENCY]


def currency_symbol(code: "str | Currency | None") -> str:
    return get_currency(code).symbol


def format_number(value, code: "str | Currency | None" = DEFAULT_CURRENCY) -> str:
    """Format an amount with 2 decimals and the currency's separators (no symbol)."""
    cur = get_currency(code)
    text = f"{round_display(value).copy_abs():,.2f}"
    if cur.group_sep != "," or cur.decimal_sep != ".":
        integer, frac = text.split(".")
        text = integer.replace(",", cur.group_sep) + cur.decimal_sep + frac
    return text


def format_money(value, code: "str | Currency | None" = DEFAULT_CURRENCY) -> str:
    """$1,234.56 / -$1,234.56 / 1 234,56 €"""
    cur = get_currency(code)
    amount = round_display(value)
    sign = "-" if amount < 0 else ""
    number = format_number(amount, cur)
    if cur.suffix:
        return f"{sign}{number} {cur.symbol}"
    return f"{sign}{cur.symbol}{number}"


def format_percent(value: Decimal) -> str:
    """Decimal percent → "7.00%" """
    return f"{round_display(value):.2f}%"
