from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from pricing_core.currency.currencies import Currency, get_currency

Amount = Union[int, float, str, Decimal]

# Symbols the en-US locale prints in prices; every other code prints as
# itself. These can differ from the short display symbol in the table.
EN_US_SYMBOLS = {
    "AUD": "A$",
    "BRL": "R$",
    "CAD": "CA$",
    "CNY": "CN¥",
    "EUR": "€",
    "GBP": "£",
    "HKD": "HK$",
    "ILS": "₪",
    "INR": "₹",
    "JPY": "¥",
    "KRW": "₩",
    "MXN": "MX$",
    "NZD": "NZ$",
    "PHP": "₱",
    "TWD": "NT$",
    "USD": "$",
    "VND": "₫",
    "XAF": "FCFA",
    "XCD": "EC$",
    "XOF": "F CFA",
    "XPF": "CFPF",
}


def _to_decimal(amount: Amount) -> Decimal:
    if isinstance(amount, bool):
        raise ValueError(f"invalid amount: {amount!r}")
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation as exc:
            raise ValueError(f"invalid amount: {amount!r}") from exc
    if not value.is_finite():
        raise ValueError(f"invalid amount: {amount!r}")
    return value


def to_smallest_unit(amount: Amount, currency: Union[Currency, str] = "USD") -> int:
    """Convert a major-unit amount (``2.50``) to smallest units (``250``), half up."""
    config = get_currency(currency)
    scaled = _to_decimal(amount).scaleb(config.decimal_places)
    return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_smallest_unit(units: int, currency: Union[Currency, str] = "USD") -> Decimal:
    config = get_currency(currency)
    return Decimal(int(units)).scaleb(-config.decimal_places)


def step_size(step_amount: Amount, currency: Union[Currency, str] = "USD") -> int:
    return to_smallest_unit(step_amount, currency)


def format_price(
    amount: Amount,
    currency: Union[Currency, str] = "USD",
    in_smallest_units: bool = False,
) -> str:
    """Render an amount en-US style: ``$1,234.50``, ``CA$3.60``, ``CHF 3.58``."""
    config = get_currency(currency)
    if in_smallest_units:
        value = from_smallest_unit(int(amount), config)
    else:
        value = _to_decimal(amount)
    quantum = Decimal(1).scaleb(-config.decimal_places)
    value = value.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    number = f"{abs(value):,.{config.decimal_places}f}"
    symbol = EN_US_SYMBOLS.get(config.code, config.code)
    # A symbol ending in a letter is separated from the digits.
    spacer = " " if symbol[-1].isalpha() else ""
    return f"{sign}{symbol}{spacer}{number}"
