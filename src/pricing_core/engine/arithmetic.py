from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from pricing_core.util.errors import InvalidMarkupError

# 10000 bps == 100%
BPS_SCALE = 10000

Number = Union[int, float, Decimal]


def div_ceil(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def div_nearest(numerator: int, denominator: int) -> int:
    """Integer division rounding to the nearest integer, ties up."""
    return (numerator + denominator // 2) // denominator


def round_half_away(value: Number) -> int:
    if isinstance(value, int):
        return value
    try:
        decimal_value = value if isinstance(value, Decimal) else Decimal(str(value))
        return int(decimal_value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"cannot round {value!r} to an integer") from exc


def pct_to_bps(pct: Number) -> int:
    """Convert a percentage (``30`` or ``12.5``) to basis points (``3000``, ``1250``).

    Floats go through their shortest ``repr`` so ``12.345`` becomes ``1235``
    rather than inheriting binary representation error.
    """
    if isinstance(pct, bool) or not isinstance(pct, (int, float, Decimal)):
        raise InvalidMarkupError(f"pct_to_bps expects a finite number, got {pct!r}")
    decimal_pct = pct if isinstance(pct, Decimal) else Decimal(str(pct))
    if not decimal_pct.is_finite():
        raise InvalidMarkupError(f"pct_to_bps expects a finite number, got {pct!r}")
    return round_half_away(decimal_pct * 100)
