"""Strategy-based price derivation on integer smallest-unit amounts.

All amounts are Python ``int`` values in the smallest unit of a currency
(cents for USD, yen for JPY). Percentage markups are basis points where
``BPS_SCALE`` (10000) is 100%. No floating point is used at any stage.
"""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import List, Union

from pricing_core.engine.arithmetic import BPS_SCALE, div_ceil, round_half_away
from pricing_core.engine.rounding.rounding import Rounder, RoundingStyle, resolve_rounder
from pricing_core.util.errors import (
    InvalidCostError,
    InvalidMarginError,
    InvalidMarkupError,
    UnsupportedStrategyError,
)

RoundingArg = Union[RoundingStyle, str, Rounder]


class MarkupStrategy(str, Enum):
    MARGIN = "margin"
    COST_PLUS = "costPlus"
    KEYSTONE = "keystone"
    KEYSTONE_PLUS = "keystonePlus"
    FIXED_AMOUNT = "fixedAmount"
    TARGET_MARGIN = "targetMargin"
    MARKUP_ON_COST = "markupOnCost"


def supported_strategies() -> List[str]:
    return [strategy.value for strategy in MarkupStrategy]


def _resolve_strategy(strategy: Union[MarkupStrategy, str]) -> MarkupStrategy:
    if isinstance(strategy, MarkupStrategy):
        return strategy
    try:
        return MarkupStrategy(strategy)
    except ValueError as exc:
        raise UnsupportedStrategyError(strategy, supported_strategies()) from exc


def _normalize_cost(cost_units: int) -> int:
    if isinstance(cost_units, bool) or not isinstance(cost_units, int):
        raise InvalidCostError(f"cost_units must be an integer number of smallest units, got {cost_units!r}")
    if cost_units < 0:
        raise InvalidCostError("cost_units cannot be negative.")
    return cost_units


def _normalize_markup(markup_value: Union[int, float, Decimal]) -> int:
    if isinstance(markup_value, bool) or not isinstance(markup_value, (int, float, Decimal)):
        raise InvalidMarkupError(f"markup_value must be a number, got {markup_value!r}")
    try:
        return round_half_away(markup_value)
    except ValueError as exc:
        raise InvalidMarkupError(str(exc)) from exc


def _require_margin(markup: int, strategy: MarkupStrategy) -> None:
    if markup < 0 or markup >= BPS_SCALE:
        raise InvalidMarginError(
            f"{strategy.value} must be between 0 and {BPS_SCALE - 1} bps (i.e., < 100%).",
            details={"strategy": strategy.value, "markup": markup},
        )


def _require_non_negative(markup: int, strategy: MarkupStrategy) -> None:
    if markup < 0:
        raise InvalidMarkupError(
            f"{strategy.value} markup cannot be negative.",
            details={"strategy": strategy.value, "markup": markup},
        )


def _raw_price(cost: int, markup: int, strategy: MarkupStrategy) -> int:
    if strategy in (MarkupStrategy.MARGIN, MarkupStrategy.TARGET_MARGIN):
        # ceiling so the realised margin is never below the requested one
        _require_margin(markup, strategy)
        return div_ceil(cost * BPS_SCALE, BPS_SCALE - markup)
    if strategy in (MarkupStrategy.COST_PLUS, MarkupStrategy.MARKUP_ON_COST):
        _require_non_negative(markup, strategy)
        return cost * (BPS_SCALE + markup) // BPS_SCALE
    if strategy is MarkupStrategy.KEYSTONE:
        return cost * 2
    if strategy is MarkupStrategy.KEYSTONE_PLUS:
        _require_non_negative(markup, strategy)
        return cost * 2 * (BPS_SCALE + markup) // BPS_SCALE
    if strategy is MarkupStrategy.FIXED_AMOUNT:
        _require_non_negative(markup, strategy)
        return cost + markup
    raise UnsupportedStrategyError(strategy, supported_strategies())


def calculate_price(
    cost_units: int,
    markup_value: Union[int, float, Decimal],
    strategy: Union[MarkupStrategy, str] = MarkupStrategy.MARGIN,
    rounding: RoundingArg = RoundingStyle.IDENTITY,
) -> int:
    """Compute a selling price in smallest units.

    ``markup_value`` is interpreted per strategy: basis points for the
    percentage strategies, smallest units for ``fixedAmount``, ignored for
    ``keystone``. ``rounding`` is a registry name or any ``int -> int``
    callable applied to the raw price.
    """
    cost = _normalize_cost(cost_units)
    resolved = _resolve_strategy(strategy)
    markup = _normalize_markup(markup_value)
    price_units = _raw_price(cost, markup, resolved)
    rounder = resolve_rounder(rounding)
    return rounder(price_units)


def calculate_price_with_margin(
    cost_units: int,
    margin_bps: Union[int, float, Decimal],
    rounding: RoundingArg = RoundingStyle.IDENTITY,
) -> int:
    """Legacy entry point; equivalent to ``calculate_price(..., "margin", rounding)``."""
    return calculate_price(cost_units, margin_bps, MarkupStrategy.MARGIN, rounding)


def calculate_cost_plus_price(
    cost_units: int, markup_bps: Union[int, float, Decimal], rounding: RoundingArg = RoundingStyle.IDENTITY
) -> int:
    return calculate_price(cost_units, markup_bps, MarkupStrategy.COST_PLUS, rounding)


def calculate_keystone_price(cost_units: int, rounding: RoundingArg = RoundingStyle.IDENTITY) -> int:
    return calculate_price(cost_units, 0, MarkupStrategy.KEYSTONE, rounding)


def calculate_keystone_plus_price(
    cost_units: int, additional_markup_bps: Union[int, float, Decimal], rounding: RoundingArg = RoundingStyle.IDENTITY
) -> int:
    return calculate_price(cost_units, additional_markup_bps, MarkupStrategy.KEYSTONE_PLUS, rounding)


def calculate_fixed_amount_price(
    cost_units: int, fixed_amount_units: Union[int, float, Decimal], rounding: RoundingArg = RoundingStyle.IDENTITY
) -> int:
    return calculate_price(cost_units, fixed_amount_units, MarkupStrategy.FIXED_AMOUNT, rounding)


def calculate_markup_on_cost_price(
    cost_units: int, markup_bps: Union[int, float, Decimal], rounding: RoundingArg = RoundingStyle.IDENTITY
) -> int:
    return calculate_price(cost_units, markup_bps, MarkupStrategy.MARKUP_ON_COST, rounding)
