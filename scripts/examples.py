#!/usr/bin/env python
from __future__ import annotations

import argparse
from decimal import Decimal

from pricing_core.currency.conversion import format_price, from_smallest_unit, to_smallest_unit
from pricing_core.engine.arithmetic import pct_to_bps
from pricing_core.engine.pricing.calculator import MarkupStrategy, calculate_price


def describe(strategy: MarkupStrategy, cost_units: int, markup: int, currency: str, rounding: str) -> str:
    price_units = calculate_price(cost_units, markup, strategy, rounding)
    profit = price_units - cost_units
    margin_pct = Decimal(0)
    if price_units:
        margin_pct = (Decimal(profit) * 100 / Decimal(price_units)).quantize(Decimal("0.1"))
    return (
        f"{strategy.value:<13} markup={markup:<6} price={format_price(price_units, currency, in_smallest_units=True):<10}"
        f" profit={format_price(profit, currency, in_smallest_units=True):<9} margin={margin_pct}%"
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Compare markup strategies for one cost")
    parser.add_argument("--cost", default="10.00", help="Cost in major units")
    parser.add_argument("--currency", default="USD")
    parser.add_argument("--margin-pct", default="30")
    parser.add_argument("--markup-pct", default="25")
    parser.add_argument("--fixed-amount", default="5.00", help="Fixed markup in major units")
    parser.add_argument("--rounding", default="ceilStepUSD")
    args = parser.parse_args()

    cost_units = to_smallest_unit(args.cost, args.currency)
    margin = pct_to_bps(Decimal(args.margin_pct))
    markup = pct_to_bps(Decimal(args.markup_pct))
    fixed = to_smallest_unit(args.fixed_amount, args.currency)

    print(f"Base cost: {format_price(from_smallest_unit(cost_units, args.currency), args.currency)}")
    plans = [
        (MarkupStrategy.MARGIN, margin),
        (MarkupStrategy.TARGET_MARGIN, margin),
        (MarkupStrategy.COST_PLUS, markup),
        (MarkupStrategy.MARKUP_ON_COST, markup),
        (MarkupStrategy.KEYSTONE, 0),
        (MarkupStrategy.KEYSTONE_PLUS, markup),
        (MarkupStrategy.FIXED_AMOUNT, fixed),
    ]
    for strategy, value in plans:
        print(describe(strategy, cost_units, value, args.currency, args.rounding))


if __name__ == "__main__":
    main()
