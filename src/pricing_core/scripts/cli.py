#!/usr/bin/env python
from __future__ import annotations

import argparse
import json
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Optional

import yaml

from pricing_core.app.config.loader import load_pricing_profile
from pricing_core.app.models.config import CURRENCY_ROUNDING
from pricing_core.currency.conversion import format_price, to_smallest_unit
from pricing_core.currency.currencies import (
    Currency,
    create_currency,
    currencies_by_country,
    currencies_by_decimal_places,
    currency_by_number,
    currency_details,
    get_currency,
    iso_data_date,
    supported_currencies,
)
from pricing_core.engine.arithmetic import pct_to_bps
from pricing_core.engine.canonical.io import write_csv_bytes
from pricing_core.engine.canonical.models import CANONICAL_COLUMNS
from pricing_core.engine.pipeline import run_batch
from pricing_core.engine.pricing.calculator import calculate_price, supported_strategies
from pricing_core.engine.rounding.rounding import (
    ROUNDERS,
    Rounder,
    currency_step_rounder,
    describe_rounders,
    resolve_rounder,
)


def _decimal_arg(value: str) -> Decimal:
    try:
        parsed = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"invalid decimal: {value}") from exc
    if not parsed.is_finite():
        raise argparse.ArgumentTypeError(f"invalid decimal: {value}")
    return parsed


def _markup_units(args: argparse.Namespace, currency: Currency) -> int:
    if args.markup_bps is not None:
        return args.markup_bps
    if args.markup_pct is not None:
        return pct_to_bps(args.markup_pct)
    if args.markup_amount is not None:
        return to_smallest_unit(args.markup_amount, currency)
    return 0


def _rounder(name: str, currency: Currency) -> Rounder:
    if name == CURRENCY_ROUNDING:
        return currency_step_rounder(currency.code)
    return resolve_rounder(name)


def _cost_units(args: argparse.Namespace, currency: Currency) -> int:
    if args.cost_units is not None:
        return args.cost_units
    return to_smallest_unit(args.cost, currency)


def _quote_currency(args: argparse.Namespace) -> Currency:
    if args.decimal_places is not None:
        return create_currency(args.currency, args.symbol or args.currency, args.decimal_places)
    if args.symbol is not None:
        raise ValueError("--symbol requires --decimal-places")
    return get_currency(args.currency)


def cmd_quote(args: argparse.Namespace) -> int:
    currency = _quote_currency(args)
    cost_units = _cost_units(args, currency)
    markup = _markup_units(args, currency)
    if args.all_rounders:
        prices = [(name, calculate_price(cost_units, markup, args.strategy, name)) for name in ROUNDERS]
    else:
        prices = [(None, calculate_price(cost_units, markup, args.strategy, _rounder(args.rounding, currency)))]

    if args.decimal_places is not None:
        print(f"Currency: {currency.code} ({currency.display_symbol}), {currency.decimal_places} decimal places")
    print(f"Cost: {format_price(cost_units, currency, in_smallest_units=True)} ({cost_units} units)")
    print(f"Strategy: {args.strategy}, markup: {markup}")
    for name, price_units in prices:
        if name is None:
            print(f"Price: {format_price(price_units, currency, in_smallest_units=True)} ({price_units} units)")
        else:
            print(f"{name:<15}: {format_price(price_units, currency, in_smallest_units=True)}")
    return 0


def cmd_rounders(args: argparse.Namespace) -> int:
    for name, description in describe_rounders():
        print(f"  {name:<15}: {description}")
    print(f"  {CURRENCY_ROUNDING:<15}: step rounding conventional for the chosen currency")
    return 0


def cmd_strategies(args: argparse.Namespace) -> int:
    for name in supported_strategies():
        print(name)
    return 0


def _print_currency_row(currency: Currency) -> None:
    print(f"{currency.code:<6}{currency.display_symbol:<8}{currency.decimal_places:<4}{currency.name or ''}")


def cmd_currencies(args: argparse.Namespace) -> int:
    if args.number is not None:
        found = currency_by_number(args.number)
        if not found:
            print(f"No currency found with ISO number {args.number}", file=sys.stderr)
            return 1
        _print_currency_row(found)
        return 0
    if args.country:
        matches = currencies_by_country(args.country)
        if not matches:
            print(f"No currencies found for country: {args.country}", file=sys.stderr)
            return 1
        for currency in matches:
            _print_currency_row(currency)
        return 0
    codes = supported_currencies()
    if args.decimal_places is not None:
        codes = currencies_by_decimal_places(args.decimal_places)
    for code in codes:
        _print_currency_row(get_currency(code))
    print(f"{len(codes)} currencies (ISO 4217 data as of {iso_data_date()})")
    return 0


def cmd_currency(args: argparse.Namespace) -> int:
    details = currency_details(args.code)
    if not details:
        print(f"Currency not found: {args.code}", file=sys.stderr)
        return 1
    print(json.dumps(details, indent=2, ensure_ascii=False))
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    profile = load_pricing_profile(args.profile)
    with open(args.input, "r", newline="", encoding="utf-8") as handle:
        result = run_batch(handle, profile)
    rows = [record.model_dump() for record in result.records]
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(write_csv_bytes(rows, CANONICAL_COLUMNS, currency=profile.currency_config()))
    if args.errors:
        errors = [
            {"row_number": error.row_number, "reason": error.reason, "row_data": error.row_data}
            for error in result.errors
        ]
        Path(args.errors).write_text(json.dumps(errors, default=str, indent=2), encoding="utf-8")
    print(json.dumps(result.summary))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pricing-core", description="Integer price derivation and rounding")
    subparsers = parser.add_subparsers(dest="command", required=True)

    quote = subparsers.add_parser("quote", help="Price a single cost")
    cost = quote.add_mutually_exclusive_group(required=True)
    cost.add_argument("--cost", type=_decimal_arg, help="Cost in major units, e.g. 2.50")
    cost.add_argument("--cost-units", type=int, help="Cost in smallest units, e.g. 250")
    quote.add_argument("--currency", default="USD", help="ISO code, or a custom code with --decimal-places")
    quote.add_argument("--decimal-places", type=int, help="Quote in a custom currency with this many decimals")
    quote.add_argument("--symbol", help="Display symbol for a custom currency")
    quote.add_argument("--strategy", default="margin", help=", ".join(supported_strategies()))
    markup = quote.add_mutually_exclusive_group()
    markup.add_argument("--markup-bps", type=int, help="Markup or margin in basis points")
    markup.add_argument("--markup-pct", type=_decimal_arg, help="Markup or margin in percent, e.g. 30")
    markup.add_argument("--markup-amount", type=_decimal_arg, help="Fixed markup in major units (fixedAmount)")
    quote.add_argument("--rounding", default="identity", help="Rounder name or 'currency'")
    quote.add_argument("--all-rounders", action="store_true", help="Show the price under every rounder")
    quote.set_defaults(handler=cmd_quote)

    rounders = subparsers.add_parser("rounders", help="List rounding styles")
    rounders.set_defaults(handler=cmd_rounders)

    strategies = subparsers.add_parser("strategies", help="List markup strategies")
    strategies.set_defaults(handler=cmd_strategies)

    currencies = subparsers.add_parser("currencies", help="List or search currencies")
    currencies.add_argument("--decimal-places", type=int)
    currencies.add_argument("--country")
    currencies.add_argument("--number")
    currencies.set_defaults(handler=cmd_currencies)

    currency = subparsers.add_parser("currency", help="Show one currency")
    currency.add_argument("code")
    currency.set_defaults(handler=cmd_currency)

    batch = subparsers.add_parser("batch", help="Price a CSV of items with a YAML profile")
    batch.add_argument("--profile", required=True, help="Path to pricing profile YAML")
    batch.add_argument("--input", required=True, help="Items CSV with sku and cost columns")
    batch.add_argument("--output", required=True, help="Priced CSV destination")
    batch.add_argument("--errors", help="Optional JSON file for rejected rows")
    batch.set_defaults(handler=cmd_batch)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.handler(args)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
