from __future__ import annotations

from dataclasses import dataclass
from typing import IO, Iterable, List

from pricing_core.app.models.config import PricingProfile
from pricing_core.currency.conversion import from_smallest_unit
from pricing_core.engine.canonical.models import ItemRecord
from pricing_core.engine.parsing.csv_parser import ParseError, parse_items_csv
from pricing_core.engine.pricing.calculator import calculate_price
from pricing_core.util.logging import get_logger, log_event

logger = get_logger("pricing_core.pipeline")


@dataclass
class BatchResult:
    records: List[ItemRecord]
    errors: List[ParseError]
    summary: dict


def price_items(records: Iterable[ItemRecord], profile: PricingProfile) -> List[ItemRecord]:
    currency = profile.currency_config()
    markup = profile.markup_value()
    rounder = profile.rounder()
    priced: List[ItemRecord] = []
    for record in records:
        price_units = calculate_price(record.cost_units, markup, profile.strategy, rounder)
        priced.append(
            record.model_copy(
                update={
                    "price_units": price_units,
                    "price": from_smallest_unit(price_units, currency),
                }
            )
        )
    return priced


def run_batch(handle: IO[str], profile: PricingProfile) -> BatchResult:
    records, errors = parse_items_csv(
        handle,
        currency=profile.currency,
        column_map=profile.column_map,
    )
    priced = price_items(records, profile)
    summary = {
        "profile_id": profile.profile_id,
        "currency": profile.currency,
        "strategy": profile.strategy.value,
        "record_count": len(priced),
        "invalid_rows": len(errors),
        "total_rows": len(priced) + len(errors),
    }
    log_event(logger, "batch_priced", **summary)
    return BatchResult(records=priced, errors=errors, summary=summary)
