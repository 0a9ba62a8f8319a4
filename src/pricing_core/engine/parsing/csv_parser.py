from __future__ import annotations

import csv
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import IO, Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from pricing_core.currency.conversion import to_smallest_unit
from pricing_core.currency.currencies import Currency, get_currency
from pricing_core.engine.canonical.models import ItemRecord

REQUIRED_FIELDS = ["sku", "cost"]


@dataclass
class ParseError:
    row_number: int
    reason: str
    row_data: Dict[str, Any]


def _parse_decimal(value: Optional[str]) -> Optional[Decimal]:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        return None
    try:
        parsed = Decimal(stripped)
    except InvalidOperation as exc:
        raise ValueError(f"invalid decimal: {value}") from exc
    if not parsed.is_finite():
        raise ValueError(f"invalid decimal: {value}")
    return parsed


def parse_items_csv(
    handle: IO[str],
    *,
    currency: Union[Currency, str],
    column_map: Dict[str, str],
) -> Tuple[List[ItemRecord], List[ParseError]]:
    config = get_currency(currency)
    reader = csv.DictReader(handle)
    missing = []
    for field in REQUIRED_FIELDS:
        mapped = column_map.get(field, field)
        if not reader.fieldnames or mapped not in reader.fieldnames:
            missing.append(mapped)
    if missing:
        raise ValueError(f"missing columns: {', '.join(missing)}")
    records: List[ItemRecord] = []
    errors: List[ParseError] = []

    for row_number, row in enumerate(reader, start=2):
        try:
            cost = _parse_decimal(row.get(column_map.get("cost", "cost")))
            if cost is None:
                raise ValueError("cost is required")
            record = ItemRecord(
                sku=row.get(column_map.get("sku", "sku")) or "",
                cost=cost,
                cost_units=to_smallest_unit(cost, config),
                title=row.get(column_map.get("title", "title")) or None,
            )
            records.append(record)
        except (ValueError, ValidationError) as exc:
            errors.append(ParseError(row_number=row_number, reason=str(exc), row_data=row))

    return records, errors


def load_items_csv(
    path: str,
    *,
    currency: Union[Currency, str],
    column_map: Dict[str, str],
) -> Tuple[List[ItemRecord], List[ParseError]]:
    with open(path, "r", newline="", encoding="utf-8") as handle:
        return parse_items_csv(handle, currency=currency, column_map=column_map)
