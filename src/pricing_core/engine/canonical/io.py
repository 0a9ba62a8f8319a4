from __future__ import annotations

import csv
import io
from decimal import Decimal, InvalidOperation
from typing import Iterable, Sequence

from pricing_core.currency.currencies import Currency

MONEY_FIELDS = {"cost", "price"}


def _format_money(value: object, quantum: Decimal) -> object:
    if value is None:
        return None
    if isinstance(value, Decimal):
        decimal_value = value
    else:
        try:
            decimal_value = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            return value
    return str(decimal_value.quantize(quantum))


def _normalize_row(row: dict, quantum: Decimal) -> dict:
    normalized = dict(row)
    for field in MONEY_FIELDS:
        if field in normalized:
            normalized[field] = _format_money(normalized[field], quantum)
    return normalized


def write_csv_bytes(
    rows: Iterable[dict],
    fieldnames: Sequence[str],
    *,
    currency: Currency,
    extrasaction: str = "raise",
) -> bytes:
    quantum = currency.smallest_unit
    normalized_rows = [_normalize_row(row, quantum) for row in rows]
    normalized_rows.sort(key=lambda row: str(row.get("sku", "")))
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=fieldnames,
        extrasaction=extrasaction,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writeheader()
    for row in normalized_rows:
        writer.writerow(row)
    return buffer.getvalue().encode("utf-8")


def read_csv_rows(bytes_blob: bytes) -> list[dict]:
    buffer = io.StringIO(bytes_blob.decode("utf-8"))
    reader = csv.DictReader(buffer)
    return list(reader)
