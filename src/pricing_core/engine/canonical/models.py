from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, field_validator


class ItemRecord(BaseModel):
    sku: str
    cost: Decimal
    cost_units: int
    price_units: Optional[int] = None
    price: Optional[Decimal] = None
    title: Optional[str] = None

    @field_validator("sku")
    @classmethod
    def required_stripped(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("sku is required")
        return value.strip()

    @field_validator("cost")
    @classmethod
    def non_negative_cost(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("cost must be >= 0")
        return value


CANONICAL_COLUMNS = [
    "sku",
    "title",
    "cost",
    "cost_units",
    "price_units",
    "price",
]
