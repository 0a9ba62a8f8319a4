from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class QuoteRequest(BaseModel):
    cost_units: int
    markup: int = 0
    # plain strings so unknown names reach the engine and its error taxonomy
    strategy: str = "margin"
    rounding: str = "identity"
    currency: Optional[str] = None


class QuoteResponse(BaseModel):
    cost_units: int
    markup: int
    strategy: str
    rounding: str
    price_units: int
    currency: Optional[str] = None
    price: Optional[Decimal] = None
    formatted_price: Optional[str] = None


class RounderInfo(BaseModel):
    name: str
    description: str


class CurrencyInfo(BaseModel):
    code: str
    symbol: str
    decimal_places: int
    number: Optional[str] = None
    name: Optional[str] = None
    smallest_unit: str
    countries: List[str] = Field(default_factory=list)
