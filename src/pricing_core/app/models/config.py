from __future__ import annotations

from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from pricing_core.currency.conversion import to_smallest_unit
from pricing_core.currency.currencies import Currency, get_currency
from pricing_core.engine.arithmetic import pct_to_bps
from pricing_core.engine.pricing.calculator import MarkupStrategy
from pricing_core.engine.rounding.rounding import Rounder, currency_step_rounder, resolve_rounder

CURRENCY_ROUNDING = "currency"


class PricingProfile(BaseModel):
    schema_version: int = 1
    profile_id: str
    currency: str = "USD"
    strategy: MarkupStrategy = MarkupStrategy.MARGIN
    markup_bps: Optional[int] = None
    markup_pct: Optional[Decimal] = None
    markup_amount: Optional[Decimal] = None
    rounding: str = "identity"
    column_map: Dict[str, str] = Field(default_factory=dict)

    @field_validator("currency")
    @classmethod
    def known_currency(cls, value: str) -> str:
        return get_currency(value).code

    @model_validator(mode="after")
    def single_markup(self) -> "PricingProfile":
        provided = [
            name
            for name in ("markup_bps", "markup_pct", "markup_amount")
            if getattr(self, name) is not None
        ]
        if len(provided) > 1:
            raise ValueError(f"only one of markup_bps, markup_pct, markup_amount may be set (got {', '.join(provided)})")
        return self

    def currency_config(self) -> Currency:
        return get_currency(self.currency)

    def markup_value(self) -> int:
        if self.markup_bps is not None:
            return self.markup_bps
        if self.markup_pct is not None:
            return pct_to_bps(self.markup_pct)
        if self.markup_amount is not None:
            return to_smallest_unit(self.markup_amount, self.currency)
        return 0

    def rounder(self) -> Rounder:
        if self.rounding == CURRENCY_ROUNDING:
            return currency_step_rounder(self.currency)
        return resolve_rounder(self.rounding)
