from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pricing_core.util.errors import UnknownCurrencyError

DATA_PATH = Path(__file__).resolve().parent / "data" / "iso4217.yaml"

MAX_DECIMAL_PLACES = 20

REGIONS: Dict[str, List[str]] = {
    "North America": ["USD", "CAD", "MXN"],
    "Europe": ["EUR", "GBP", "CHF", "SEK", "NOK", "DKK", "PLN", "CZK", "HUF", "BGN", "RON", "RSD"],
    "Asia Pacific": ["JPY", "CNY", "KRW", "INR", "SGD", "HKD", "TWD", "THB", "MYR", "IDR", "PHP", "VND"],
    "Latin America": ["BRL", "ARS", "CLP", "COP", "PEN", "UYU", "PYG"],
    "Africa": ["ZAR", "EGP", "NGN", "KES", "GHS", "MAD", "TND", "DZD"],
    "Middle East": ["SAR", "AED", "QAR", "KWD", "BHD", "OMR", "JOD", "LBP", "ILS", "IRR", "IQD"],
    "Oceania": ["AUD", "NZD", "FJD", "PGK", "WST", "TOP", "VUV"],
}


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    symbol: str = ""
    decimal_places: int
    number: Optional[str] = None
    name: Optional[str] = None
    countries: List[str] = Field(default_factory=list)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("code is required")
        return value.strip().upper()

    @field_validator("decimal_places")
    @classmethod
    def decimal_places_in_range(cls, value: int) -> int:
        if value < 0 or value > MAX_DECIMAL_PLACES:
            raise ValueError(f"decimal_places must be between 0 and {MAX_DECIMAL_PLACES}")
        return value

    @property
    def display_symbol(self) -> str:
        return self.symbol or self.code

    @property
    def smallest_unit(self) -> Decimal:
        return Decimal(1).scaleb(-self.decimal_places)

    @property
    def units_per_major(self) -> int:
        return 10**self.decimal_places


class CurrencyTable(BaseModel):
    data_as_of: str
    currencies: List[Currency]


@lru_cache(maxsize=1)
def load_currency_table(path: Union[str, Path] = DATA_PATH) -> CurrencyTable:
    data: Dict[str, Any]
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    return CurrencyTable.model_validate(data)


def _by_code() -> Dict[str, Currency]:
    return {currency.code: currency for currency in load_currency_table().currencies}


def get_currency(currency: Union[Currency, str]) -> Currency:
    if isinstance(currency, Currency):
        return currency
    if not isinstance(currency, str):
        raise UnknownCurrencyError(currency)
    found = _by_code().get(currency.strip().upper())
    if found is None:
        raise UnknownCurrencyError(currency)
    return found


def create_currency(code: str, symbol: str, decimal_places: int) -> Currency:
    return Currency(code=code, symbol=symbol, decimal_places=decimal_places)


def is_supported_currency(code: str) -> bool:
    return code.strip().upper() in _by_code()


def supported_currencies() -> List[str]:
    return list(_by_code())


def currencies_by_decimal_places(decimal_places: int) -> List[str]:
    return [code for code, currency in _by_code().items() if currency.decimal_places == decimal_places]


def currency_by_number(number: Union[int, str]) -> Optional[Currency]:
    padded = str(number).strip().zfill(3)
    for currency in load_currency_table().currencies:
        if currency.number == padded:
            return currency
    return None


def currencies_by_country(country: str) -> List[Currency]:
    needle = country.strip().lower()
    return [currency for currency in load_currency_table().currencies if needle in currency.countries]


def currencies_by_region() -> Dict[str, List[str]]:
    known = _by_code()
    return {region: [code for code in codes if code in known] for region, codes in REGIONS.items()}


def iso_data_date() -> str:
    return load_currency_table().data_as_of


def currency_details(code: str) -> Optional[Dict[str, Any]]:
    if not is_supported_currency(code):
        return None
    currency = get_currency(code)
    details = currency.model_dump()
    details["symbol"] = currency.display_symbol
    details["smallest_unit"] = str(currency.smallest_unit)
    return details
