from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple, Union

from pricing_core.util.errors import UnsupportedRoundingError

Rounder = Callable[[int], int]

HUNDRED = 100


class RoundingStyle(str, Enum):
    IDENTITY = "identity"
    CEIL_STEP_5 = "ceilStep5"
    CEIL_STEP_10 = "ceilStep10"
    CEIL_STEP_USD = "ceilStepUSD"
    CEIL_STEP_EUR = "ceilStepEUR"
    CEIL_STEP_JPY = "ceilStepJPY"
    CEIL_STEP_INR = "ceilStepINR"
    CHARM_99 = "charm99"


def identity(price_units: int) -> int:
    return price_units


@dataclass(frozen=True)
class CeilStep:
    """Round up to the next multiple of ``step_units``; exact multiples are kept."""

    step_units: int = 5

    def __post_init__(self) -> None:
        if isinstance(self.step_units, bool) or not isinstance(self.step_units, int):
            raise ValueError("step_units must be an integer")
        if self.step_units < 1:
            raise ValueError("step_units must be >= 1")

    def __call__(self, price_units: int) -> int:
        remainder = price_units % self.step_units
        if remainder == 0:
            return price_units
        return price_units + (self.step_units - remainder)


def ceil_step(step_units: int = 5) -> CeilStep:
    return CeilStep(step_units)


def charm99(price_units: int) -> int:
    """Force an x.99 ending, assuming 100 units make one major unit."""
    whole = price_units // HUNDRED
    target = whole * HUNDRED + 99
    if target >= price_units:
        return target
    return (whole + 1) * HUNDRED + 99


CURRENCY_STEP_ROUNDERS: Dict[str, CeilStep] = {
    "USD": ceil_step(5),
    "EUR": ceil_step(5),
    "JPY": ceil_step(1),
    "INR": ceil_step(5),
}

ROUNDERS: Dict[str, Rounder] = {
    RoundingStyle.IDENTITY.value: identity,
    RoundingStyle.CEIL_STEP_5.value: ceil_step(5),
    RoundingStyle.CEIL_STEP_10.value: ceil_step(10),
    RoundingStyle.CEIL_STEP_USD.value: CURRENCY_STEP_ROUNDERS["USD"],
    RoundingStyle.CEIL_STEP_EUR.value: CURRENCY_STEP_ROUNDERS["EUR"],
    RoundingStyle.CEIL_STEP_JPY.value: CURRENCY_STEP_ROUNDERS["JPY"],
    RoundingStyle.CEIL_STEP_INR.value: CURRENCY_STEP_ROUNDERS["INR"],
    RoundingStyle.CHARM_99.value: charm99,
}

ROUNDER_DESCRIPTIONS: Dict[str, str] = {
    RoundingStyle.IDENTITY.value: "keep the computed price as-is",
    RoundingStyle.CEIL_STEP_5.value: "round up to the next multiple of 5 units",
    RoundingStyle.CEIL_STEP_10.value: "round up to the next multiple of 10 units",
    RoundingStyle.CEIL_STEP_USD.value: "USD: round up to the next nickel",
    RoundingStyle.CEIL_STEP_EUR.value: "EUR: round up to the next 5 cents",
    RoundingStyle.CEIL_STEP_JPY.value: "JPY: round up to the next yen",
    RoundingStyle.CEIL_STEP_INR.value: "INR: round up to the next 5 paise",
    RoundingStyle.CHARM_99.value: "round up to the next price ending in .99",
}


def resolve_rounder(rounding: Union[RoundingStyle, str, Rounder]) -> Rounder:
    if isinstance(rounding, RoundingStyle):
        return ROUNDERS[rounding.value]
    if isinstance(rounding, str):
        rounder = ROUNDERS.get(rounding)
        if rounder is None:
            raise UnsupportedRoundingError(rounding)
        return rounder
    if callable(rounding):
        return rounding
    raise UnsupportedRoundingError(rounding)


def currency_step_rounder(currency_code: str = "USD") -> CeilStep:
    return CURRENCY_STEP_ROUNDERS.get(currency_code.upper(), ceil_step(5))


def describe_rounders() -> List[Tuple[str, str]]:
    return [(name, ROUNDER_DESCRIPTIONS[name]) for name in ROUNDERS]
