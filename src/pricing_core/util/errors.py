from __future__ import annotations

from typing import Any, Iterable, Optional


class NonRetryableError(Exception):
    """Indicates a failure that should not be retried."""


class PricingError(NonRetryableError, ValueError):
    """Base class for every input validation failure raised by the engine."""

    code = "pricing_error"
    status_code = 400

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidCostError(PricingError):
    code = "invalid_cost"


class InvalidMarkupError(PricingError):
    code = "invalid_markup"


class InvalidMarginError(InvalidMarkupError):
    code = "invalid_margin"


class UnsupportedStrategyError(PricingError):
    code = "unsupported_strategy"

    def __init__(self, strategy: object, supported: Iterable[str]) -> None:
        self.strategy = strategy
        self.supported = list(supported)
        super().__init__(
            f"Unknown markup strategy: {strategy}. Supported strategies: {', '.join(self.supported)}",
            details={"strategy": str(strategy), "supported": self.supported},
        )


class UnsupportedRoundingError(PricingError):
    code = "unsupported_rounding"

    def __init__(self, rounding: object) -> None:
        self.rounding = rounding
        super().__init__(f"Unknown rounding style: {rounding}", details={"rounding": str(rounding)})


class UnknownCurrencyError(PricingError):
    code = "unknown_currency"
    status_code = 404

    def __init__(self, currency: object) -> None:
        self.currency = currency
        super().__init__(f"Unknown currency: {currency}", details={"currency": str(currency)})
