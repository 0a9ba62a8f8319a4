from __future__ import annotations

from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from pricing_core.app.auth.api_key import ApiKeyAuth
from pricing_core.app.models.quote import CurrencyInfo, QuoteRequest, QuoteResponse, RounderInfo
from pricing_core.currency.conversion import format_price, from_smallest_unit
from pricing_core.currency.currencies import (
    currencies_by_decimal_places,
    currency_details,
    get_currency,
    supported_currencies,
)
from pricing_core.engine.pricing.calculator import calculate_price, supported_strategies
from pricing_core.engine.rounding.rounding import describe_rounders
from pricing_core.util.errors import PricingError
from pricing_core.util.logging import get_logger, log_event
from pricing_core.util.metrics import CloudWatchMetrics

logger = get_logger("pricing_core.api")
metrics = CloudWatchMetrics.from_env()
auth_dependency = ApiKeyAuth.from_env()

app = FastAPI(title="pricing-core")


@app.exception_handler(PricingError)
async def pricing_error_handler(request: Request, exc: PricingError) -> JSONResponse:
    log_event(logger, "quote_rejected", path=request.url.path, error_code=exc.code, error=exc.message)
    metrics.record_quote_rejected(error_code=exc.code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error_code": exc.code, "detail": exc.message, **exc.details},
    )


@app.get("/v1/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/v1/quotes", dependencies=[Depends(auth_dependency)])
async def create_quote(request: QuoteRequest) -> QuoteResponse:
    currency = get_currency(request.currency) if request.currency else None
    price_units = calculate_price(request.cost_units, request.markup, request.strategy, request.rounding)
    log_event(
        logger,
        "quote_computed",
        strategy=request.strategy,
        rounding=request.rounding,
        cost_units=request.cost_units,
        price_units=price_units,
    )
    metrics.record_quote(strategy=request.strategy)
    response = QuoteResponse(
        cost_units=request.cost_units,
        markup=request.markup,
        strategy=request.strategy,
        rounding=request.rounding,
        price_units=price_units,
    )
    if currency:
        response.currency = currency.code
        response.price = from_smallest_unit(price_units, currency)
        response.formatted_price = format_price(price_units, currency, in_smallest_units=True)
    return response


@app.get("/v1/strategies", dependencies=[Depends(auth_dependency)])
async def list_strategies() -> List[str]:
    return supported_strategies()


@app.get("/v1/rounders", dependencies=[Depends(auth_dependency)])
async def list_rounders() -> List[RounderInfo]:
    return [RounderInfo(name=name, description=description) for name, description in describe_rounders()]


@app.get("/v1/currencies", dependencies=[Depends(auth_dependency)])
async def list_currencies(decimal_places: Optional[int] = None) -> List[str]:
    if decimal_places is not None:
        return currencies_by_decimal_places(decimal_places)
    return supported_currencies()


@app.get("/v1/currencies/{code}", dependencies=[Depends(auth_dependency)])
async def get_currency_info(code: str) -> CurrencyInfo:
    details = currency_details(code)
    if not details:
        raise HTTPException(status_code=404, detail="Currency not found")
    return CurrencyInfo.model_validate(details)
