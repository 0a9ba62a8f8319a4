from pricing_core.engine.pricing.calculator import MarkupStrategy
from scripts.examples import describe


def test_describe_reports_price_profit_and_margin() -> None:
    line = describe(MarkupStrategy.MARGIN, 1000, 3000, "USD", "ceilStepUSD")
    assert "price=$14.30" in line
    assert "profit=$4.30" in line
    assert "margin=30.1%" in line


def test_describe_handles_zero_price() -> None:
    line = describe(MarkupStrategy.KEYSTONE, 0, 0, "USD", "identity")
    assert "price=$0.00" in line
    assert "margin=0%" in line
