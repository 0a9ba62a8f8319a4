from decimal import Decimal

from pricing_core.currency.currencies import get_currency
from pricing_core.engine.canonical.io import write_csv_bytes


def test_csv_output_deterministic_order_and_formatting() -> None:
    rows = [
        {"sku": "SKU-002", "cost": Decimal("9.9"), "price": Decimal("14.15")},
        {"sku": "SKU-001", "cost": "5", "price": None},
        {"sku": "SKU-003", "cost": 1, "price": "not-a-number"},
    ]
    fieldnames = ["sku", "cost", "price"]

    csv_bytes = write_csv_bytes(rows, fieldnames, currency=get_currency("USD"))

    assert (
        csv_bytes.decode("utf-8")
        == "sku,cost,price\n"
        "SKU-001,5.00,\n"
        "SKU-002,9.90,14.15\n"
        "SKU-003,1.00,not-a-number\n"
    )


def test_csv_output_uses_currency_precision() -> None:
    rows = [{"sku": "A", "cost": Decimal("1500"), "price": Decimal("2143")}]
    output = write_csv_bytes(rows, ["sku", "cost", "price"], currency=get_currency("JPY"))
    assert output.decode("utf-8") == "sku,cost,price\nA,1500,2143\n"

    output = write_csv_bytes(rows, ["sku", "cost", "price"], currency=get_currency("KWD"))
    assert output.decode("utf-8") == "sku,cost,price\nA,1500.000,2143.000\n"
