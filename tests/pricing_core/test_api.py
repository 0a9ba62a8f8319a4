import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from pricing_core.app.api.app import app
from pricing_core.app.auth.api_key import ApiKeyAuth


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


def test_health(client: TestClient) -> None:
    response = client.get("/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_quote_margin_with_currency(client: TestClient) -> None:
    response = client.post(
        "/v1/quotes",
        json={"cost_units": 250, "markup": 3000, "strategy": "margin", "rounding": "ceilStep5", "currency": "usd"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["price_units"] == 360
    assert body["currency"] == "USD"
    assert body["price"] == "3.60"
    assert body["formatted_price"] == "$3.60"


def test_quote_defaults(client: TestClient) -> None:
    response = client.post("/v1/quotes", json={"cost_units": 250, "markup": 3000})
    assert response.status_code == 200
    body = response.json()
    assert body["price_units"] == 358
    assert body["strategy"] == "margin"
    assert body["rounding"] == "identity"
    assert body["currency"] is None


@pytest.mark.parametrize(
    ("payload", "error_code"),
    [
        ({"cost_units": -1, "markup": 0}, "invalid_cost"),
        ({"cost_units": 250, "markup": 10000}, "invalid_margin"),
        ({"cost_units": 250, "markup": -1, "strategy": "costPlus"}, "invalid_markup"),
        ({"cost_units": 250, "markup": 0, "strategy": "premium"}, "unsupported_strategy"),
        ({"cost_units": 250, "markup": 0, "rounding": "ceilStep7"}, "unsupported_rounding"),
    ],
)
def test_quote_validation_errors_are_400(client: TestClient, payload: dict, error_code: str) -> None:
    response = client.post("/v1/quotes", json=payload)
    assert response.status_code == 400
    assert response.json()["error_code"] == error_code


def test_unsupported_strategy_lists_supported(client: TestClient) -> None:
    response = client.post("/v1/quotes", json={"cost_units": 250, "markup": 0, "strategy": "premium"})
    body = response.json()
    assert body["strategy"] == "premium"
    assert "keystonePlus" in body["supported"]


def test_quote_unknown_currency_is_404(client: TestClient) -> None:
    response = client.post("/v1/quotes", json={"cost_units": 250, "markup": 0, "currency": "XYZ"})
    assert response.status_code == 404
    assert response.json()["error_code"] == "unknown_currency"


def test_listings(client: TestClient) -> None:
    assert "targetMargin" in client.get("/v1/strategies").json()
    rounders = client.get("/v1/rounders").json()
    assert {"name": "charm99", "description": "round up to the next price ending in .99"} in rounders
    assert "JPY" in client.get("/v1/currencies", params={"decimal_places": 0}).json()
    assert "USD" in client.get("/v1/currencies").json()


def test_currency_details(client: TestClient) -> None:
    response = client.get("/v1/currencies/jpy")
    assert response.status_code == 200
    body = response.json()
    assert body["code"] == "JPY"
    assert body["decimal_places"] == 0
    assert body["smallest_unit"] == "1"
    assert client.get("/v1/currencies/XYZ").status_code == 404


def test_api_key_auth() -> None:
    auth = ApiKeyAuth(["secret", " "])
    assert auth.enabled
    auth(x_api_key="secret")
    with pytest.raises(HTTPException) as excinfo:
        auth(x_api_key="wrong")
    assert excinfo.value.status_code == 401
    with pytest.raises(HTTPException):
        auth(x_api_key=None)


def test_api_key_auth_from_env(monkeypatch) -> None:
    assert not ApiKeyAuth.from_env().enabled
    monkeypatch.setenv("API_KEYS", "a,b")
    assert ApiKeyAuth.from_env().valid_keys == {"a", "b"}
