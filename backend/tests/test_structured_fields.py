"""
Structured JSON sub-object tests (hold cart contents, gateway config).
"""

import json

import pytest

from backoffice.schemas import CartData, GatewayConfig, SchemaError


CART = {
    "items": [
        {"product_id": 1, "name": "Bottled Water", "quantity": 2, "unit_price": 1.5},
        {"product_id": 2, "quantity": 1, "unit_price": 3.25},
    ],
    "customer_id": None,
    "note": "Table 4",
}


class TestCartData:

    def test_parse_and_total(self):
        cart = CartData.parse(CART)
        assert cart.total == 6.25
        assert cart.to_dict()["items"][1] == {"product_id": 2, "name": None, "quantity": 1, "unit_price": 3.25}

    def test_accepts_json_text(self):
        assert CartData.parse(json.dumps(CART)) == CartData.parse(CART)

    @pytest.mark.parametrize("raw,message", [
        ("{not json", "must be valid JSON"),
        ([], "must be an object"),
        ({"items": "x"}, "items must be a list"),
        ({"items": [{"product_id": "1", "quantity": 1, "unit_price": 1}]}, "items.0.product_id must be an integer"),
        ({"items": [{"product_id": 1, "quantity": 0, "unit_price": 1}]}, "items.0.quantity must be greater than 0"),
        ({"items": [{"product_id": 1, "quantity": 1, "unit_price": -1}]}, "items.0.unit_price must be at least 0"),
        ({"items": [{"product_id": 1, "quantity": 1, "unit_price": float("nan")}]}, "items.0.unit_price must be a number"),
        ({"items": [{"product_id": 1, "quantity": float("inf"), "unit_price": 1}]}, "items.0.quantity must be a number"),
        ('{"items": [{"product_id": 1, "quantity": 1, "unit_price": NaN}]}', "items.0.unit_price must be a number"),
        ('{"items": [{"product_id": 1, "quantity": -Infinity, "unit_price": 1}]}', "items.0.quantity must be a number"),
    ])
    def test_rejects_bad_documents(self, raw, message):
        with pytest.raises(SchemaError) as exc:
            CartData.parse(raw)
        assert str(exc.value) == message


class TestGatewayConfig:

    def test_unknown_scalar_keys_pass_through(self):
        config = GatewayConfig.parse({"mode": "sandbox", "currency": "USD", "merchant_id": "M-1", "retries": 3})
        assert config.to_dict()["merchant_id"] == "M-1"

    @pytest.mark.parametrize("raw", [
        {"mode": "test"},
        {"currency": "usd"},
        {"keys": {"public": "pk"}},
    ])
    def test_rejects_bad_settings(self, raw):
        with pytest.raises(SchemaError):
            GatewayConfig.parse(raw)


class TestOverHttp:

    def test_hold_cart_stores_document(self, client, terminal):
        resp = client.post("/api/pos/hold-carts", json={"terminal_id": terminal.id, "cart_data": json.dumps(CART)})
        assert resp.status_code == 201
        data = resp.get_json()["data"]
        assert data["cart_data"]["note"] == "Table 4"
        assert data["terminal"]["name"] == "Front Counter"

        shown = client.get(f"/api/pos/hold-carts/{data['id']}").get_json()["data"]
        assert shown["cart_data"] == CartData.parse(CART).to_dict()

    def test_hold_cart_rejects_bad_cart(self, client, terminal):
        resp = client.post("/api/pos/hold-carts", json={
            "terminal_id": terminal.id,
            "cart_data": {"items": [{"product_id": 1, "quantity": -2, "unit_price": 1}]},
        })
        assert resp.status_code == 422
        assert resp.get_json()["errors"]["cart_data"] == [
            "The cart data field is invalid: items.0.quantity must be greater than 0."
        ]

    def test_gateway_config(self, client):
        resp = client.post("/api/pos/payment-gateways", json={
            "name": "Stripe",
            "status": "active",
            "config": {"mode": "live", "currency": "EUR"},
        })
        assert resp.status_code == 201
        assert resp.get_json()["data"]["config"] == {"mode": "live", "currency": "EUR"}

        resp = client.post("/api/pos/payment-gateways", json={
            "name": "Paystack",
            "status": "active",
            "config": {"mode": "prod"},
        })
        assert resp.status_code == 422
        assert "config" in resp.get_json()["errors"]
