"""Integration tests for the Storefront HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.order.order import Order
from storefront.server import create_app

SESSION_HEADERS = {"session-id": "sess-api"}
CUSTOMER = {"name": "Ada Lovelace", "email": "ada@example.com", "address": "12 Analytical St"}


@pytest.fixture()
def client():
    return TestClient(create_app(init_domain=False))


def _create_product(client, **overrides):
    payload = {"name": "Wireless Mouse", "price": 25.99, "stock": 10}
    payload.update(overrides)
    response = client.post("/api/products", json=payload)
    assert response.status_code == 201
    return response.json()["product"]


def _add_to_cart(client, product_id, quantity=1, headers=SESSION_HEADERS):
    return client.post("/api/cart", json={"productId": product_id, "quantity": quantity}, headers=headers)


class TestProductEndpoints:
    def test_create_product(self, client):
        response = client.post(
            "/api/products",
            json={"name": "Desk Lamp", "description": "Warm light", "price": 50, "stock": 5, "category": "home"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Product created successfully"
        product = body["product"]
        assert product["name"] == "Desk Lamp"
        assert product["price"] == 50.0
        assert product["category"] == "home"
        assert "createdAt" in product

        stored = current_domain.repository_for(Product).get(product["id"])
        assert stored.stock == 5

    def test_create_product_defaults(self, client):
        product = _create_product(client)
        assert product["description"] == ""
        assert product["category"] == "general"

    @pytest.mark.parametrize(
        "payload",
        [
            {"price": 10, "stock": 1},
            {"name": "", "price": 10, "stock": 1},
            {"name": "Lamp", "price": 0, "stock": 1},
            {"name": "Lamp", "price": -5, "stock": 1},
            {"name": "Lamp", "price": 10, "stock": -1},
            {"name": "Lamp", "price": 10},
        ],
    )
    def test_invalid_product_is_400(self, client, payload):
        response = client.post("/api/products", json=payload)
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"]
        assert "details" in body

    def test_blank_name_is_400(self, client):
        response = client.post("/api/products", json={"name": "   ", "price": 10, "stock": 1})
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_list_products(self, client):
        _create_product(client, name="First")
        _create_product(client, name="Second")
        body = client.get("/api/products").json()
        assert body["count"] == 2
        assert [p["name"] for p in body["products"]] == ["First", "Second"]

    def test_get_product(self, client):
        product = _create_product(client)
        response = client.get(f"/api/products/{product['id']}")
        assert response.status_code == 200
        assert response.json()["product"]["id"] == product["id"]

    def test_get_unknown_product(self, client):
        response = client.get("/api/products/missing")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Product not found", "productId": "missing"}


class TestCartEndpoints:
    def test_empty_cart(self, client):
        body = client.get("/api/cart", headers=SESSION_HEADERS).json()
        assert body["success"] is True
        assert body["isEmpty"] is True
        assert body["sessionId"] == "sess-api"
        assert body["cart"]["items"] == []
        assert body["cart"]["total"] == 0.0

    def test_default_session(self, client):
        assert client.get("/api/cart").json()["sessionId"] == "default-session"

    def test_x_session_id_fallback(self, client):
        assert client.get("/api/cart", headers={"x-session-id": "sess-x"}).json()["sessionId"] == "sess-x"

    def test_session_id_wins_over_fallback(self, client):
        headers = {"session-id": "primary", "x-session-id": "fallback"}
        assert client.get("/api/cart", headers=headers).json()["sessionId"] == "primary"

    def test_add_and_merge(self, client):
        product = _create_product(client, price=25.99, stock=10)

        first = _add_to_cart(client, product["id"], 2)
        assert first.status_code == 200
        assert first.json()["message"] == "Product added to cart"
        assert first.json()["cart"]["total"] == 51.98

        second = _add_to_cart(client, product["id"], 1)
        body = second.json()
        assert body["message"] == "Product updated in cart"
        assert body["cart"]["total"] == 77.97
        assert body["cart"]["items"][0]["quantity"] == 3
        assert body["cart"]["items"][0]["productId"] == product["id"]

    def test_quantity_defaults_to_one(self, client):
        product = _create_product(client)
        response = client.post("/api/cart", json={"productId": product["id"]}, headers=SESSION_HEADERS)
        assert response.json()["cart"]["items"][0]["quantity"] == 1

    @pytest.mark.parametrize("quantity", [0, -2, 1.5, "3"])
    def test_invalid_quantity_is_400(self, client, quantity):
        product = _create_product(client)
        response = _add_to_cart(client, product["id"], quantity)
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_missing_product_id_is_400(self, client):
        response = client.post("/api/cart", json={"quantity": 1}, headers=SESSION_HEADERS)
        assert response.status_code == 400

    def test_unknown_product_is_404(self, client):
        response = _add_to_cart(client, "missing")
        assert response.status_code == 404
        assert response.json()["error"] == "Product not found"

    def test_stock_exceeded_is_400(self, client):
        product = _create_product(client, stock=3)
        _add_to_cart(client, product["id"], 2)
        response = _add_to_cart(client, product["id"], 2)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Insufficient stock"
        assert body["available"] == 3
        assert body["requested"] == 4
        assert body["inCart"] == 2

    def test_update_quantity(self, client):
        product = _create_product(client, price=10.0)
        _add_to_cart(client, product["id"], 1)
        response = client.put(f"/api/cart/{product['id']}", json={"quantity": 3}, headers=SESSION_HEADERS)
        assert response.status_code == 200
        assert response.json()["message"] == "Cart item updated"
        assert response.json()["cart"]["total"] == 30.0

    def test_update_to_zero_removes(self, client):
        product = _create_product(client)
        _add_to_cart(client, product["id"], 2)
        response = client.put(f"/api/cart/{product['id']}", json={"quantity": 0}, headers=SESSION_HEADERS)
        body = response.json()
        assert body["message"] == "Product removed from cart"
        assert body["cart"]["items"] == []
        assert body["cart"]["total"] == 0.0

    def test_update_item_not_in_cart_is_404(self, client):
        product = _create_product(client)
        response = client.put(f"/api/cart/{product['id']}", json={"quantity": 1}, headers=SESSION_HEADERS)
        assert response.status_code == 404
        assert response.json()["error"] == "Product not found in cart"

    def test_update_beyond_stock_is_400(self, client):
        product = _create_product(client, stock=2)
        _add_to_cart(client, product["id"], 1)
        response = client.put(f"/api/cart/{product['id']}", json={"quantity": 5}, headers=SESSION_HEADERS)
        assert response.status_code == 400

    def test_remove_item(self, client):
        product = _create_product(client)
        _add_to_cart(client, product["id"], 2)
        response = client.delete(f"/api/cart/{product['id']}", headers=SESSION_HEADERS)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Product removed from cart"
        assert body["removedItem"]["quantity"] == 2
        assert body["cart"]["items"] == []

    def test_remove_missing_item_is_404(self, client):
        response = client.delete("/api/cart/missing", headers=SESSION_HEADERS)
        assert response.status_code == 404

    def test_clear_cart_twice(self, client):
        product = _create_product(client)
        _add_to_cart(client, product["id"], 1)

        first = client.delete("/api/cart", headers=SESSION_HEADERS)
        assert first.status_code == 200
        assert first.json() == {"success": True, "message": "Cart cleared successfully", "sessionId": "sess-api"}

        second = client.delete("/api/cart", headers=SESSION_HEADERS)
        assert second.status_code == 404
        assert second.json()["error"] == "Cart not found or already empty"

    def test_sessions_are_isolated(self, client):
        product = _create_product(client)
        _add_to_cart(client, product["id"], 1, headers={"session-id": "alice"})
        assert client.get("/api/cart", headers={"session-id": "bob"}).json()["isEmpty"] is True


class TestCheckoutEndpoint:
    def test_checkout(self, client):
        product = _create_product(client, price=50.0, stock=10)
        _add_to_cart(client, product["id"], 2)

        response = client.post("/api/checkout", json={"customerInfo": CUSTOMER}, headers=SESSION_HEADERS)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Order placed successfully"
        order = body["order"]
        assert order["total"] == 100.0
        assert order["status"] == "completed"
        assert order["customerEmail"] == "ada@example.com"
        assert order["transactionId"].startswith("txn_")

        assert client.get(f"/api/products/{product['id']}").json()["product"]["stock"] == 8
        assert client.get("/api/cart", headers=SESSION_HEADERS).json()["isEmpty"] is True

    def test_checkout_without_payment_method_uses_credit_card(self, client):
        product = _create_product(client, price=50.0, stock=10)
        _add_to_cart(client, product["id"], 2)

        response = client.post("/api/checkout", json={"customerInfo": CUSTOMER}, headers=SESSION_HEADERS)
        assert response.status_code == 200
        order_id = response.json()["order"]["id"]
        assert client.get(f"/api/orders/{order_id}").json()["order"]["payment"]["method"] == "credit_card"

    def test_explicit_null_payment_method_uses_credit_card(self, client):
        product = _create_product(client)
        _add_to_cart(client, product["id"], 1)

        response = client.post(
            "/api/checkout",
            json={"customerInfo": CUSTOMER, "paymentMethod": None},
            headers=SESSION_HEADERS,
        )
        assert response.status_code == 200

    def test_empty_cart_is_400(self, client):
        response = client.post("/api/checkout", json={"customerInfo": CUSTOMER}, headers=SESSION_HEADERS)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Cart is empty", "sessionId": "sess-api"}

    def test_missing_customer_is_400(self, client):
        response = client.post("/api/checkout", json={}, headers=SESSION_HEADERS)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Customer information is required"
        assert body["required"] == ["name", "email"]

    def test_invalid_email_is_400(self, client):
        response = client.post(
            "/api/checkout",
            json={"customerInfo": {"name": "Ada", "email": "nope"}},
            headers=SESSION_HEADERS,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid email format"

    @pytest.mark.parametrize("name", [123, ["Ada"]])
    def test_non_string_customer_name_is_400(self, client, name):
        product = _create_product(client)
        _add_to_cart(client, product["id"], 1)

        response = client.post(
            "/api/checkout",
            json={"customerInfo": {"name": name, "email": "a@b.co"}},
            headers=SESSION_HEADERS,
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Customer name must be a string"
        assert body["field"] == "name"

    def test_payment_declined_is_402(self, client, always_decline):
        product = _create_product(client, stock=5)
        _add_to_cart(client, product["id"], 2)

        response = client.post("/api/checkout", json={"customerInfo": CUSTOMER}, headers=SESSION_HEADERS)
        assert response.status_code == 402
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Payment processing failed"
        assert body["details"]["success"] is False

        assert client.get(f"/api/products/{product['id']}").json()["product"]["stock"] == 5
        assert client.get("/api/cart", headers=SESSION_HEADERS).json()["isEmpty"] is False
        assert client.get("/api/orders").json()["count"] == 0


class TestOrderEndpoints:
    def _place_order(self, client):
        product = _create_product(client, price=25.99)
        _add_to_cart(client, product["id"], 2)
        response = client.post(
            "/api/checkout",
            json={"customerInfo": CUSTOMER, "paymentMethod": "paypal"},
            headers=SESSION_HEADERS,
        )
        return response.json()["order"]

    def test_list_orders(self, client):
        placed = self._place_order(client)
        body = client.get("/api/orders").json()
        assert body["count"] == 1
        summary = body["orders"][0]
        assert summary["id"] == placed["id"]
        assert summary["itemCount"] == 1
        assert summary["customerEmail"] == "ada@example.com"

    def test_get_order(self, client):
        placed = self._place_order(client)
        order = client.get(f"/api/orders/{placed['id']}").json()["order"]
        assert order["total"] == 51.98
        assert order["sessionId"] == "sess-api"
        assert order["payment"]["method"] == "paypal"
        assert order["customerInfo"]["address"] == "12 Analytical St"
        assert order["items"][0]["subtotal"] == 51.98

        stored = current_domain.repository_for(Order).get(placed["id"])
        assert stored.total == 51.98

    def test_unknown_order_is_404(self, client):
        response = client.get("/api/orders/missing")
        assert response.status_code == 404
        assert response.json()["orderId"] == "missing"


class TestStatsEndpoints:
    def test_stats(self, client):
        product = _create_product(client, price=50.0, stock=10, category="home")
        _add_to_cart(client, product["id"], 2)
        client.post("/api/checkout", json={"customerInfo": CUSTOMER}, headers=SESSION_HEADERS)

        stats = client.get("/api/stats").json()["stats"]
        assert stats["totalProducts"] == 1
        assert stats["totalOrders"] == 1
        assert stats["totalRevenue"] == "100.00"
        assert stats["productsByCategory"] == {"home": 1}
        assert stats["topProduct"]["quantitySold"] == 2

    def test_stats_between(self, client):
        response = client.get("/api/stats/date", params={"startDate": "2000-01-01", "endDate": "2000-12-31"})
        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["totalOrders"] == 0
        assert stats["period"] == {"startDate": "2000-01-01", "endDate": "2000-12-31"}

    def test_stats_between_invalid_date(self, client):
        response = client.get("/api/stats/date", params={"startDate": "soon"})
        assert response.status_code == 400
