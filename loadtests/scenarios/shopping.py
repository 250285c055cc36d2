"""Shopper load test scenarios.

ShopperUser walks one session through the whole purchase: browse, add to
cart, change a quantity, check out, read the order back. BrowsingUser only
reads the catalogue and the stats.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import checkout_data, product_data, session_id
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class PurchaseJourney(SequentialTaskSet):
    """Create Product -> Browse -> Add x2 -> Update Quantity -> View Cart -> Checkout -> Get Order."""

    def on_start(self):
        self.state = ShopperState(session_id=session_id())

    @task
    def create_product(self):
        with self.client.post(
            "/api/products",
            json=product_data(),
            catch_response=True,
            name="POST /api/products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["product"]["id"])
            else:
                resp.failure(f"Create product failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse_products(self):
        with self.client.get("/api/products", catch_response=True, name="GET /api/products") as resp:
            if resp.status_code == 200:
                products = [p for p in resp.json()["products"] if p["stock"] > 2]
                if products:
                    self.state.product_ids.append(random.choice(products)["id"])
            else:
                resp.failure(f"List products failed: {resp.status_code}")

    @task
    def add_first_item(self):
        self._add(self.state.product_ids[0], 1)

    @task
    def add_second_item(self):
        self._add(self.state.product_ids[-1], 1)

    @task
    def update_quantity(self):
        product_id = self.state.cart_product_ids[0]
        with self.client.put(
            f"/api/cart/{product_id}",
            json={"quantity": 2},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/cart/{productId}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update quantity failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        with self.client.get(
            "/api/cart",
            headers=self.state.headers,
            catch_response=True,
            name="GET /api/cart",
        ) as resp:
            if resp.status_code != 200 or resp.json()["isEmpty"]:
                resp.failure("Cart unexpectedly empty")

    @task
    def checkout(self):
        with self.client.post(
            "/api/checkout",
            json=checkout_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/checkout",
        ) as resp:
            if resp.status_code == 200:
                self.state.order_ids.append(resp.json()["order"]["id"])
            elif resp.status_code == 402:
                # Declines are expected from the simulated gateway
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Checkout failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def get_order(self):
        self.client.get(f"/api/orders/{self.state.order_ids[-1]}", name="GET /api/orders/{id}")
        self.interrupt()

    def _add(self, product_id, quantity):
        with self.client.post(
            "/api/cart",
            json={"productId": product_id, "quantity": quantity},
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/cart",
        ) as resp:
            if resp.status_code == 200:
                self.state.cart_product_ids.append(product_id)
            else:
                resp.failure(f"Add to cart failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()


class ShopperUser(HttpUser):
    wait_time = between(0.5, 2)
    tasks = [PurchaseJourney]


class BrowsingUser(HttpUser):
    wait_time = between(0.2, 1)

    @task(5)
    def list_products(self):
        self.client.get("/api/products", name="GET /api/products")

    @task(2)
    def view_cart(self):
        self.client.get("/api/cart", headers={"session-id": session_id()}, name="GET /api/cart")

    @task(1)
    def stats(self):
        self.client.get("/api/stats", name="GET /api/stats")

    @task(1)
    def health(self):
        self.client.get("/health", name="GET /health")
