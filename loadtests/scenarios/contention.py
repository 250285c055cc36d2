"""Contention scenario: many shoppers racing for one low-stock product.

Cart and stock updates are read-modify-write with no lock, so this scenario
is the one to watch for oversold stock. After a run, compare the product's
remaining stock against the number of successful checkouts.
"""

import requests
from locust import HttpUser, between, events, task

from loadtests.data_generators import checkout_data, product_data, session_id
from loadtests.helpers.response import extract_error_detail

CONTESTED_STOCK = 25

_contested = {"product_id": None}


@events.test_start.add_listener
def create_contested_product(environment, **_kwargs):
    """Seed the single product every ContentionUser competes for."""
    if environment.host is None:
        return
    resp = requests.post(
        f"{environment.host}/api/products",
        json=product_data(stock=CONTESTED_STOCK),
        timeout=10,
    )
    if resp.status_code == 201:
        _contested["product_id"] = resp.json()["product"]["id"]
        print(f"[LOADTEST] Contested product {_contested['product_id']} with stock {CONTESTED_STOCK}")


class ContentionUser(HttpUser):
    """Each iteration is a fresh session buying one unit of the contested product."""

    wait_time = between(0.05, 0.2)

    @task
    def buy_one(self):
        product_id = _contested["product_id"]
        if product_id is None:
            return

        headers = {"session-id": session_id()}
        with self.client.post(
            "/api/cart",
            json={"productId": product_id, "quantity": 1},
            headers=headers,
            catch_response=True,
            name="[CONTENTION] POST /api/cart",
        ) as resp:
            if resp.status_code == 400:
                # Sold out is the expected end state
                resp.success()
                return
            if resp.status_code != 200:
                resp.failure(f"Add failed: {resp.status_code}: {extract_error_detail(resp)}")
                return

        with self.client.post(
            "/api/checkout",
            json=checkout_data(),
            headers=headers,
            catch_response=True,
            name="[CONTENTION] POST /api/checkout",
        ) as resp:
            if resp.status_code in (200, 400, 402):
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code}: {extract_error_detail(resp)}")
