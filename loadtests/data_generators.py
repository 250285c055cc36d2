"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's request schemas and the
domain's validation rules (positive price, non-negative stock, name and email
present, email shaped like local@domain.tld).
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["electronics", "home", "books", "garden", "toys"]
PAYMENT_METHODS = ["credit_card", "debit_card", "paypal"]


def session_id() -> str:
    """Unique cart session per simulated shopper."""
    return f"lt-{uuid.uuid4().hex[:12]}"


def product_data(stock: int | None = None) -> dict:
    return {
        "name": f"{fake.color_name()} {fake.word().title()}",
        "description": fake.sentence(nb_words=8),
        "price": round(random.uniform(1.0, 250.0), 2),
        "stock": stock if stock is not None else random.randint(50, 500),
        "category": random.choice(CATEGORIES),
    }


def valid_email() -> str:
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}"


def customer_info() -> dict:
    return {
        "name": fake.name(),
        "email": valid_email(),
        "address": fake.address().replace("\n", ", "),
        "phone": fake.phone_number(),
    }


def checkout_data() -> dict:
    return {"customerInfo": customer_info(), "paymentMethod": random.choice(PAYMENT_METHODS)}
