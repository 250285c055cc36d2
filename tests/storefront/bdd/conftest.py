"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from storefront.catalogue.creation import AddProduct
from storefront.catalogue.product import Product


@pytest.fixture()
def products():
    """Products created by the scenario, keyed by name."""
    return {}


@pytest.fixture()
def outcome():
    """Holds the result or the error of the When step."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def product_in_catalogue(products, name, price, stock):
    products[name] = current_domain.process(
        AddProduct(name=name, price=price, stock=stock),
        asynchronous=False,
    )


@given(parsers.cfparse('{quantity:d} of "{name}" are sold to someone else'))
def sold_elsewhere(products, name, quantity):
    repo = current_domain.repository_for(Product)
    product = repo.get(products[name].id)
    product.decrement_stock(quantity)
    repo.add(product)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} left in stock'))
def stock_left(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name].id).stock == stock
