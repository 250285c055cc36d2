"""Checkout: turns a session's cart into a paid order.

Steps, in order:
    1. customer name and email are present
    2. the email looks like local@domain.tld
    3. the cart has items
    4. every item's product still exists and has enough stock (first failure wins)
    5. the gateway charges the cart total; a decline raises PaymentError
    6. the order is created from a snapshot of the cart
    7. stock is decremented product by product
    8. the cart is deleted

Nothing is written before step 6, so any failure up to and including payment
leaves the cart, the catalogue and the order history untouched. Steps 6-8 are
separate repository writes with no compensation between them.
"""

import re

from protean import handle
from protean.fields import Dict, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.exceptions import (
    DomainValidationError,
    EmptyCartError,
    InsufficientStockError,
    NotFoundError,
    PaymentError,
)
from storefront.order.order import CustomerInfo, Order
from storefront.payments.gateway import get_gateway

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DEFAULT_PAYMENT_METHOD = "credit_card"
REQUIRED_CUSTOMER_FIELDS = ["name", "email"]
CUSTOMER_TEXT_FIELDS = ("name", "email", "address", "phone")


class CustomerInfoError(DomainValidationError):
    field = "customer_info"


def _text(info, key):
    value = info.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise CustomerInfoError(f"Customer {key} must be a string", field=key, received=value)
    return value.strip()


def validate_customer_info(customer_info):
    """Normalise the raw customer payload into a ``CustomerInfo`` value object.

    Every known field must be a string when present; anything else is rejected
    before the required-field check.
    """
    info = customer_info or {}
    name, email, address, phone = (_text(info, key) for key in CUSTOMER_TEXT_FIELDS)

    if not name or not email:
        raise CustomerInfoError(
            "Customer information is required",
            required=REQUIRED_CUSTOMER_FIELDS,
            received=customer_info,
        )

    if not EMAIL_PATTERN.match(email):
        raise CustomerInfoError("Invalid email format", email=email)

    return CustomerInfo(
        name=name,
        email=email.lower(),
        address=address,
        phone=phone,
    )


@storefront.command(part_of="Order")
class Checkout:
    session_id = String(required=True, max_length=255)
    customer_info = Dict()
    payment_method = String(max_length=50, default=DEFAULT_PAYMENT_METHOD)


@storefront.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        session_id = command.session_id
        payment_method = command.payment_method or DEFAULT_PAYMENT_METHOD

        customer = validate_customer_info(command.customer_info)

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.find_by_session(session_id)
        if cart is None or cart.is_empty:
            raise EmptyCartError(session_id)

        product_repo = current_domain.repository_for(Product)
        products = {}
        for item in cart.items:
            product = product_repo.find_product(str(item.product_id))
            if product is None:
                raise NotFoundError(f"Product {item.name} not found", productId=str(item.product_id))
            if not product.has_stock_for(item.quantity):
                raise InsufficientStockError(
                    product_id=str(item.product_id),
                    available=product.stock,
                    requested=item.quantity,
                    message=f"Insufficient stock for {item.name}",
                )
            products[str(item.product_id)] = product

        charge = get_gateway().charge(cart.total, payment_method)
        if not charge.success:
            logger.warning("payment_failed", session_id=session_id, amount=cart.total, payment_method=payment_method)
            raise PaymentError(
                "Payment processing failed",
                message="Please check your payment information and try again",
                details=charge.to_dict(),
            )

        order = Order.place(session_id=session_id, customer_info=customer, cart=cart, charge=charge)
        current_domain.repository_for(Order).add(order)

        for item in cart.items:
            product = products[str(item.product_id)]
            product.decrement_stock(item.quantity)
            product_repo.add(product)

        cart_repo.delete_cart(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            session_id=session_id,
            total=order.total,
            item_count=order.item_count,
            transaction_id=charge.transaction_id,
        )
        return order
