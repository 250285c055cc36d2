"""Order aggregate: an immutable snapshot of a paid-for cart.

Orders are created once by checkout and never modified afterwards: there is
no cancellation or refund flow, so the status is always ``completed``.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderPlaced


class OrderStatus(Enum):
    COMPLETED = "completed"


@storefront.value_object(part_of="Order")
class CustomerInfo:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    address = Text(default="")
    phone = String(max_length=50, default="")


@storefront.value_object(part_of="Order")
class PaymentDetails:
    method = String(required=True, max_length=50)
    transaction_id = String(required=True, max_length=100)
    processed_at = DateTime(required=True)


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True)
    quantity = Integer(required=True, min_value=1)
    subtotal = Float(required=True)


@storefront.aggregate
class Order:
    customer_info = ValueObject(CustomerInfo, required=True)
    items = HasMany(OrderItem)
    total = Float(required=True)
    payment = ValueObject(PaymentDetails, required=True)
    session_id = String(required=True, max_length=255)
    status = String(choices=OrderStatus, default=OrderStatus.COMPLETED.value)
    created_at = DateTime()

    @classmethod
    def place(cls, session_id, customer_info, cart, charge):
        """Snapshot ``cart`` into a new order paid for by ``charge``.

        Item names and prices are copied, so later catalogue changes do not
        reach the order.
        """
        order = cls(
            customer_info=customer_info,
            total=cart.total,
            payment=PaymentDetails(
                method=charge.payment_method,
                transaction_id=charge.transaction_id,
                processed_at=charge.processed_at,
            ),
            session_id=session_id,
            status=OrderStatus.COMPLETED.value,
            created_at=datetime.now(UTC),
        )
        for item in cart.items:
            order.add_items(
                OrderItem(
                    product_id=str(item.product_id),
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                    subtotal=round(item.price * item.quantity, 2),
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                session_id=session_id,
                customer_email=customer_info.email,
                total=order.total,
                item_count=len(order.items),
                payment_method=charge.payment_method,
                transaction_id=charge.transaction_id,
                placed_at=order.created_at,
            )
        )
        return order

    @property
    def item_count(self):
        return len(self.items)
