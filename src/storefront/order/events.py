"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out and paid for."""

    __version__ = 1

    order_id = Identifier(required=True)
    session_id = String(required=True)
    customer_email = String(required=True)
    total = Float(required=True)
    item_count = Integer(required=True)
    payment_method = String(required=True)
    transaction_id = String(required=True)
    placed_at = DateTime(required=True)
