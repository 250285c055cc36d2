"""Repository for the Order aggregate: the order store."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.exceptions import NotFoundError
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def get_order(self, order_id: str) -> Order:
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            raise NotFoundError("Order not found", orderId=order_id) from None

    def list_orders(self) -> list[Order]:
        """All orders in the order they were placed."""
        orders = self._dao.query.limit(None).all().items
        return sorted(orders, key=lambda o: o.created_at)
