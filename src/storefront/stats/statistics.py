"""Aggregate statistics over the catalogue and the order history.

Everything is recomputed from the repositories on each call; nothing is cached.
"""

from collections import Counter
from datetime import UTC, datetime

from protean.utils.globals import current_domain

from storefront.catalogue.product import DEFAULT_CATEGORY, Product
from storefront.config import get_settings
from storefront.exceptions import DomainValidationError
from storefront.order.order import Order

RECENT_ORDERS_LIMIT = 10
DELETED_PRODUCT_NAME = "Deleted product"


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _money(amount: float) -> str:
    return f"{amount:.2f}"


def order_summary(order: Order) -> dict:
    """Short form of an order used by listings and the stats view."""
    return {
        "id": str(order.id),
        "customerEmail": order.customer_info.email if order.customer_info else None,
        "total": order.total,
        "status": order.status,
        "createdAt": _iso(order.created_at),
        "itemCount": len(order.items),
    }


def top_selling_product(orders: list[Order], products: list[Product]) -> dict | None:
    """Product with the largest quantity sold across all orders.

    Ties go to whichever product was first encountered while walking the orders.
    """
    sold: dict[str, int] = {}
    for order in orders:
        for item in order.items:
            key = str(item.product_id)
            sold[key] = sold.get(key, 0) + item.quantity

    if not sold:
        return None

    # max() keeps the first maximal key, and dicts preserve insertion order.
    product_id = max(sold, key=sold.get)
    names = {str(p.id): p.name for p in products}
    return {
        "id": product_id,
        "name": names.get(product_id, DELETED_PRODUCT_NAME),
        "quantitySold": sold[product_id],
    }


def compute_stats() -> dict:
    products = current_domain.repository_for(Product).list_products()
    orders = current_domain.repository_for(Order).list_orders()
    threshold = get_settings().low_stock_threshold

    total_revenue = sum(order.total or 0.0 for order in orders)
    products_by_category = Counter(p.category or DEFAULT_CATEGORY for p in products)
    sales_by_payment_method = Counter(
        (order.payment.method if order.payment else None) or "unknown" for order in orders
    )
    recent = sorted(orders, key=lambda o: o.created_at, reverse=True)[:RECENT_ORDERS_LIMIT]

    return {
        "totalProducts": len(products),
        "totalOrders": len(orders),
        "totalRevenue": _money(total_revenue),
        "lowStockProducts": sum(1 for p in products if (p.stock or 0) < threshold),
        "outOfStockProducts": sum(1 for p in products if (p.stock or 0) == 0),
        "productsByCategory": dict(products_by_category),
        "salesByPaymentMethod": dict(sales_by_payment_method),
        "topProduct": top_selling_product(orders, products),
        "recentOrders": [order_summary(order) for order in recent],
        "lastUpdated": datetime.now(UTC).isoformat(),
        "systemStatus": "operational",
    }


def parse_bound(name: str, value: str | None) -> datetime | None:
    """Parse an ISO-8601 date or datetime; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise DomainValidationError(f"Invalid {name}, expected an ISO-8601 date", **{name: value}) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def compute_stats_between(start_date: str | None = None, end_date: str | None = None) -> dict:
    """Order count and revenue for orders placed within the optional bounds."""
    start = parse_bound("startDate", start_date)
    end = parse_bound("endDate", end_date)

    orders = current_domain.repository_for(Order).list_orders()
    selected = [
        order
        for order in orders
        if (start is None or _aware(order.created_at) >= start) and (end is None or _aware(order.created_at) <= end)
    ]

    return {
        "period": {"startDate": start_date, "endDate": end_date},
        "totalOrders": len(selected),
        "totalRevenue": _money(sum(order.total or 0.0 for order in selected)),
    }
