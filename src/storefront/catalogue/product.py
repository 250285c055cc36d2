"""Product aggregate: the catalogue entry a cart item is snapshotted from."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.catalogue.events import ProductAdded, StockDecremented
from storefront.domain import storefront
from storefront.exceptions import InsufficientStockError

DEFAULT_CATEGORY = "general"


@storefront.aggregate
class Product:
    """Product aggregate root.

    Products are never deleted. Stock only moves through ``decrement_stock``
    when an order is placed.
    """

    name = String(required=True, max_length=255)
    description = Text(default="")
    price = Float(required=True)
    stock = Integer(required=True, min_value=0)
    category = String(max_length=100, default=DEFAULT_CATEGORY)
    created_at = DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be a number greater than 0"]})

    @classmethod
    def create(cls, name, price, stock, description=None, category=None):
        name = (name or "").strip()
        if not name:
            raise ValidationError({"name": ["Name is required"]})

        product = cls(
            name=name,
            description=(description or "").strip(),
            price=float(price),
            stock=int(stock),
            category=(category or "").strip() or DEFAULT_CATEGORY,
            created_at=datetime.now(UTC),
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock=product.stock,
                category=product.category,
                created_at=product.created_at,
            )
        )
        return product

    def has_stock_for(self, quantity):
        return self.stock >= quantity

    def decrement_stock(self, quantity):
        """Take ``quantity`` units out of stock."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        if not self.has_stock_for(quantity):
            raise InsufficientStockError(
                product_id=str(self.id),
                available=self.stock,
                requested=quantity,
                message=f"Insufficient stock for {self.name}",
            )

        previous_stock = self.stock
        self.stock = previous_stock - quantity

        self.raise_(
            StockDecremented(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
            )
        )
