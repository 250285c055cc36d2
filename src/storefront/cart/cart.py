"""Cart aggregate: one per session, replaced on every mutation.

Items snapshot the product's name and price when they are first added, so a
later catalogue price change never alters an existing cart. The total is
recomputed from the items after every mutation.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import CartItemAdded, CartItemQuantityUpdated, CartItemRemoved
from storefront.domain import storefront
from storefront.exceptions import InsufficientStockError, NotFoundError


def calculate_total(items) -> float:
    """Sum of price * quantity over the items, rounded to cents."""
    return round(sum(item.price * item.quantity for item in items), 2)


def _is_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_positive_quantity(quantity):
    if not _is_integer(quantity) or quantity <= 0:
        raise ValidationError({"quantity": ["Quantity must be a positive integer"]})


def require_non_negative_quantity(quantity):
    if not _is_integer(quantity) or quantity < 0:
        raise ValidationError({"quantity": ["Quantity must be a non-negative integer"]})


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()
    updated_at = DateTime()

    @property
    def subtotal(self):
        return round(self.price * self.quantity, 2)


@storefront.aggregate
class Cart:
    session_id = String(required=True, max_length=255)
    items = HasMany(CartItem)
    total = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id):
        now = datetime.now(UTC)
        return cls(
            session_id=session_id,
            total=0.0,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_empty(self):
        return len(self.items) == 0

    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def has_consistent_total(self):
        return round(self.total or 0.0, 2) == calculate_total(self.items)

    def _touch(self, now):
        self.total = calculate_total(self.items)
        self.updated_at = now

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity):
        """Add ``quantity`` units of ``product``, merging with an existing line.

        The merged quantity is checked against the product's current stock.
        """
        require_positive_quantity(quantity)

        existing = self.find_item(product.id)
        in_cart = existing.quantity if existing else 0
        new_quantity = in_cart + quantity

        if not product.has_stock_for(new_quantity):
            raise InsufficientStockError(
                product_id=str(product.id),
                available=product.stock,
                requested=new_quantity,
                inCart=in_cart,
            )

        now = datetime.now(UTC)
        if existing:
            existing.quantity = new_quantity
            existing.updated_at = now
        else:
            self.add_items(
                CartItem(
                    product_id=str(product.id),
                    name=product.name,
                    price=product.price,
                    quantity=quantity,
                    added_at=now,
                    updated_at=now,
                )
            )

        self._touch(now)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                session_id=self.session_id,
                product_id=str(product.id),
                quantity=quantity,
                new_quantity=new_quantity,
            )
        )
        return existing is not None

    def set_item_quantity(self, product, quantity):
        """Overwrite the quantity of a line already in the cart.

        A quantity of zero removes the line.
        """
        require_non_negative_quantity(quantity)

        item = self.find_item(product.id)
        if item is None:
            raise NotFoundError("Product not found in cart", productId=str(product.id))

        if quantity == 0:
            return self.remove_item(product.id)

        if not product.has_stock_for(quantity):
            raise InsufficientStockError(
                product_id=str(product.id),
                available=product.stock,
                requested=quantity,
            )

        previous_quantity = item.quantity
        now = datetime.now(UTC)
        item.quantity = quantity
        item.updated_at = now
        self._touch(now)

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                session_id=self.session_id,
                product_id=str(product.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )
        return item

    def remove_item(self, product_id):
        """Drop a line from the cart and return it."""
        item = self.find_item(product_id)
        if item is None:
            raise NotFoundError("Product not found in cart", productId=str(product_id))

        self.remove_items(item)
        self._touch(datetime.now(UTC))

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                session_id=self.session_id,
                product_id=str(product_id),
                quantity=item.quantity,
            )
        )
        return item
