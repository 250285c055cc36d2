"""Repository for the Cart aggregate: the cart store, keyed by session id."""

from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    """Cart store: get-or-create, replace (``add``), delete.

    A session owns at most one cart. Carts created by ``get_or_new`` are not
    persisted until the first mutation is saved with ``add``.
    """

    def find_by_session(self, session_id: str) -> Cart | None:
        matches = self._dao.query.filter(session_id=session_id).all().items
        if not matches:
            return None
        return self.get(matches[0].id)

    def get_or_new(self, session_id: str) -> Cart:
        return self.find_by_session(session_id) or Cart.create(session_id)

    def delete_cart(self, cart: Cart) -> None:
        self._dao.delete(cart)
