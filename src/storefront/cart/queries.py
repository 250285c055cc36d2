"""Read side of the cart. No command and no persistence."""

from protean.utils.globals import current_domain

from storefront.cart.cart import Cart


def get_cart(session_id: str) -> Cart:
    """The session's cart, or a fresh empty one that is not saved."""
    return current_domain.repository_for(Cart).get_or_new(session_id)
