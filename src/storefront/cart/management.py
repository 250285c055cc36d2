"""Cart management: clearing a session's cart."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import logger, storefront
from storefront.exceptions import NotFoundError


@storefront.command(part_of="Cart")
class ClearCart:
    session_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        # Clearing a session with no stored cart is an error, so a second
        # clear in a row fails.
        repo = current_domain.repository_for(Cart)
        cart = repo.find_by_session(command.session_id)
        if cart is None:
            raise NotFoundError("Cart not found or already empty", sessionId=command.session_id)

        repo.delete_cart(cart)
        logger.info("cart_cleared", session_id=command.session_id)
