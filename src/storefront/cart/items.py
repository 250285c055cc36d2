"""Cart item management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart, require_non_negative_quantity, require_positive_quantity
from storefront.catalogue.product import Product
from storefront.domain import logger, storefront


@storefront.command(part_of="Cart")
class AddToCart:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class SetCartItemQuantity:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    """Read the session cart, apply one change, write the whole cart back.

    No lock is held between the read and the write.
    """

    @handle(AddToCart)
    def add_to_cart(self, command):
        require_positive_quantity(command.quantity)

        product = current_domain.repository_for(Product).get_product(str(command.product_id))

        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_new(command.session_id)
        merged = cart.add_item(product, command.quantity)
        repo.add(cart)

        logger.info(
            "cart_item_added",
            session_id=command.session_id,
            product_id=str(command.product_id),
            quantity=command.quantity,
            merged=merged,
            cart_total=cart.total,
        )
        return cart, merged

    @handle(SetCartItemQuantity)
    def set_cart_item_quantity(self, command):
        require_non_negative_quantity(command.quantity)

        product = current_domain.repository_for(Product).get_product(str(command.product_id))

        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_new(command.session_id)
        cart.set_item_quantity(product, command.quantity)
        repo.add(cart)

        logger.info(
            "cart_item_quantity_set",
            session_id=command.session_id,
            product_id=str(command.product_id),
            quantity=command.quantity,
            cart_total=cart.total,
        )
        return cart

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_new(command.session_id)
        removed = cart.remove_item(str(command.product_id))
        repo.add(cart)

        logger.info(
            "cart_item_removed",
            session_id=command.session_id,
            product_id=str(command.product_id),
            cart_total=cart.total,
        )
        return cart, removed
