"""Repository for the Product aggregate: the catalogue store."""

from protean.exceptions import ObjectNotFoundError

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.exceptions import NotFoundError


@storefront.repository(part_of=Product)
class ProductRepository:
    """Catalogue store: create (``add``), list, get-by-id.

    Stock decrements go through ``Product.decrement_stock`` followed by ``add``.
    """

    def get_product(self, product_id: str) -> Product:
        """Fetch a product or raise ``NotFoundError``."""
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            raise NotFoundError("Product not found", productId=product_id) from None

    def find_product(self, product_id: str) -> Product | None:
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            return None

    def list_products(self) -> list[Product]:
        """All products, oldest first."""
        products = self._dao.query.limit(None).all().items
        return sorted(products, key=lambda p: p.created_at)
