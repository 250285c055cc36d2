"""HTTP boundary: routers, schemas and exception handlers."""

from storefront.api.errors import register_error_handlers
from storefront.api.routes import routers

__all__ = ["register_error_handlers", "routers"]
