"""Storefront bounded context: catalogue, carts, checkout, orders and stats.

The Domain object below is the single store for the whole process. It is
initialised once at startup and pushed as the active domain context for each
request, so handlers reach products, carts and orders through
``current_domain.repository_for(...)`` rather than through module state.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
