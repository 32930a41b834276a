"""Domain initialization and configuration.

The storefront context owns the session cart (CQRS aggregate, in-memory), the
conversion of a cart into an order submission, and read-side tracking of
submitted orders. Orders themselves live in an external order store and are
only created, read and status-updated from here.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
