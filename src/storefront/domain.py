"""Storefront bounded context — catalogue, carts and crypto-priced orders.

Shoppers browse active products, keep a cart either as a registered user or as
an anonymous session, and place orders priced in a cryptocurrency and in fiat.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging(log_file_prefix="storefront")

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
