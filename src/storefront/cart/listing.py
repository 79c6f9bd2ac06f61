"""Cart reads — items joined to their catalogue products."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.cart.cart_item import CartItem
from storefront.cart.totals import CartTotals, compute_totals
from storefront.catalogue.product import Product
from storefront.domain import logger
from storefront.identity.ownership import Owner


@dataclass(frozen=True)
class CartLine:
    """A cart item together with the product it points at."""

    item: CartItem
    product: Product

    @property
    def quantity(self) -> int:
        return self.item.quantity

    @property
    def crypto_price(self) -> str:
        return self.product.crypto_price

    @property
    def fiat_price(self) -> str:
        return self.product.fiat_price


def list_cart(owner: Owner | None) -> list[CartLine]:
    """Cart lines of ``owner``; an unresolved owner has an empty cart.

    Items whose product has been removed from the catalogue or deactivated are
    left out of the result without raising.
    """
    if owner is None:
        return []

    products = current_domain.repository_for(Product)
    lines = []
    for item in current_domain.repository_for(CartItem).for_owner(owner):
        product = products.get_active(item.product_id)
        if product is None:
            logger.debug("cart.orphan_skipped", item_id=str(item.id), product_id=str(item.product_id))
            continue
        lines.append(CartLine(item=item, product=product))
    return lines


def cart_summary(owner: Owner | None) -> tuple[list[CartLine], CartTotals]:
    lines = list_cart(owner)
    return lines, compute_totals(lines)
