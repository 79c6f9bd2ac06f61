"""Order reads — an order with its line items joined to products."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.order.order import Order, OrderItem


@dataclass(frozen=True)
class OrderLine:
    item: OrderItem
    product: Product | None  # None once the product is gone from the catalogue


@dataclass(frozen=True)
class OrderDetails:
    order: Order
    lines: list[OrderLine]


def get_order_with_items(order_id) -> OrderDetails | None:
    """Header plus every line item, or ``None`` if there is no such order.

    Line items are never dropped: a line whose product no longer exists is
    returned with ``product=None``. Raises ``PartialOrderError`` when the
    stored line items do not add up to what the order was placed with.
    """
    order = current_domain.repository_for(Order).find(order_id)
    if order is None:
        return None

    order.ensure_complete()

    products = current_domain.repository_for(Product)
    lines = [OrderLine(item=item, product=products.find(item.product_id)) for item in order.items]
    return OrderDetails(order=order, lines=lines)


def list_orders_for_user(user_id) -> list[Order]:
    if not user_id:
        return []
    return current_domain.repository_for(Order).for_user(user_id)
