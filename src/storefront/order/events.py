"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order header and all of its line items were recorded."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier()
    status = String(required=True)
    total_crypto_price = String(required=True)
    total_fiat_price = String(required=True)
    wallet_address = String(required=True)
    item_count = Integer(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderItemAdded:
    """A line item was appended to an existing order."""

    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    crypto_price = String(required=True)
    fiat_price = String(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    transaction_hash = String()
