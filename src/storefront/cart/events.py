"""Domain events for the CartItem aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="CartItem")
class CartItemAdded:
    """A product was added to a cart, either as a new item or merged into an existing one."""

    __version__ = 1

    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier()
    session_id = String(max_length=255)
    quantity = Integer(required=True)  # Quantity added by this call
    new_quantity = Integer(required=True)  # Quantity on the item afterwards


@storefront.event(part_of="CartItem")
class CartQuantityUpdated:
    """The quantity of a cart item was overwritten."""

    __version__ = 1

    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
