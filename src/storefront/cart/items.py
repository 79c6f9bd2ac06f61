"""Cart item management — commands and handler."""

from protean import handle
from protean.exceptions import ExpectedVersionError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart_item import CartItem
from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.identity.ownership import cart_item_id, resolve_owner


@storefront.command(part_of="CartItem")
class AddToCart:
    """Add a product to the cart of a user (``user_id``) or a guest (``session_id``)."""

    product_id = Identifier(required=True)
    quantity = Integer(min_value=1, default=1)
    user_id = Identifier()
    session_id = String(max_length=255)


@storefront.command(part_of="CartItem")
class UpdateCartQuantity:
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="CartItem")
class RemoveFromCart:
    item_id = Identifier(required=True)


@storefront.command(part_of="CartItem")
class ClearCart:
    user_id = Identifier()
    session_id = String(max_length=255)


@storefront.command_handler(part_of=CartItem)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        owner = resolve_owner(user_id=command.user_id, session_id=command.session_id)
        if owner is None:
            logger.info("cart.add_skipped", reason="no owner", product_id=str(command.product_id))
            return None

        if current_domain.repository_for(Product).get_active(command.product_id) is None:
            raise ValidationError({"product_id": ["Product is not available"]})

        repo = current_domain.repository_for(CartItem)
        item_id = cart_item_id(owner, command.product_id)
        quantity = command.quantity or 1

        item = repo.find(item_id)
        if item is None:
            item = CartItem.open(owner, command.product_id, quantity)
            _insert_new(repo, item)
        else:
            item.merge(quantity)
            repo.add(item)

        logger.info("cart.item_added", item_id=item_id, owner=owner.key, quantity=item.quantity)
        return item_id

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(CartItem)
        item = repo.get(command.item_id)
        item.change_quantity(command.quantity)
        repo.add(item)
        return str(item.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(CartItem)
        item = repo.find(command.item_id)
        if item is None:
            return
        repo.remove(item)
        logger.info("cart.item_removed", item_id=str(command.item_id))

    @handle(ClearCart)
    def clear_cart(self, command):
        owner = resolve_owner(user_id=command.user_id, session_id=command.session_id)
        if owner is None:
            return 0

        repo = current_domain.repository_for(CartItem)
        items = repo.for_owner(owner)
        for item in items:
            repo.remove(item)

        logger.info("cart.cleared", owner=owner.key, items_removed=len(items))
        return len(items)


def _insert_new(repo, item):
    """Save a freshly opened item; losing a race to insert the same id is a write conflict."""
    try:
        repo.add(item)
    except ValidationError as exc:
        if "id" not in exc.messages:
            raise
        logger.warning("cart.add_conflict", item_id=str(item.id))
        raise ExpectedVersionError(f"Cart item {item.id} was created by a concurrent request") from exc
