"""Cart item aggregate — one product line in a user's or a guest session's cart.

Each item is its own small aggregate whose identity is derived from
(owner, product). Adding a product that is already in the cart therefore
loads and increments the same aggregate instead of inserting a duplicate, and
the aggregate version guards the increment against concurrent writers.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from storefront.cart.events import CartItemAdded, CartQuantityUpdated
from storefront.domain import storefront
from storefront.identity.ownership import Owner, cart_item_id, resolve_owner


@storefront.aggregate
class CartItem:
    user_id = Identifier()  # Set for registered users
    session_id = String(max_length=255)  # Set for guests
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, default=1)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def must_belong_to_exactly_one_owner(self):
        if bool(self.user_id) == bool(self.session_id):
            raise ValidationError({"owner": ["A cart item belongs to either a user or a session, not both"]})

    @property
    def owner(self) -> Owner:
        return resolve_owner(user_id=self.user_id, session_id=self.session_id)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, owner: Owner, product_id, quantity=1):
        """Start a new cart item for ``owner``."""
        now = datetime.now(UTC)
        item = cls(
            id=cart_item_id(owner, product_id),
            product_id=str(product_id),
            quantity=quantity,
            created_at=now,
            updated_at=now,
            **owner.fields(),
        )
        item.raise_(
            CartItemAdded(
                item_id=str(item.id),
                product_id=str(product_id),
                user_id=item.user_id,
                session_id=item.session_id,
                quantity=quantity,
                new_quantity=quantity,
            )
        )
        return item

    # -------------------------------------------------------------------
    # Quantity management
    # -------------------------------------------------------------------
    def merge(self, quantity):
        """Fold a repeated add of the same product into this item."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        self.quantity = self.quantity + quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                item_id=str(self.id),
                product_id=str(self.product_id),
                user_id=self.user_id,
                session_id=self.session_id,
                quantity=quantity,
                new_quantity=self.quantity,
            )
        )

    def change_quantity(self, quantity):
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        previous_quantity = self.quantity
        self.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                item_id=str(self.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )


@storefront.repository(part_of=CartItem)
class CartItemRepository:
    def for_owner(self, owner: Owner) -> list[CartItem]:
        """Items of one owner, oldest first."""
        return self._dao.query.filter(**owner.criteria()).order_by("created_at").all().items

    def find(self, item_id) -> CartItem | None:
        try:
            return self.get(item_id)
        except ObjectNotFoundError:
            return None

    def remove(self, item: CartItem) -> None:
        self._dao.delete(item)
