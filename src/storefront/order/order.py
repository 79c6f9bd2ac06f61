"""Order aggregate — a placed order and its immutable line items.

State Machine:
    PENDING → CONFIRMED → SHIPPED → DELIVERED

Writing the current status again is allowed, so that a transaction hash can be
attached to an order after the fact without moving it.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.order.events import OrderItemAdded, OrderPlaced, OrderStatusChanged
from storefront.shared.money import (
    CRYPTO_PRECISION,
    CRYPTO_SCALE,
    FIAT_PRECISION,
    FIAT_SCALE,
    check_amount,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
}


_LINE_ITEM_KEYS = ("product_id", "quantity", "crypto_price", "fiat_price")


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """True when an order in ``current`` may be written with status ``target``."""
    return target == current or target in _VALID_TRANSITIONS[current]


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError({"status": [f"Unknown order status '{value}'. Expected one of: {allowed}"]}) from None


class PartialOrderError(Exception):
    """An order was found with fewer line items than it was placed with."""

    def __init__(self, order_id, expected, found):
        self.order_id = order_id
        self.expected = expected
        self.found = found
        super().__init__(f"Order {order_id} has {found} of {expected} line items")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A line item with the price snapshot taken when it was ordered.

    Later catalogue price changes do not touch it; nothing mutates an order
    item after it is created.
    """

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    crypto_price = String(required=True, max_length=32)
    fiat_price = String(required=True, max_length=16)


def _line_item(index, data) -> OrderItem:
    missing = [key for key in _LINE_ITEM_KEYS if data.get(key) in (None, "")]
    if missing:
        raise ValidationError({"order_items": [f"Item {index} is missing: {', '.join(missing)}"]})

    return OrderItem(
        product_id=str(data["product_id"]),
        quantity=data["quantity"],
        crypto_price=str(data["crypto_price"]),
        fiat_price=str(data["fiat_price"]),
    )


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier()  # Guests place orders without an account
    total_crypto_price = String(required=True, max_length=32)
    total_fiat_price = String(required=True, max_length=16)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    wallet_address = String(required=True, max_length=255)
    transaction_hash = String(max_length=255)
    shipping_address = Text(required=True)
    items = HasMany(OrderItem)
    line_count = Integer(default=0)  # Line items recorded so far
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def totals_must_be_fixed_point(self):
        check_amount("total_crypto_price", self.total_crypto_price, CRYPTO_PRECISION, CRYPTO_SCALE)
        check_amount("total_fiat_price", self.total_fiat_price, FIAT_PRECISION, FIAT_SCALE)

    @invariant.post
    def item_prices_must_be_fixed_point(self):
        for item in self.items:
            check_amount("crypto_price", item.crypto_price, CRYPTO_PRECISION, CRYPTO_SCALE)
            check_amount("fiat_price", item.fiat_price, FIAT_PRECISION, FIAT_SCALE)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        wallet_address,
        shipping_address,
        total_crypto_price,
        total_fiat_price,
        items_data,
        user_id=None,
        status=None,
        transaction_hash=None,
    ):
        """Build an order header together with all of its line items.

        Args:
            items_data: List of dicts with product_id, quantity, crypto_price
                        and fiat_price. Prices are recorded exactly as given.
        """
        if not items_data:
            raise ValidationError({"order_items": ["An order needs at least one item"]})

        initial_status = parse_status(status) if status else OrderStatus.PENDING
        if initial_status is not OrderStatus.PENDING:
            # Later states are reached only through update_status
            raise ValidationError({"status": [f"A new order starts as 'pending', not '{initial_status.value}'"]})
        now = datetime.now(UTC)

        order = cls(
            user_id=user_id,
            total_crypto_price=str(total_crypto_price),
            total_fiat_price=str(total_fiat_price),
            status=initial_status.value,
            wallet_address=wallet_address,
            transaction_hash=transaction_hash,
            shipping_address=shipping_address,
            line_count=0,
            created_at=now,
            updated_at=now,
        )

        with atomic_change(order):
            for index, data in enumerate(items_data):
                order.add_items(_line_item(index, data))
            order.line_count = len(items_data)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=user_id,
                status=order.status,
                total_crypto_price=order.total_crypto_price,
                total_fiat_price=order.total_fiat_price,
                wallet_address=wallet_address,
                item_count=order.line_count,
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Line items
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, crypto_price, fiat_price):
        item = OrderItem(
            product_id=str(product_id),
            quantity=quantity,
            crypto_price=str(crypto_price),
            fiat_price=str(fiat_price),
        )
        with atomic_change(self):
            self.add_items(item)
            self.line_count = (self.line_count or 0) + 1
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderItemAdded(
                order_id=str(self.id),
                item_id=str(item.id),
                product_id=item.product_id,
                quantity=item.quantity,
                crypto_price=item.crypto_price,
                fiat_price=item.fiat_price,
            )
        )
        return item

    def ensure_complete(self):
        """Raise ``PartialOrderError`` if line items went missing since placement."""
        found = len(self.items)
        if found != self.line_count:
            raise PartialOrderError(str(self.id), self.line_count, found)

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def update_status(self, status, transaction_hash=None):
        """Move the order to ``status``; replace the transaction hash only when one is given."""
        current = OrderStatus(self.status)
        target = parse_status(status)
        if not can_transition(current, target):
            raise ValidationError({"status": [f"Cannot move order from '{current.value}' to '{target.value}'"]})

        self.status = target.value
        if transaction_hash:
            self.transaction_hash = transaction_hash
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                transaction_hash=self.transaction_hash,
            )
        )


@storefront.repository(part_of=Order)
class OrderRepository:
    def find(self, order_id) -> Order | None:
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            return None

    def for_user(self, user_id) -> list[Order]:
        """Orders placed by ``user_id``, newest first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").all().items
