"""Tests for the Order aggregate and its status machine."""

import pytest
from protean.exceptions import ValidationError
from storefront.order.events import OrderItemAdded, OrderPlaced, OrderStatusChanged
from storefront.order.order import (
    Order,
    OrderStatus,
    PartialOrderError,
    can_transition,
    parse_status,
)


def _items():
    return [
        {"product_id": "prod-1", "quantity": 2, "crypto_price": "0.01", "fiat_price": "10.00"},
        {"product_id": "prod-2", "quantity": 3, "crypto_price": "0.02", "fiat_price": "5.00"},
    ]


def _place(**overrides):
    defaults = {
        "wallet_address": "0xabc123",
        "shipping_address": "1 Market St, San Francisco",
        "total_crypto_price": "0.08",
        "total_fiat_price": "35.00",
        "items_data": _items(),
    }
    defaults.update(overrides)
    return Order.place(**defaults)


class TestPlacement:
    def test_place_records_header_and_items(self):
        order = _place(user_id="42")

        assert order.user_id == "42"
        assert order.status == "pending"
        assert order.total_fiat_price == "35.00"
        assert len(order.items) == 2
        assert order.line_count == 2
        assert {item.product_id for item in order.items} == {"prod-1", "prod-2"}

    def test_place_raises_order_placed(self):
        order = _place()

        placed = [e for e in order._events if isinstance(e, OrderPlaced)]
        assert len(placed) == 1
        assert placed[0].item_count == 2
        assert placed[0].status == "pending"

    def test_guest_order_has_no_user(self):
        order = _place()
        assert order.user_id is None

    def test_explicit_pending_status_is_accepted(self):
        order = _place(status="pending", transaction_hash="0xfeed")
        assert order.status == "pending"
        assert order.transaction_hash == "0xfeed"

    @pytest.mark.parametrize("status", ["confirmed", "shipped", "delivered"])
    def test_order_cannot_start_past_pending(self, status):
        with pytest.raises(ValidationError) as exc:
            _place(status=status)
        assert "starts as 'pending'" in str(exc.value)

    def test_unknown_initial_status_is_rejected(self):
        with pytest.raises(ValidationError):
            _place(status="lost")

    def test_order_without_items_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place(items_data=[])
        assert "at least one item" in str(exc.value)

    def test_item_missing_price_is_rejected(self):
        items = _items()
        del items[1]["fiat_price"]
        with pytest.raises(ValidationError) as exc:
            _place(items_data=items)
        assert "fiat_price" in str(exc.value)

    def test_item_with_zero_quantity_is_rejected(self):
        items = _items()
        items[0]["quantity"] = 0
        with pytest.raises(ValidationError):
            _place(items_data=items)

    def test_invalid_total_is_rejected(self):
        with pytest.raises(ValidationError):
            _place(total_fiat_price="35.001")

    def test_wallet_address_is_required(self):
        with pytest.raises(ValidationError):
            _place(wallet_address=None)


class TestAddItem:
    def test_add_item_bumps_line_count(self):
        order = _place()
        order._events.clear()

        item = order.add_item("prod-3", 1, "0.5", "150.00")
        assert len(order.items) == 3
        assert order.line_count == 3
        assert item.crypto_price == "0.5"

        event = order._events[0]
        assert isinstance(event, OrderItemAdded)
        assert event.product_id == "prod-3"


class TestCompleteness:
    def test_complete_order_passes(self):
        _place().ensure_complete()

    def test_missing_line_items_raise(self):
        order = _place()
        order.line_count = 3

        with pytest.raises(PartialOrderError) as exc:
            order.ensure_complete()
        assert exc.value.expected == 3
        assert exc.value.found == 2


class TestStatusMachine:
    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.CONFIRMED),
            (OrderStatus.CONFIRMED, OrderStatus.SHIPPED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
            (OrderStatus.CONFIRMED, OrderStatus.CONFIRMED),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.SHIPPED),
            (OrderStatus.SHIPPED, OrderStatus.PENDING),
            (OrderStatus.DELIVERED, OrderStatus.CONFIRMED),
        ],
    )
    def test_forbidden(self, current, target):
        assert not can_transition(current, target)

    def test_parse_status(self):
        assert parse_status("shipped") is OrderStatus.SHIPPED

    def test_parse_unknown_status(self):
        with pytest.raises(ValidationError) as exc:
            parse_status("Shipped!")
        assert "pending, confirmed, shipped, delivered" in str(exc.value)


class TestUpdateStatus:
    def test_confirm_with_transaction_hash(self):
        order = _place()
        order._events.clear()

        order.update_status("confirmed", transaction_hash="0xfeed")
        assert order.status == "confirmed"
        assert order.transaction_hash == "0xfeed"

        event = order._events[0]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "pending"
        assert event.new_status == "confirmed"

    def test_hash_is_kept_when_not_given(self):
        order = _place(transaction_hash="0xfeed")
        order.update_status("confirmed")
        assert order.transaction_hash == "0xfeed"

    def test_same_status_rewrite_attaches_hash(self):
        order = _place()
        order.update_status("pending", transaction_hash="0xbeef")
        assert order.status == "pending"
        assert order.transaction_hash == "0xbeef"

    def test_skipping_a_step_is_rejected(self):
        order = _place()
        with pytest.raises(ValidationError) as exc:
            order.update_status("delivered")
        assert "Cannot move order" in str(exc.value)
        assert order.status == "pending"

    def test_moving_backwards_is_rejected(self):
        order = _place()
        order.update_status("confirmed")
        order.update_status("shipped")
        with pytest.raises(ValidationError):
            order.update_status("confirmed")
        assert order.status == "shipped"
