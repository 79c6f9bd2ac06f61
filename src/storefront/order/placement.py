"""Order placement — commands and handler.

An order header and its line items are written as one aggregate inside the
command's unit of work: either the whole order is stored or none of it is.
"""

import json

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.cart.totals import compute_totals
from storefront.domain import logger, storefront
from storefront.order.order import Order
from storefront.shared.money import CRYPTO_TOTAL_PLACES, FIAT_TOTAL_PLACES, format_amount, to_decimal


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier()
    total_crypto_price = String(required=True, max_length=32)
    total_fiat_price = String(required=True, max_length=16)
    status = String(max_length=20)
    wallet_address = String(required=True, max_length=255)
    transaction_hash = String(max_length=255)
    shipping_address = Text(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, crypto_price, fiat_price}


@storefront.command(part_of="Order")
class AddOrderItem:
    """Append a line item, with its price snapshot, to an existing order."""

    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    crypto_price = String(required=True, max_length=32)
    fiat_price = String(required=True, max_length=16)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        order = Order.place(
            user_id=command.user_id,
            total_crypto_price=command.total_crypto_price,
            total_fiat_price=command.total_fiat_price,
            status=command.status,
            wallet_address=command.wallet_address,
            transaction_hash=command.transaction_hash,
            shipping_address=command.shipping_address,
            items_data=items_data,
        )
        _warn_on_total_mismatch(order)

        current_domain.repository_for(Order).add(order)
        logger.info("order.placed", order_id=str(order.id), item_count=order.line_count)
        return str(order.id)

    @handle(AddOrderItem)
    def add_order_item(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        item = order.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            crypto_price=command.crypto_price,
            fiat_price=command.fiat_price,
        )
        repo.add(order)
        return str(item.id)


def _warn_on_total_mismatch(order):
    """Header totals are stored as supplied; flag the ones that disagree with the lines."""
    computed = compute_totals(order.items)
    supplied_crypto = format_amount(to_decimal(order.total_crypto_price), CRYPTO_TOTAL_PLACES)
    supplied_fiat = format_amount(to_decimal(order.total_fiat_price), FIAT_TOTAL_PLACES)
    if (supplied_crypto, supplied_fiat) != (computed.total_crypto, computed.total_fiat):
        logger.warning(
            "order.total_mismatch",
            order_id=str(order.id),
            supplied_crypto=supplied_crypto,
            computed_crypto=computed.total_crypto,
            supplied_fiat=supplied_fiat,
            computed_fiat=computed.total_fiat,
        )
