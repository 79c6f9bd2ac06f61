"""Cart totals — pure aggregation over priced cart lines."""

from dataclasses import dataclass
from decimal import Decimal

from storefront.shared.money import CRYPTO_TOTAL_PLACES, FIAT_TOTAL_PLACES, format_amount, to_decimal


@dataclass(frozen=True)
class CartTotals:
    total_crypto: str
    total_fiat: str


def compute_totals(lines) -> CartTotals:
    """Sum ``quantity × unit price`` per currency.

    ``lines`` is any iterable of objects exposing ``quantity``, ``crypto_price``
    and ``fiat_price``. The two currencies are summed independently; there is
    no conversion between them.
    """
    total_crypto = Decimal(0)
    total_fiat = Decimal(0)
    for line in lines:
        total_crypto += to_decimal(line.crypto_price) * line.quantity
        total_fiat += to_decimal(line.fiat_price) * line.quantity

    return CartTotals(
        total_crypto=format_amount(total_crypto, CRYPTO_TOTAL_PLACES),
        total_fiat=format_amount(total_fiat, FIAT_TOTAL_PLACES),
    )
