"""Fixed-point amounts for crypto and fiat prices.

Prices are carried as decimal strings (never floats) so that a stored
``decimal(18, 8)`` crypto price or ``decimal(10, 2)`` fiat price survives a
round trip through JSON and the database unchanged.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean.exceptions import ValidationError

CRYPTO_PRECISION = 18
CRYPTO_SCALE = 8
FIAT_PRECISION = 10
FIAT_SCALE = 2

# Display precision of computed totals
CRYPTO_TOTAL_PLACES = 6
FIAT_TOTAL_PLACES = 2


def to_decimal(value) -> Decimal:
    """Convert a price string (or number) to ``Decimal``.

    Raises ``ValueError`` when the value is not a finite number.
    """
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, TypeError):
        raise ValueError(f"'{value}' is not a valid amount") from None
    if not amount.is_finite():
        raise ValueError(f"'{value}' is not a valid amount")
    return amount


def check_amount(field_name: str, value, precision: int, scale: int) -> None:
    """Raise ``ValidationError`` unless ``value`` fits ``decimal(precision, scale)``."""
    try:
        amount = to_decimal(value)
    except ValueError as exc:
        raise ValidationError({field_name: [str(exc)]}) from None

    if amount < 0:
        raise ValidationError({field_name: ["Amount cannot be negative"]})

    _, digits, exponent = amount.as_tuple()
    fractional_digits = max(-exponent, 0)
    integer_digits = max(len(digits) + exponent, 0)
    if fractional_digits > scale:
        raise ValidationError({field_name: [f"Amount allows at most {scale} decimal places"]})
    if integer_digits > precision - scale:
        raise ValidationError({field_name: [f"Amount allows at most {precision - scale} integer digits"]})


def format_amount(amount: Decimal, places: int) -> str:
    """Render ``amount`` with exactly ``places`` decimal places, rounding half-up."""
    return str(amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))
