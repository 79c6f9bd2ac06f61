"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    category: String(required=True, max_length=100)
    crypto_price: String(required=True)
    fiat_price: String(required=True)
    stock: Integer(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class StockUpdated:
    """The stock count of a product was overwritten."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)


@storefront.event(part_of="Product")
class ProductRepriced:
    """The crypto and/or fiat price of a product changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_crypto_price: String(required=True)
    new_crypto_price: String(required=True)
    previous_fiat_price: String(required=True)
    new_fiat_price: String(required=True)


@storefront.event(part_of="Product")
class ProductDeactivated:
    """The product was hidden from browsing and ordering."""

    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductReactivated:
    """A previously deactivated product is visible again."""

    __version__ = 1

    product_id: Identifier(required=True)
    reactivated_at: DateTime(required=True)
