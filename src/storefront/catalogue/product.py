"""Product aggregate root and its catalogue repository."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.money import (
    CRYPTO_PRECISION,
    CRYPTO_SCALE,
    FIAT_PRECISION,
    FIAT_SCALE,
    check_amount,
)


@storefront.aggregate
class Product:
    """A sellable item, priced both in crypto and in fiat.

    Products are never removed by the application: deactivating a product
    hides it from browsing and ordering while keeping it around for orders
    that already reference it.
    """

    name: String(required=True, max_length=255)
    description: Text(required=True)
    crypto_price: String(required=True, max_length=32)
    fiat_price: String(required=True, max_length=16)
    category: String(required=True, max_length=100)
    image_url: String(required=True, max_length=500)
    stock: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    created_at: DateTime()

    @invariant.post
    def crypto_price_must_be_fixed_point(self):
        check_amount("crypto_price", self.crypto_price, CRYPTO_PRECISION, CRYPTO_SCALE)

    @invariant.post
    def fiat_price_must_be_fixed_point(self):
        check_amount("fiat_price", self.fiat_price, FIAT_PRECISION, FIAT_SCALE)

    @classmethod
    def create(cls, name, description, crypto_price, fiat_price, category, image_url, stock=0):
        from storefront.catalogue.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            crypto_price=str(crypto_price),
            fiat_price=str(fiat_price),
            category=category,
            image_url=image_url,
            stock=stock,
            is_active=True,
            created_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                category=product.category,
                crypto_price=product.crypto_price,
                fiat_price=product.fiat_price,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    def update_stock(self, stock):
        from storefront.catalogue.events import StockUpdated

        previous_stock = self.stock
        self.stock = stock

        self.raise_(
            StockUpdated(
                product_id=self.id,
                previous_stock=previous_stock,
                new_stock=self.stock,
            )
        )

    def change_price(self, crypto_price=None, fiat_price=None):
        """Reprice the product. Orders already placed keep their own price snapshot."""
        from storefront.catalogue.events import ProductRepriced

        if crypto_price is None and fiat_price is None:
            raise ValidationError({"price": ["Provide a crypto price, a fiat price, or both"]})

        previous_crypto, previous_fiat = self.crypto_price, self.fiat_price
        with atomic_change(self):
            if crypto_price is not None:
                self.crypto_price = str(crypto_price)
            if fiat_price is not None:
                self.fiat_price = str(fiat_price)

        self.raise_(
            ProductRepriced(
                product_id=self.id,
                previous_crypto_price=previous_crypto,
                new_crypto_price=self.crypto_price,
                previous_fiat_price=previous_fiat,
                new_fiat_price=self.fiat_price,
            )
        )

    def deactivate(self):
        from storefront.catalogue.events import ProductDeactivated

        if not self.is_active:
            raise ValidationError({"is_active": ["Product is already inactive"]})

        self.is_active = False
        self.raise_(ProductDeactivated(product_id=self.id, deactivated_at=datetime.now(UTC)))

    def reactivate(self):
        from storefront.catalogue.events import ProductReactivated

        if self.is_active:
            raise ValidationError({"is_active": ["Product is already active"]})

        self.is_active = True
        self.raise_(ProductReactivated(product_id=self.id, reactivated_at=datetime.now(UTC)))


@storefront.repository(part_of=Product)
class ProductRepository:
    """Catalogue reads. Only active products are ever handed to shoppers."""

    def list_active(self) -> list[Product]:
        return self._dao.query.filter(is_active=True).order_by("-created_at").all().items

    def list_active_by_category(self, category: str) -> list[Product]:
        return self._dao.query.filter(is_active=True, category=category).order_by("-created_at").all().items

    def get_active(self, product_id) -> Product | None:
        """Return the product if it exists and is active; missing and inactive look the same."""
        try:
            product = self.get(product_id)
        except ObjectNotFoundError:
            return None
        return product if product.is_active else None

    def find(self, product_id) -> Product | None:
        """Return the product regardless of its active flag, or ``None``."""
        try:
            return self.get(product_id)
        except ObjectNotFoundError:
            return None
