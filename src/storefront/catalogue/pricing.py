"""Product repricing — command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class ChangeProductPrice:
    product_id: Identifier(required=True)
    crypto_price: String(max_length=32)
    fiat_price: String(max_length=16)


@storefront.command_handler(part_of=Product)
class ChangeProductPriceHandler:
    @handle(ChangeProductPrice)
    def change_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.change_price(crypto_price=command.crypto_price, fiat_price=command.fiat_price)
        repo.add(product)
