"""Stock management — command and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class UpdateStock:
    """Overwrite the stock count of a product. Negative counts are rejected."""

    product_id: Identifier(required=True)
    stock: Integer(required=True, min_value=0)


@storefront.command_handler(part_of=Product)
class UpdateStockHandler:
    @handle(UpdateStock)
    def update_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_stock(command.stock)
        repo.add(product)
