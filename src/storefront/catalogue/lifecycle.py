"""Product visibility — soft deactivation and reactivation."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


@storefront.command(part_of="Product")
class ReactivateProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageVisibilityHandler:
    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)

    @handle(ReactivateProduct)
    def reactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.reactivate()
        repo.add(product)
