"""Product creation — command and handler."""

from protean import handle
from protean.fields import Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront


@storefront.command(part_of="Product")
class CreateProduct:
    """Add a new, active product to the catalogue."""

    name: String(required=True, max_length=255)
    description: Text(required=True)
    crypto_price: String(required=True, max_length=32)
    fiat_price: String(required=True, max_length=16)
    category: String(required=True, max_length=100)
    image_url: String(required=True, max_length=500)
    stock: Integer(default=0)


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            crypto_price=command.crypto_price,
            fiat_price=command.fiat_price,
            category=command.category,
            image_url=command.image_url,
            stock=command.stock or 0,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product.created", product_id=str(product.id), category=product.category)
        return str(product.id)
