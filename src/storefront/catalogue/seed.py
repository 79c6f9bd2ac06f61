"""Sample catalogue used to bootstrap an empty store."""

from protean.utils.globals import current_domain

from storefront.catalogue.creation import CreateProduct
from storefront.catalogue.product import Product
from storefront.domain import logger

_IMAGE_PARAMS = "?ixlib=rb-4.0.3&auto=format&fit=crop&w=600&h=600"

SAMPLE_PRODUCTS = [
    {
        "name": "Crypto Pioneer Cap",
        "description": "Premium quality baseball cap with embroidered crypto logo",
        "crypto_price": "0.025",
        "fiat_price": "89.99",
        "category": "headwear",
        "image_url": f"https://images.unsplash.com/photo-1588850561407-ed78c282e89b{_IMAGE_PARAMS}",
        "stock": 50,
    },
    {
        "name": "Golden Chain Necklace",
        "description": "18k gold-plated chain with crypto pendant",
        "crypto_price": "0.15",
        "fiat_price": "539.99",
        "category": "jewelry",
        "image_url": f"https://images.unsplash.com/photo-1599643478518-a784e5dc4c8f{_IMAGE_PARAMS}",
        "stock": 25,
    },
    {
        "name": "Web3 Developer Hoodie",
        "description": "Comfortable cotton hoodie with blockchain graphics",
        "crypto_price": "0.08",
        "fiat_price": "287.99",
        "category": "apparel",
        "image_url": f"https://images.unsplash.com/photo-1556821840-3a63f95609a7{_IMAGE_PARAMS}",
        "stock": 75,
    },
    {
        "name": "NFT Artist Tee",
        "description": "Limited edition t-shirt featuring digital art",
        "crypto_price": "0.045",
        "fiat_price": "161.99",
        "category": "apparel",
        "image_url": f"https://images.unsplash.com/photo-1521572163474-6864f9cf17ab{_IMAGE_PARAMS}",
        "stock": 100,
    },
    {
        "name": "Hardware Wallet Case",
        "description": "Protective leather case for crypto hardware wallets",
        "crypto_price": "0.035",
        "fiat_price": "125.99",
        "category": "accessories",
        "image_url": f"https://images.unsplash.com/photo-1553062407-98eeb64c6a62{_IMAGE_PARAMS}",
        "stock": 40,
    },
    {
        "name": "Crypto Sticker Pack",
        "description": "Set of 20 premium crypto-themed stickers",
        "crypto_price": "0.012",
        "fiat_price": "43.20",
        "category": "accessories",
        "image_url": f"https://images.unsplash.com/photo-1578662996442-48f60103fc96{_IMAGE_PARAMS}",
        "stock": 200,
    },
    {
        "name": "Crypto Tracker Watch",
        "description": "Smartwatch with built-in crypto price tracker",
        "crypto_price": "0.42",
        "fiat_price": "1511.99",
        "category": "accessories",
        "image_url": f"https://images.unsplash.com/photo-1523275335684-37898b6baf30{_IMAGE_PARAMS}",
        "stock": 15,
    },
    {
        "name": "Digital Nomad Backpack",
        "description": "Anti-theft backpack designed for crypto travelers",
        "crypto_price": "0.18",
        "fiat_price": "647.99",
        "category": "accessories",
        "image_url": f"https://images.unsplash.com/photo-1553062407-98eeb64c6a62{_IMAGE_PARAMS}",
        "stock": 30,
    },
]


def seed_catalogue() -> int:
    """Create the sample products unless the catalogue already has active products.

    Must run inside a storefront domain context. Returns the number of
    products created.
    """
    if current_domain.repository_for(Product).list_active():
        logger.info("catalogue.seed_skipped", reason="catalogue not empty")
        return 0

    for data in SAMPLE_PRODUCTS:
        current_domain.process(CreateProduct(**data), asynchronous=False)

    logger.info("catalogue.seeded", count=len(SAMPLE_PRODUCTS))
    return len(SAMPLE_PRODUCTS)
