import os

import pytest


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def make_product():
    """Create a product through the command pipeline and return its id."""
    from protean.utils.globals import current_domain
    from storefront.catalogue.creation import CreateProduct

    def _make(**overrides):
        defaults = {
            "name": "Crypto Pioneer Cap",
            "description": "Embroidered baseball cap",
            "crypto_price": "0.025",
            "fiat_price": "89.99",
            "category": "headwear",
            "image_url": "https://images.example.com/cap.jpg",
            "stock": 50,
        }
        defaults.update(overrides)
        return current_domain.process(CreateProduct(**defaults), asynchronous=False)

    return _make
