"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers
from storefront.catalogue.creation import CreateProduct


@pytest.fixture()
def catalogue():
    """Product ids by name."""
    return {}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given(
    parsers.parse('a product "{name}" priced {crypto} crypto and {fiat} fiat with {stock:d} in stock'),
)
def product_in_catalogue(catalogue, name, crypto, fiat, stock):
    command = CreateProduct(
        name=name,
        description=f"{name} from the storefront collection",
        crypto_price=crypto,
        fiat_price=fiat,
        category="headwear",
        image_url="https://images.example.com/item.jpg",
        stock=stock,
    )
    catalogue[name] = current_domain.process(command, asynchronous=False)
