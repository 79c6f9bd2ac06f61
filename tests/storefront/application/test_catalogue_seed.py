"""Application tests for loading the sample catalogue."""

from protean.utils.globals import current_domain
from storefront.catalogue.product import Product
from storefront.catalogue.seed import SAMPLE_PRODUCTS, seed_catalogue


class TestSeedCatalogue:
    def test_seeds_empty_catalogue(self):
        created = seed_catalogue()

        assert created == len(SAMPLE_PRODUCTS) == 8
        products = current_domain.repository_for(Product).list_active()
        assert len(products) == 8
        assert all(p.stock > 0 for p in products)

    def test_does_nothing_when_products_exist(self, make_product):
        make_product()

        assert seed_catalogue() == 0
        assert len(current_domain.repository_for(Product).list_active()) == 1

    def test_running_twice_does_not_duplicate(self):
        seed_catalogue()
        assert seed_catalogue() == 0
        assert len(current_domain.repository_for(Product).list_active()) == 8
