# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Sets up environment variables before any storefront imports (settings are
# read at import time) and provides catalog fixtures shared by the tests.
# =============================================================================

import os

os.environ.setdefault("SHOPIFY_STORE_DOMAIN", "test-shop.myshopify.com")
os.environ.setdefault("SHOPIFY_STOREFRONT_API_TOKEN", "test-storefront-token")
os.environ.setdefault("CONTACT_FORM_ENDPOINT", "https://forms.example.com/f/test-form")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest

from tests.fakes import FakeStorefront, collection_node, product_node


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def collection_nodes():
    """Four collections, most recently updated first."""
    return [collection_node(i) for i in range(1, 5)]


@pytest.fixture
def product_nodes():
    """Four products, most recently updated first."""
    return [product_node(i) for i in range(1, 5)]


@pytest.fixture
def storefront(collection_nodes, product_nodes):
    """Storefront that answers every home page and header query."""
    return FakeStorefront(responses={
        "FeaturedCollection": {"collections": {"nodes": collection_nodes[:1]}},
        "StoreCollections": {"collections": {"nodes": collection_nodes}},
        "RecommendedProducts": {"products": {"nodes": product_nodes}},
        "Header": {
            "shop": {"id": "gid://shopify/Shop/1", "name": "Fabric Elite"},
            "menu": {
                "id": "gid://shopify/Menu/1",
                "items": [
                    {"id": "m1", "title": "About", "url": "https://shop.example.com/pages/about"},
                    {"id": "m2", "title": "Linen", "url": "https://shop.example.com/collections/linen?sort=new"},
                ],
            },
        },
    })
