import pytest
from rest_framework.test import APIClient

from apps.catalog.models import Product, ProductSize, ProductCategory


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def beer(db):
    return Product.objects.create(
        category=ProductCategory.BEER,
        brand='Carlton',
        name='Draught',
    )


@pytest.fixture
def schooner(beer):
    return ProductSize.objects.create(product=beer, size_label='Schooner', ml=425)


@pytest.fixture
def catalog(db):
    """A small catalog across all categories."""
    rows = [
        ('beer', 'Carlton', 'Draught', ''),
        ('beer', 'Coopers', 'Pale Ale', ''),
        ('beer', 'Other', 'Draught', ''),
        ('wine', '', 'Shiraz', ''),
        ('spirits', 'Jameson', 'Whiskey', 'Coke'),
        ('spirits', 'Jameson', 'Whiskey', 'Ginger Ale'),
        ('spirits', '', 'Whiskey', ''),
        ('spirits', '', 'Vodka', 'Soda'),
    ]
    return [
        Product.objects.create(category=category, brand=brand, name=name, mixer=mixer)
        for category, brand, name, mixer in rows
    ]
