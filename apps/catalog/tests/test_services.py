from unittest.mock import patch

import pytest
from django.db import IntegrityError

from apps.catalog.models import Product, ProductSize
from apps.catalog.services import (
    ensure_product,
    ensure_product_size,
    list_product_names,
    list_spirits,
    list_mixers,
    InvalidProductError,
    EnsureEntityError,
)


@pytest.mark.django_db
class TestEnsureProduct:

    def test_creates_product(self):
        product = ensure_product(brand='Carlton', name='Draught', category='beer')

        assert product.brand == 'Carlton'
        assert product.category == 'beer'
        assert product.mixer == ''

    def test_returns_existing_product(self, beer):
        product = ensure_product(brand='Carlton', name='Draught', category='beer')

        assert product.id == beer.id
        assert Product.objects.count() == 1

    def test_none_and_empty_optional_fields_match(self):
        first = ensure_product(brand=None, name='Shiraz', category='wine', mixer=None)
        second = ensure_product(brand='', name='Shiraz', category='wine', mixer='')

        assert first.id == second.id

    def test_mixer_is_part_of_identity(self):
        neat = ensure_product(brand='Jameson', name='Whiskey', category='spirits')
        with_coke = ensure_product(brand='Jameson', name='Whiskey', category='spirits', mixer='Coke')

        assert neat.id != with_coke.id

    def test_case_is_significant(self):
        upper = ensure_product(brand='Carlton', name='Draught', category='beer')
        lower = ensure_product(brand='carlton', name='draught', category='beer')

        assert upper.id != lower.id

    def test_name_required(self):
        with pytest.raises(InvalidProductError):
            ensure_product(brand='Carlton', name='', category='beer')

    def test_unknown_category_rejected(self):
        with pytest.raises(InvalidProductError):
            ensure_product(brand='Carlton', name='Draught', category='cider')

    def test_failed_insert_without_existing_row(self):
        with patch.object(Product.objects, 'create', side_effect=IntegrityError):
            with pytest.raises(EnsureEntityError, match='Could not ensure product'):
                ensure_product(brand='X', name='Y', category='beer')


@pytest.mark.django_db
class TestEnsureProductSize:

    def test_creates_size(self, beer):
        size = ensure_product_size(product=beer, size_label='Pint', ml=570)

        assert size.product == beer
        assert size.label == 'Pint 570ml'

    def test_returns_existing_size(self, schooner):
        size = ensure_product_size(product=schooner.product, size_label='Schooner', ml=425)

        assert size.id == schooner.id

    def test_label_only_size_is_stable(self, beer):
        first = ensure_product_size(product=beer, size_label='Jug')
        second = ensure_product_size(product=beer, size_label='Jug', ml=None)

        assert first.id == second.id
        assert first.ml is None
        assert ProductSize.objects.filter(product=beer).count() == 1

    def test_label_without_ml_differs_from_label_with_ml(self, schooner):
        size = ensure_product_size(product=schooner.product, size_label='Schooner')

        assert size.id != schooner.id

    @pytest.mark.parametrize('ml', [0, -5, True])
    def test_invalid_ml_rejected(self, beer, ml):
        with pytest.raises(InvalidProductError):
            ensure_product_size(product=beer, size_label='Odd', ml=ml)

    def test_failed_insert_without_existing_row(self, beer):
        with patch.object(ProductSize.objects, 'create', side_effect=IntegrityError):
            with pytest.raises(EnsureEntityError, match='Could not ensure product size'):
                ensure_product_size(product=beer, size_label='Pint', ml=570)


@pytest.mark.django_db
class TestProductListing:

    def test_product_names_are_distinct_and_sorted(self, catalog):
        assert list_product_names(category='beer') == ['Draught', 'Pale Ale']

    def test_spirits(self, catalog):
        assert list_spirits() == ['Vodka', 'Whiskey']

    def test_mixers_for_spirit(self, catalog):
        assert list_mixers(spirit='Whiskey') == ['Coke', 'Ginger Ale']

    def test_mixers_for_unknown_spirit(self, catalog):
        assert list_mixers(spirit='Gin') == []
