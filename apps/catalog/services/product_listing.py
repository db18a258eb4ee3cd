"""Distinct product names for the price entry form."""

from typing import List

from ..models import Product, ProductCategory


def _distinct(values) -> List[str]:
    seen = []
    for value in values:
        value = (value or '').strip()
        if value and value not in seen:
            seen.append(value)
    return seen


def list_product_names(*, category: str) -> List[str]:
    """Distinct product names in a category, alphabetically."""
    names = (
        Product.objects
        .filter(category=category)
        .order_by('name')
        .values_list('name', flat=True)
    )
    return _distinct(names)


def list_spirits() -> List[str]:
    return list_product_names(category=ProductCategory.SPIRITS)


def list_mixers(*, spirit: str) -> List[str]:
    """Distinct mixers recorded for a spirit name."""
    mixers = (
        Product.objects
        .filter(category=ProductCategory.SPIRITS, name=spirit)
        .exclude(mixer='')
        .order_by('mixer')
        .values_list('mixer', flat=True)
    )
    return _distinct(mixers)
