"""Product and product size find-or-create."""

import logging
from typing import Optional

from django.db import transaction, IntegrityError

from ..models import Product, ProductSize, ProductCategory
from .exceptions import InvalidProductError, EnsureEntityError

logger = logging.getLogger(__name__)


def _text(value: Optional[str]) -> str:
    return value if value is not None else ''


def ensure_product(
    *,
    brand: Optional[str],
    name: str,
    category: Optional[str] = None,
    mixer: Optional[str] = None,
) -> Product:
    """
    Return the product with this identity, creating it if missing.

    Identity is (brand, name, category, mixer) compared verbatim; None
    and empty string are the same value. Duplicates collapse to the
    first-created row.

    Args:
        brand: Brand name (optional)
        name: Product name
        category: beer, wine or spirits (optional)
        mixer: Mixer for spirits (optional)

    Returns:
        Product instance

    Raises:
        InvalidProductError: If name is empty or category unknown
        EnsureEntityError: If the product can't be found or inserted
    """
    if not name:
        raise InvalidProductError("Product name is required")

    category = _text(category)
    if category and category not in ProductCategory.values:
        raise InvalidProductError(f"Unknown category '{category}'")

    identity = {
        'brand': _text(brand),
        'name': name,
        'category': category,
        'mixer': _text(mixer),
    }

    product = Product.objects.filter(**identity).order_by('created_at').first()
    if product:
        return product

    try:
        with transaction.atomic():
            product = Product.objects.create(**identity)
    except IntegrityError:
        product = Product.objects.filter(**identity).order_by('created_at').first()
        if product is None:
            logger.error("Insert failed and no product found for %s", identity)
            raise EnsureEntityError("Could not ensure product")
        return product

    logger.info("Created product %s (%s)", product.id, product.label)
    return product


def ensure_product_size(
    *,
    product: Product,
    size_label: Optional[str] = None,
    ml: Optional[int] = None,
) -> ProductSize:
    """
    Return the size of a product with this label and volume, creating it if missing.

    Args:
        product: Owning product
        size_label: e.g. "Schooner" (optional)
        ml: Exact volume in millilitres (optional)

    Returns:
        ProductSize instance

    Raises:
        InvalidProductError: If ml is not a positive integer
        EnsureEntityError: If the size can't be found or inserted
    """
    if ml is not None and (isinstance(ml, bool) or not isinstance(ml, int) or ml <= 0):
        raise InvalidProductError("ml must be a positive whole number")

    identity = {
        'product': product,
        'size_label': _text(size_label),
        'ml': ml,
    }
    lookup = dict(identity)
    if ml is None:
        lookup.pop('ml')
        lookup['ml__isnull'] = True

    size = ProductSize.objects.filter(**lookup).order_by('created_at').first()
    if size:
        return size

    try:
        with transaction.atomic():
            size = ProductSize.objects.create(**identity)
    except IntegrityError:
        size = ProductSize.objects.filter(**lookup).order_by('created_at').first()
        if size is None:
            logger.error("Insert failed and no size found for product %s", product.id)
            raise EnsureEntityError("Could not ensure product size")
        return size

    logger.info("Created size %s for product %s", size.id, product.id)
    return size
