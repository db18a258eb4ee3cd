"""Services for catalog business logic."""

from .exceptions import (
    CatalogServiceError,
    InvalidProductError,
    EnsureEntityError,
)
from .product_management import ensure_product, ensure_product_size
from .product_listing import list_product_names, list_spirits, list_mixers

__all__ = [
    # Exceptions
    'CatalogServiceError',
    'InvalidProductError',
    'EnsureEntityError',
    # Find-or-create
    'ensure_product',
    'ensure_product_size',
    # Listing
    'list_product_names',
    'list_spirits',
    'list_mixers',
]
