"""Domain-specific exceptions for catalog services."""

from apps.venues.services.exceptions import EnsureEntityError


class CatalogServiceError(Exception):
    """Base exception for catalog services."""
    pass


class InvalidProductError(CatalogServiceError):
    """Raised when product or size fields are missing or invalid."""
    pass


__all__ = [
    'CatalogServiceError',
    'InvalidProductError',
    'EnsureEntityError',
]
