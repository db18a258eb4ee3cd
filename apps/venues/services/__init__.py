"""Services for venue business logic."""

from .exceptions import (
    VenueServiceError,
    VenueNotFoundError,
    InvalidVenueError,
    PlacesUpstreamError,
    PlacesConfigurationError,
    EnsureEntityError,
)
from .venue_management import ensure_venue, get_venue_by_place_id

__all__ = [
    # Exceptions
    'VenueServiceError',
    'VenueNotFoundError',
    'InvalidVenueError',
    'PlacesUpstreamError',
    'PlacesConfigurationError',
    'EnsureEntityError',
    # Venue management
    'ensure_venue',
    'get_venue_by_place_id',
]
