"""Domain-specific exceptions for venue services."""


class VenueServiceError(Exception):
    """Base exception for venue services."""
    pass


class VenueNotFoundError(VenueServiceError):
    """Raised when a venue doesn't exist."""
    pass


class InvalidVenueError(VenueServiceError):
    """Raised when a venue reference is missing or malformed."""
    pass


class PlacesUpstreamError(VenueServiceError):
    """Raised when the places provider is unreachable or refuses a request."""
    pass


class PlacesConfigurationError(PlacesUpstreamError):
    """Raised when no maps API key is configured."""
    pass


class EnsureEntityError(VenueServiceError):
    """Raised when a find-or-create can neither find nor insert its row."""
    pass
