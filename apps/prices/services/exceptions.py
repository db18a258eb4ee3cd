"""Domain-specific exceptions for price report services."""


class PriceServiceError(Exception):
    """Base exception for price report services."""
    pass


class InvalidSubmissionError(PriceServiceError):
    """Raised when a price submission is missing required data."""
    pass


class InvalidPriceError(InvalidSubmissionError):
    """Raised when a price is not a positive whole number of cents."""
    pass


class InvalidGroupingKeyError(PriceServiceError):
    """Raised when a grouping key can't be parsed."""
    pass


class ReportNotFoundError(PriceServiceError):
    """Raised when a price report doesn't exist."""
    pass


class InvalidTransitionError(PriceServiceError):
    """Raised when a moderated report is moved to the opposite state."""
    pass


class NotModeratorError(PriceServiceError):
    """Raised when a non-moderator attempts a moderation action."""
    pass
