"""Domain exceptions for reviews app."""


class ReviewsServiceError(Exception):
    """Base exception for all reviews service errors."""
    pass


class InvalidReviewError(ReviewsServiceError):
    """Rating out of range or comment missing."""
    pass


class ReviewTooLongError(InvalidReviewError):
    """Comment exceeds the maximum length."""
    pass
