"""
Reviews services - Business logic layer.

Site feedback: users rate the app and leave a comment.
"""

from .review_management import (
    MAX_BODY_LENGTH,
    create_review,
    list_recent_reviews,
)

from .exceptions import (
    ReviewsServiceError,
    InvalidReviewError,
    ReviewTooLongError,
)

__all__ = [
    # Review Management Services
    'MAX_BODY_LENGTH',
    'create_review',
    'list_recent_reviews',
    # Exceptions
    'ReviewsServiceError',
    'InvalidReviewError',
    'ReviewTooLongError',
]
