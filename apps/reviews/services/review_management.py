"""Review management service - site feedback."""

import logging
from typing import Any

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.reviews.models import Review
from .exceptions import InvalidReviewError, ReviewTooLongError

logger = logging.getLogger(__name__)

MAX_BODY_LENGTH = 2000


def create_review(*, user: User, rating: Any, body: Any) -> Review:
    """
    Store feedback about the site.

    Args:
        user: Authenticated user leaving the review
        rating: Overall rating (1-5)
        body: Comment, required; surrounding whitespace is dropped

    Returns:
        Created Review instance

    Raises:
        InvalidReviewError: If rating not in 1-5 range or comment is empty
        ReviewTooLongError: If comment is longer than 2000 characters
    """
    if isinstance(rating, bool) or not isinstance(rating, int) or not (1 <= rating <= 5):
        raise InvalidReviewError("Rating must be 1-5")

    comment = body.strip() if isinstance(body, str) else ''
    if not comment:
        raise InvalidReviewError("Comment is required")
    if len(comment) > MAX_BODY_LENGTH:
        raise ReviewTooLongError("Comment too long")

    review = Review.objects.create(user=user, rating=rating, body=comment)
    logger.info("User %s left a %d star review", user.id, rating)
    return review


def list_recent_reviews(*, limit: int = 20) -> QuerySet:
    """Most recent reviews first."""
    return Review.objects.select_related('user').order_by('-created_at')[:limit]
