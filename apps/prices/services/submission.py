"""Price submission and admin price entry."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from apps.catalog.services import ensure_product, ensure_product_size, InvalidProductError
from apps.venues.services import ensure_venue, InvalidVenueError
from ..models import PriceReport, ReportStatus
from .auto_approval import should_auto_approve, auto_approval_fields
from .exceptions import InvalidPriceError, InvalidSubmissionError, NotModeratorError
from .grouping import build_grouping_key

User = get_user_model()

logger = logging.getLogger(__name__)

ADMIN_EDIT_NOTE = "admin edit"


def validate_price_cents(price_cents: Any) -> int:
    """Return the price if it is a positive whole number of cents."""
    if isinstance(price_cents, bool) or not isinstance(price_cents, int) or price_cents <= 0:
        raise InvalidPriceError("price_cents must be a positive whole number")
    return price_cents


def _resolve_entities(place: Dict[str, Any], product: Dict[str, Any], size: Dict[str, Any]):
    try:
        venue = ensure_venue(
            external_ref=place.get('place_id'),
            name=place.get('name'),
            address=place.get('address'),
        )
        product_row = ensure_product(
            brand=product.get('brand'),
            name=product.get('name'),
            category=product.get('category'),
            mixer=product.get('mixer'),
        )
        size_row = ensure_product_size(
            product=product_row,
            size_label=size.get('size_label'),
            ml=size.get('ml'),
        )
    except (InvalidVenueError, InvalidProductError) as e:
        raise InvalidSubmissionError(str(e))
    return venue, product_row, size_row


@transaction.atomic
def submit_price_report(
    *,
    place: Dict[str, Any],
    product: Dict[str, Any],
    size: Dict[str, Any],
    price_cents: int,
    observed_at: Optional[datetime] = None,
    notes: Optional[str] = None,
    membership: Optional[bool] = None,
    submitted_by: Optional[User] = None,
) -> PriceReport:
    """
    Record an observed price.

    Venue, product and size are found or created first. When the price
    equals the accepted price for the same item and membership track the
    report is stored approved straight away, otherwise pending.

    Args:
        place: {'place_id', 'name'?, 'address'?}
        product: {'brand'?, 'name', 'category'?, 'mixer'?}
        size: {'size_label'?, 'ml'?}
        price_cents: Observed price in cents
        observed_at: When the price was seen
        notes: Free text from the submitter
        membership: Member price (True), non-member (False) or unknown (None)
        submitted_by: Submitting user, None for guests

    Returns:
        Created PriceReport

    Raises:
        InvalidSubmissionError: If required fields are missing or invalid
        EnsureEntityError: If venue, product or size can't be stored
    """
    price_cents = validate_price_cents(price_cents)
    venue, product_row, size_row = _resolve_entities(place, product, size)

    key = build_grouping_key(
        venue.google_place_id,
        product_row.category,
        product_row.brand,
        product_row.name,
        product_row.mixer,
        size_row.size_label,
        size_row.ml,
    )
    auto_approve = should_auto_approve(key=key, price_cents=price_cents, membership=membership)
    moderation = auto_approval_fields() if auto_approve else {'status': ReportStatus.PENDING}

    report = PriceReport.objects.create(
        venue=venue,
        product_size=size_row,
        price_cents=price_cents,
        observed_at=observed_at,
        notes=notes or '',
        membership=membership,
        submitted_by=submitted_by if submitted_by and submitted_by.is_authenticated else None,
        **moderation,
    )

    logger.info(
        "Price report %s submitted (%s, %dc)%s",
        report.id, report.status, price_cents, " auto-approved" if auto_approve else "",
    )
    return report


@transaction.atomic
def create_approved_report(
    *,
    place: Dict[str, Any],
    product: Dict[str, Any],
    size: Dict[str, Any],
    price_cents: int,
    moderator: User,
    observed_at: Optional[datetime] = None,
    notes: Optional[str] = None,
    membership: Optional[bool] = None,
) -> PriceReport:
    """
    Store a price entered by a moderator, approved immediately.

    The report becomes the latest accepted price for its group.

    Raises:
        NotModeratorError: If the user is not a moderator
        InvalidSubmissionError: If required fields are missing or invalid
        EnsureEntityError: If venue, product or size can't be stored
    """
    if moderator is None or not moderator.is_moderator:
        raise NotModeratorError("Only moderators can enter approved prices")

    price_cents = validate_price_cents(price_cents)
    venue, product_row, size_row = _resolve_entities(place, product, size)

    report = PriceReport.objects.create(
        venue=venue,
        product_size=size_row,
        price_cents=price_cents,
        observed_at=observed_at,
        notes=notes or '',
        membership=membership,
        status=ReportStatus.APPROVED,
        moderated_by=moderator,
        moderated_at=timezone.now(),
        moderation_note=ADMIN_EDIT_NOTE,
    )

    logger.info("Moderator %s entered approved price %s (%dc)", moderator.id, report.id, price_cents)
    return report
