"""Venue find-or-create and lookups."""

import logging
from typing import Optional

from django.db import transaction, IntegrityError

from ..models import Venue
from .exceptions import VenueNotFoundError, InvalidVenueError, EnsureEntityError

logger = logging.getLogger(__name__)


def ensure_venue(
    *,
    external_ref: str,
    name: Optional[str] = None,
    address: Optional[str] = None,
) -> Venue:
    """
    Return the venue for a Google place ID, creating it on first reference.

    An existing venue is returned untouched; name and address are only
    used when the row is inserted.

    Args:
        external_ref: Google place ID
        name: Display name for a new venue
        address: Formatted address for a new venue

    Returns:
        Venue instance

    Raises:
        InvalidVenueError: If the place ID is empty
        EnsureEntityError: If the venue can't be found or inserted
    """
    external_ref = (external_ref or '').strip()
    if not external_ref:
        raise InvalidVenueError("Venue place_id is required")

    venue = Venue.objects.filter(google_place_id=external_ref).first()
    if venue:
        return venue

    try:
        with transaction.atomic():
            venue = Venue.objects.create(
                google_place_id=external_ref,
                name=name or '',
                formatted_address=address or '',
            )
    except IntegrityError:
        # Lost an insert race; the other writer's row wins
        venue = Venue.objects.filter(google_place_id=external_ref).first()
        if venue is None:
            logger.error("Insert failed and no venue found for %s", external_ref)
            raise EnsureEntityError("Could not ensure venue")
        return venue

    logger.info("Created venue %s (%s)", venue.id, external_ref)
    return venue


def get_venue_by_place_id(*, place_id: str) -> Venue:
    """
    Get a venue by its Google place ID.

    Raises:
        VenueNotFoundError: If no venue has that place ID
    """
    try:
        return Venue.objects.get(google_place_id=place_id)
    except Venue.DoesNotExist:
        raise VenueNotFoundError(f"Venue {place_id} not found")
