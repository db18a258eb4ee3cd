"""Read paths over price reports for moderators and the map."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Q, QuerySet

from apps.venues.models import Venue
from ..models import PriceReport, ReportStatus
from .aggregation import (
    PriceSummary,
    PendingGroup,
    EMPTY_SUMMARY,
    summarize_prices,
    build_pending_queue,
)
from .grouping import GroupingKey

logger = logging.getLogger(__name__)


def membership_q(member: Optional[bool]) -> Q:
    """
    Filter for a membership price track.

    True selects member prices; False selects non-member prices, which
    include reports with no membership recorded. None selects both.
    """
    if member is None:
        return Q()
    if member:
        return Q(membership=True)
    return Q(membership=False) | Q(membership__isnull=True)


def membership_track(membership: Optional[bool]) -> bool:
    """The track a report's membership flag belongs to."""
    return membership is True


def _with_relations(queryset: QuerySet) -> QuerySet:
    return queryset.select_related(
        'venue',
        'product_size__product',
        'submitted_by',
        'moderated_by',
    )


def approved_reports(*, key: GroupingKey, member: Optional[bool] = None) -> QuerySet:
    """Approved reports in a group, newest first."""
    return (
        PriceReport.objects
        .filter(membership_q(member), status=ReportStatus.APPROVED, **key.report_lookup())
        .order_by('-created_at')
    )


def get_approved_summary(*, key: GroupingKey, member: Optional[bool] = None) -> PriceSummary:
    """Summary of approved prices for one group and membership track."""
    reports = approved_reports(key=key, member=member).only('price_cents', 'created_at')
    return summarize_prices(reports[:settings.APPROVED_SUMMARY_LIMIT])


def get_approved_summaries(
    *,
    keys: Iterable[GroupingKey],
    member: Optional[bool] = None,
) -> Dict[GroupingKey, PriceSummary]:
    """
    Summaries for many groups.

    A group whose lookup fails gets an empty summary and a logged warning,
    so moderation screens keep working when enrichment breaks.
    """
    summaries = {}
    for key in keys:
        if key in summaries:
            continue
        try:
            summaries[key] = get_approved_summary(key=key, member=member)
        except DatabaseError:
            logger.warning("Approved summary lookup failed for %s", key.serialize(), exc_info=True)
            summaries[key] = EMPTY_SUMMARY
    return summaries


def get_pending_reports(*, limit: Optional[int] = None) -> QuerySet:
    """Pending reports, oldest first, with venue and product details."""
    limit = limit or settings.PENDING_QUEUE_LIMIT
    queryset = (
        _with_relations(PriceReport.objects.filter(status=ReportStatus.PENDING))
        .order_by('created_at')
    )
    return queryset[:limit]


def get_pending_queue(*, limit: Optional[int] = None) -> List[PendingGroup]:
    """Pending reports grouped for bulk moderation, with accepted prices attached."""
    reports = list(get_pending_reports(limit=limit))
    keys = {GroupingKey.from_report(report) for report in reports}
    keys.discard(None)
    accepted = get_approved_summaries(keys=keys)
    return build_pending_queue(reports, accepted)


def get_reports_for_place(*, place_id: str, limit: Optional[int] = None) -> List[PriceReport]:
    """
    Every report for a venue, newest first.

    An unknown place has no reports rather than being an error.
    """
    limit = limit or settings.PLACE_REPORTS_LIMIT
    venue = Venue.objects.filter(google_place_id=place_id).first()
    if venue is None:
        return []
    queryset = _with_relations(PriceReport.objects.filter(venue=venue)).order_by('-created_at')
    return list(queryset[:limit])


def get_place_prices(
    *,
    place_ids: List[str],
    filters: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """
    Latest approved price for each place, for map markers.

    Args:
        place_ids: Google place IDs
        filters: Optional category, product_name, mixer, size_label, ml and
            membership restrictions

    Returns:
        List of {'place_id', 'price_cents'}, one per place with a price
    """
    if not place_ids:
        return []
    filters = filters or {}

    queryset = PriceReport.objects.filter(
        status=ReportStatus.APPROVED,
        venue__google_place_id__in=place_ids,
    )
    if filters.get('category'):
        queryset = queryset.filter(product_size__product__category=filters['category'])
    if filters.get('product_name'):
        queryset = queryset.filter(product_size__product__name=filters['product_name'])
    if filters.get('mixer'):
        queryset = queryset.filter(product_size__product__mixer=filters['mixer'])
    if filters.get('size_label'):
        queryset = queryset.filter(product_size__size_label=filters['size_label'])
    if filters.get('ml') is not None:
        queryset = queryset.filter(product_size__ml=filters['ml'])
    if filters.get('membership') is not None:
        queryset = queryset.filter(membership_q(filters['membership']))

    rows = (
        queryset
        .order_by('-created_at')
        .values_list('venue__google_place_id', 'price_cents')[:settings.APPROVED_SUMMARY_LIMIT]
    )

    results = []
    seen = set()
    for place_id, price_cents in rows:
        if place_id in seen:
            continue
        seen.add(place_id)
        results.append({'place_id': place_id, 'price_cents': price_cents})
    return results
