"""Automatic approval of reports that match the accepted price."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from django.utils import timezone

from ..models import PriceReport, ReportStatus
from .aggregation import PriceSummary
from .grouping import GroupingKey
from .queries import get_approved_summary, membership_track

logger = logging.getLogger(__name__)

AUTO_APPROVAL_NOTE = "auto-approved: matches current accepted price"


@dataclass
class ReconcileResult:
    examined: int = 0
    approved_ids: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'examined': self.examined,
            'approved': len(self.approved_ids),
            'approved_ids': [str(report_id) for report_id in self.approved_ids],
        }


def matches_accepted_price(price_cents: int, summary: PriceSummary) -> bool:
    """True when the group has an accepted price and it equals ``price_cents``."""
    return summary.latest_price_cents is not None and summary.latest_price_cents == price_cents


def should_auto_approve(
    *,
    key: Optional[GroupingKey],
    price_cents: int,
    membership: Optional[bool],
) -> bool:
    """
    Whether a new report would be auto-approved.

    The report is compared against the accepted price of its own
    membership track: member reports against member prices, everything
    else against non-member prices.
    """
    if key is None:
        return False
    summary = get_approved_summary(key=key, member=membership_track(membership))
    return matches_accepted_price(price_cents, summary)


def auto_approval_fields() -> Dict[str, Any]:
    """Moderation fields written on auto-approval; no moderator means automatic."""
    return {
        'status': ReportStatus.APPROVED,
        'moderated_by': None,
        'moderated_at': timezone.now(),
        'moderation_note': AUTO_APPROVAL_NOTE,
    }


def reconcile_pending(*, limit: Optional[int] = None) -> ReconcileResult:
    """
    Approve pending reports that match their track's accepted price.

    Safe to run repeatedly; a second run with no new data approves
    nothing. Each report is approved by a single conditional update, so
    one moderated in the meantime is left alone.

    Args:
        limit: Maximum number of pending reports to examine (all when None)

    Returns:
        ReconcileResult with the examined count and approved IDs
    """
    result = ReconcileResult()
    summaries: Dict[Tuple[GroupingKey, bool], PriceSummary] = {}

    pending = (
        PriceReport.objects
        .filter(status=ReportStatus.PENDING)
        .select_related('venue', 'product_size__product')
        .order_by('created_at')
    )
    if limit:
        pending = pending[:limit]

    for report in pending:
        result.examined += 1
        key = GroupingKey.from_report(report)
        if key is None:
            continue

        track = membership_track(report.membership)
        if (key, track) not in summaries:
            summaries[(key, track)] = get_approved_summary(key=key, member=track)
        if not matches_accepted_price(report.price_cents, summaries[(key, track)]):
            continue

        updated = (
            PriceReport.objects
            .filter(id=report.id, status=ReportStatus.PENDING)
            .update(updated_at=timezone.now(), **auto_approval_fields())
        )
        if updated:
            result.approved_ids.append(report.id)

    if result.approved_ids:
        logger.info(
            "Reconcile auto-approved %d of %d pending report(s)",
            len(result.approved_ids), result.examined,
        )
    return result
