"""
Moderation actions on price reports.

Every report is moved in its own transaction, so one failure never
undoes another. Callers get an outcome per ID and retry the failures.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction, DatabaseError
from django.utils import timezone

from ..models import PriceReport, ReportStatus
from .exceptions import ReportNotFoundError, InvalidTransitionError, NotModeratorError
from .grouping import GroupingKey

User = get_user_model()

logger = logging.getLogger(__name__)


@dataclass
class ModerationOutcome:
    report_id: Any
    ok: bool
    status: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': str(self.report_id),
            'ok': self.ok,
            'status': self.status,
            'error': self.error,
        }


@dataclass
class BatchResult:
    outcomes: List[ModerationOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[Any]:
        return [o.report_id for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[Any]:
        return [o.report_id for o in self.outcomes if not o.ok]

    @property
    def all_ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            'results': [o.to_dict() for o in self.outcomes],
            'succeeded': [str(report_id) for report_id in self.succeeded],
            'failed': [str(report_id) for report_id in self.failed],
        }


@dataclass(frozen=True)
class BatchPreview:
    """A report plus the other pending reports agreeing with it on price."""

    report_id: Any
    price_cents: int
    key: Optional[GroupingKey]
    report_ids: Tuple[Any, ...]

    @property
    def batch_size(self) -> int:
        return len(self.report_ids)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'report_id': str(self.report_id),
            'price_cents': self.price_cents,
            'group': self.key.to_dict() if self.key else None,
            'batch_size': self.batch_size,
            'report_ids': [str(report_id) for report_id in self.report_ids],
        }


def _check_moderator(moderator: User):
    if moderator is None or not getattr(moderator, 'is_moderator', False):
        raise NotModeratorError("Only moderators can moderate price reports")


def _moderate_one(
    *,
    report_id: Any,
    target: str,
    moderator: User,
    note: Optional[str],
) -> ModerationOutcome:
    try:
        with transaction.atomic():
            report = PriceReport.objects.select_for_update().get(id=report_id)

            if report.status == target:
                # Repeating the same decision changes nothing
                return ModerationOutcome(report_id=report.id, ok=True, status=report.status)
            if report.status != ReportStatus.PENDING:
                raise InvalidTransitionError(
                    f"Report is already {report.status} and can't be {target}"
                )

            report.status = target
            report.moderated_by = moderator
            report.moderated_at = timezone.now()
            report.moderation_note = note or None
            report.save(update_fields=[
                'status', 'moderated_by', 'moderated_at', 'moderation_note', 'updated_at',
            ])
    except (PriceReport.DoesNotExist, ValidationError):
        return ModerationOutcome(report_id=report_id, ok=False, error='Report not found')
    except InvalidTransitionError as e:
        return ModerationOutcome(report_id=report_id, ok=False, status=report.status, error=str(e))
    except DatabaseError:
        logger.exception("Could not set report %s to %s", report_id, target)
        return ModerationOutcome(report_id=report_id, ok=False, error='Database error, try again')

    logger.info("Report %s %s by %s", report.id, target, moderator.id)
    return ModerationOutcome(report_id=report.id, ok=True, status=report.status)


def _moderate(
    *,
    report_ids: Iterable[Any],
    target: str,
    moderator: User,
    note: Optional[str],
) -> BatchResult:
    _check_moderator(moderator)
    result = BatchResult()
    seen = set()
    for report_id in report_ids:
        if str(report_id) in seen:
            continue
        seen.add(str(report_id))
        result.outcomes.append(
            _moderate_one(report_id=report_id, target=target, moderator=moderator, note=note)
        )
    return result


def approve_reports(
    *,
    report_ids: Iterable[Any],
    moderator: User,
    note: Optional[str] = None,
) -> BatchResult:
    """
    Approve reports by ID.

    Args:
        report_ids: Reports to approve (duplicates are ignored)
        moderator: Staff user taking the action
        note: Optional moderation note

    Returns:
        BatchResult with one outcome per distinct ID

    Raises:
        NotModeratorError: If the user is not a moderator
    """
    return _moderate(
        report_ids=report_ids, target=ReportStatus.APPROVED, moderator=moderator, note=note,
    )


def reject_reports(
    *,
    report_ids: Iterable[Any],
    moderator: User,
    note: Optional[str] = None,
) -> BatchResult:
    """Reject reports by ID. See approve_reports."""
    return _moderate(
        report_ids=report_ids, target=ReportStatus.REJECTED, moderator=moderator, note=note,
    )


def preview_batch(*, report_id: Any) -> BatchPreview:
    """
    Expand a report to every pending report with the same key and price.

    The target report always comes first, whatever its status. A report
    whose venue has no place ID forms a batch of one.

    Raises:
        ReportNotFoundError: If the report doesn't exist
    """
    try:
        report = (
            PriceReport.objects
            .select_related('venue', 'product_size__product')
            .get(id=report_id)
        )
    except (PriceReport.DoesNotExist, ValidationError):
        raise ReportNotFoundError(f"Report {report_id} not found")

    key = GroupingKey.from_report(report)
    if key is None:
        return BatchPreview(
            report_id=report.id,
            price_cents=report.price_cents,
            key=None,
            report_ids=(report.id,),
        )

    others = (
        PriceReport.objects
        .filter(status=ReportStatus.PENDING, price_cents=report.price_cents, **key.report_lookup())
        .exclude(id=report.id)
        .order_by('created_at')
        .values_list('id', flat=True)
    )
    return BatchPreview(
        report_id=report.id,
        price_cents=report.price_cents,
        key=key,
        report_ids=(report.id, *others),
    )


def approve_matching(
    *,
    report_id: Any,
    moderator: User,
    note: Optional[str] = None,
) -> Tuple[BatchPreview, BatchResult]:
    """Approve a report together with its pending same-price group."""
    _check_moderator(moderator)
    preview = preview_batch(report_id=report_id)
    return preview, approve_reports(report_ids=preview.report_ids, moderator=moderator, note=note)


def reject_matching(
    *,
    report_id: Any,
    moderator: User,
    note: Optional[str] = None,
) -> Tuple[BatchPreview, BatchResult]:
    """Reject a report together with its pending same-price group."""
    _check_moderator(moderator)
    preview = preview_batch(report_id=report_id)
    return preview, reject_reports(report_ids=preview.report_ids, moderator=moderator, note=note)
