"""Services for price report business logic."""

from .exceptions import (
    PriceServiceError,
    InvalidSubmissionError,
    InvalidPriceError,
    InvalidGroupingKeyError,
    ReportNotFoundError,
    InvalidTransitionError,
    NotModeratorError,
)
from .grouping import GroupingKey, build_grouping_key
from .aggregation import (
    PriceSummary,
    PendingGroup,
    EMPTY_SUMMARY,
    summarize_prices,
    build_pending_queue,
)
from .queries import (
    membership_q,
    get_approved_summary,
    get_approved_summaries,
    get_pending_reports,
    get_pending_queue,
    get_reports_for_place,
    get_place_prices,
)
from .auto_approval import (
    AUTO_APPROVAL_NOTE,
    ReconcileResult,
    matches_accepted_price,
    should_auto_approve,
    reconcile_pending,
)
from .moderation import (
    ModerationOutcome,
    BatchResult,
    BatchPreview,
    approve_reports,
    reject_reports,
    preview_batch,
    approve_matching,
    reject_matching,
)
from .submission import (
    ADMIN_EDIT_NOTE,
    submit_price_report,
    create_approved_report,
)

__all__ = [
    # Exceptions
    'PriceServiceError',
    'InvalidSubmissionError',
    'InvalidPriceError',
    'InvalidGroupingKeyError',
    'ReportNotFoundError',
    'InvalidTransitionError',
    'NotModeratorError',
    # Grouping
    'GroupingKey',
    'build_grouping_key',
    # Aggregation
    'PriceSummary',
    'PendingGroup',
    'EMPTY_SUMMARY',
    'summarize_prices',
    'build_pending_queue',
    # Queries
    'membership_q',
    'get_approved_summary',
    'get_approved_summaries',
    'get_pending_reports',
    'get_pending_queue',
    'get_reports_for_place',
    'get_place_prices',
    # Auto-approval
    'AUTO_APPROVAL_NOTE',
    'ReconcileResult',
    'matches_accepted_price',
    'should_auto_approve',
    'reconcile_pending',
    # Moderation
    'ModerationOutcome',
    'BatchResult',
    'BatchPreview',
    'approve_reports',
    'reject_reports',
    'preview_batch',
    'approve_matching',
    'reject_matching',
    # Submission
    'ADMIN_EDIT_NOTE',
    'submit_price_report',
    'create_approved_report',
]
