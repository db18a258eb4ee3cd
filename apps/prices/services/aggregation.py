"""Pure summaries over snapshots of price reports."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from .grouping import GroupingKey


@dataclass(frozen=True)
class PriceSummary:
    """
    Agreement summary for one group of reports.

    ``counts`` maps price to occurrences in ascending price order;
    ``latest_price_cents`` is the price of the most recently created
    report and ``latest_count`` how many reports hold that price.
    """

    counts: Dict[int, int] = field(default_factory=dict)
    latest_price_cents: Optional[int] = None
    latest_created_at: Optional[datetime] = None
    latest_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.latest_price_cents is None

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'counts': [
                {'price_cents': price, 'count': count}
                for price, count in self.counts.items()
            ],
            'latest_price_cents': self.latest_price_cents,
            'latest_created_at': self.latest_created_at,
            'latest_count': self.latest_count,
        }


EMPTY_SUMMARY = PriceSummary()


def count_prices(reports: Iterable) -> Dict[int, int]:
    """Occurrences per price, ascending by price."""
    counts: Dict[int, int] = {}
    for report in reports:
        counts[report.price_cents] = counts.get(report.price_cents, 0) + 1
    return dict(sorted(counts.items()))


def summarize_prices(reports: Iterable) -> PriceSummary:
    """
    Summarize reports, typically approved ones for a single group.

    Reports are expected newest first. The latest report is the one with
    the greatest ``created_at``; on an exact tie the first one seen wins.
    """
    reports = list(reports)
    latest = None
    for report in reports:
        if latest is None or report.created_at > latest.created_at:
            latest = report

    if latest is None:
        return EMPTY_SUMMARY

    counts = count_prices(reports)
    return PriceSummary(
        counts=counts,
        latest_price_cents=latest.price_cents,
        latest_created_at=latest.created_at,
        latest_count=counts[latest.price_cents],
    )


@dataclass
class PendingGroup:
    """Pending reports for one venue and product size, any price."""

    key: GroupingKey
    reports: List[Any] = field(default_factory=list)
    accepted: PriceSummary = EMPTY_SUMMARY

    @property
    def venue(self):
        return self.reports[0].venue

    @property
    def product_size(self):
        return self.reports[0].product_size

    @property
    def price_counts(self) -> Dict[int, int]:
        return count_prices(self.reports)

    @property
    def report_count(self) -> int:
        return len(self.reports)

    @property
    def venue_label(self) -> str:
        return self.venue.name or 'Unknown venue'

    @property
    def product_label(self) -> str:
        return self.product_size.product.label or 'Unknown product'

    @property
    def size_label(self) -> str:
        return self.product_size.label

    def sort_key(self):
        venue = self.venue
        return (
            venue.state.casefold(),
            venue.suburb.casefold(),
            self.venue_label.casefold(),
            self.product_label.casefold(),
            self.size_label.casefold(),
        )

    def matching_ids(self, price_cents: int) -> List[Any]:
        return [report.id for report in self.reports if report.price_cents == price_cents]


def build_pending_queue(
    reports: Iterable,
    accepted: Optional[Dict[GroupingKey, PriceSummary]] = None,
) -> List[PendingGroup]:
    """
    Group pending reports by venue and product size for bulk moderation.

    Price plays no part in the grouping; each group exposes its own price
    breakdown. Reports whose key can't be built are left out. Groups are
    ordered by venue state, suburb and name, then product and size label.

    Args:
        reports: Pending reports with venue and product size loaded
        accepted: Optional accepted-price summaries per key

    Returns:
        Ordered list of PendingGroup
    """
    accepted = accepted or {}
    groups: Dict[GroupingKey, PendingGroup] = {}
    for report in reports:
        key = GroupingKey.from_report(report)
        if key is None:
            continue
        group = groups.get(key)
        if group is None:
            group = groups[key] = PendingGroup(key=key, accepted=accepted.get(key, EMPTY_SUMMARY))
        group.reports.append(report)

    return sorted(groups.values(), key=PendingGroup.sort_key)
