import pytest

from apps.prices.models import PriceReport, ReportStatus
from apps.prices.services import (
    AUTO_APPROVAL_NOTE,
    PriceSummary,
    build_grouping_key,
    matches_accepted_price,
    should_auto_approve,
    reconcile_pending,
    get_approved_summary,
)

APPROVED = ReportStatus.APPROVED
PENDING = ReportStatus.PENDING


@pytest.fixture
def key():
    return build_grouping_key('V1', 'beer', '', 'Gold', '', 'Schooner', None)


class TestMatchesAcceptedPrice:

    def test_equal_price_matches(self):
        assert matches_accepted_price(750, PriceSummary(counts={750: 1}, latest_price_cents=750, latest_count=1))

    def test_different_price(self):
        assert not matches_accepted_price(800, PriceSummary(counts={750: 1}, latest_price_cents=750, latest_count=1))

    def test_no_baseline(self):
        assert not matches_accepted_price(750, PriceSummary())


@pytest.mark.django_db
class TestShouldAutoApprove:

    def test_no_baseline(self, key, make_report):
        make_report(750, status=PENDING)

        assert not should_auto_approve(key=key, price_cents=750, membership=None)

    def test_matches_latest_approved(self, key, make_report):
        make_report(700, status=APPROVED, age_minutes=10)
        make_report(750, status=APPROVED, age_minutes=5)

        assert should_auto_approve(key=key, price_cents=750, membership=None)
        assert not should_auto_approve(key=key, price_cents=700, membership=None)

    def test_rejected_reports_are_not_a_baseline(self, key, make_report):
        make_report(750, status=ReportStatus.REJECTED)

        assert not should_auto_approve(key=key, price_cents=750, membership=None)

    def test_no_key(self):
        assert not should_auto_approve(key=None, price_cents=750, membership=None)


@pytest.mark.django_db
class TestMembershipIsolation:

    def test_member_price_does_not_affect_non_member_track(self, key, make_report):
        make_report(600, status=APPROVED, membership=False, age_minutes=10)
        make_report(700, status=APPROVED, membership=True, age_minutes=1)

        assert get_approved_summary(key=key, member=False).latest_price_cents == 600
        assert get_approved_summary(key=key, member=True).latest_price_cents == 700
        assert should_auto_approve(key=key, price_cents=600, membership=False)
        assert not should_auto_approve(key=key, price_cents=700, membership=False)

    def test_non_member_price_does_not_affect_member_track(self, key, make_report):
        make_report(700, status=APPROVED, membership=True, age_minutes=10)
        make_report(600, status=APPROVED, membership=False, age_minutes=1)

        assert should_auto_approve(key=key, price_cents=700, membership=True)
        assert not should_auto_approve(key=key, price_cents=600, membership=True)

    def test_unknown_membership_folds_into_non_member_track(self, key, make_report):
        make_report(650, status=APPROVED, membership=None)

        assert should_auto_approve(key=key, price_cents=650, membership=False)
        assert should_auto_approve(key=key, price_cents=650, membership=None)
        assert not should_auto_approve(key=key, price_cents=650, membership=True)

    def test_both_tracks_when_unfiltered(self, key, make_report):
        make_report(600, status=APPROVED, membership=False, age_minutes=10)
        make_report(700, status=APPROVED, membership=True, age_minutes=1)

        summary = get_approved_summary(key=key)
        assert summary.counts == {600: 1, 700: 1}
        assert summary.latest_price_cents == 700


@pytest.mark.django_db
class TestReconcilePending:

    def test_approves_exactly_matching_reports(self, make_report, pint):
        make_report(750, status=APPROVED, age_minutes=30)
        match = make_report(750, age_minutes=20)
        different = make_report(800, age_minutes=10)
        other_size = make_report(750, size=pint, age_minutes=5)
        member = make_report(750, membership=True, age_minutes=1)

        result = reconcile_pending()

        assert result.examined == 4
        assert result.approved_ids == [match.id]
        match.refresh_from_db()
        assert match.status == APPROVED
        assert match.moderated_by is None
        assert match.moderated_at is not None
        assert match.moderation_note == AUTO_APPROVAL_NOTE
        for report in (different, other_size, member):
            report.refresh_from_db()
            assert report.status == PENDING

    def test_is_idempotent(self, make_report):
        make_report(750, status=APPROVED, age_minutes=30)
        make_report(750, age_minutes=10)

        first = reconcile_pending()
        second = reconcile_pending()

        assert len(first.approved_ids) == 1
        assert second.approved_ids == []
        assert PriceReport.objects.filter(status=PENDING).count() == 0

    def test_nothing_pending(self, db):
        result = reconcile_pending()

        assert result.examined == 0
        assert result.to_dict() == {'examined': 0, 'approved': 0, 'approved_ids': []}
