from unittest.mock import patch

import pytest

from apps.catalog.models import Product, ProductSize
from apps.prices.models import PriceReport, ReportStatus
from apps.prices.services import (
    ADMIN_EDIT_NOTE,
    AUTO_APPROVAL_NOTE,
    submit_price_report,
    create_approved_report,
    approve_reports,
    InvalidSubmissionError,
    InvalidPriceError,
    NotModeratorError,
)
from apps.venues.models import Venue
from apps.venues.services import EnsureEntityError

PLACE = {'place_id': 'V1', 'name': 'The Royal Hotel'}
PRODUCT = {'brand': '', 'name': 'Gold', 'category': 'beer'}
SIZE = {'size_label': 'Schooner'}


def submit(price_cents, **kwargs):
    fields = {'place': PLACE, 'product': PRODUCT, 'size': SIZE}
    fields.update(kwargs)
    return submit_price_report(price_cents=price_cents, **fields)


@pytest.mark.django_db
class TestSubmitPriceReport:

    def test_first_report_is_pending(self):
        report = submit(750)

        assert report.status == ReportStatus.PENDING
        assert report.moderated_at is None
        assert report.submitted_by is None

    def test_creates_venue_product_and_size(self):
        submit(750, place={'place_id': 'NEW', 'name': 'New Pub', 'address': '1 George St'})

        venue = Venue.objects.get(google_place_id='NEW')
        assert venue.name == 'New Pub'
        assert venue.formatted_address == '1 George St'
        assert Product.objects.filter(name='Gold', category='beer').count() == 1
        assert ProductSize.objects.filter(size_label='Schooner', ml__isnull=True).count() == 1

    def test_reuses_existing_entities(self, venue, schooner):
        report = submit(750)

        assert report.venue == venue
        assert report.product_size == schooner
        assert Venue.objects.count() == 1
        assert ProductSize.objects.count() == 1

    def test_approve_then_matching_price_auto_approves(self, moderator):
        first = submit(750)
        approve_reports(report_ids=[first.id], moderator=moderator)

        matching = submit(750)
        different = submit(800)

        assert matching.status == ReportStatus.APPROVED
        assert matching.moderated_by is None
        assert matching.moderated_at is not None
        assert matching.moderation_note == AUTO_APPROVAL_NOTE
        assert different.status == ReportStatus.PENDING

    def test_auto_approval_respects_membership(self, moderator):
        member = submit(700, membership=True)
        approve_reports(report_ids=[member.id], moderator=moderator)

        assert submit(700, membership=True).status == ReportStatus.APPROVED
        assert submit(700, membership=False).status == ReportStatus.PENDING
        assert submit(700).status == ReportStatus.PENDING

    def test_records_submitter(self, user):
        report = submit(750, submitted_by=user, notes='happy hour excluded')

        assert report.submitted_by == user
        assert report.notes == 'happy hour excluded'

    @pytest.mark.parametrize('price', [0, -5, 7.5, '750', True, None])
    def test_invalid_price(self, price):
        with pytest.raises(InvalidPriceError):
            submit(price)

        assert PriceReport.objects.count() == 0

    def test_missing_place_id(self):
        with pytest.raises(InvalidSubmissionError):
            submit(750, place={'name': 'Nowhere'})

    def test_missing_product_name(self):
        with pytest.raises(InvalidSubmissionError):
            submit(750, product={'brand': 'Hahn'})

    def test_entity_failure_leaves_nothing_behind(self):
        with patch(
            'apps.prices.services.submission.ensure_product_size',
            side_effect=EnsureEntityError('Could not ensure product size'),
        ):
            with pytest.raises(EnsureEntityError):
                submit(750)

        assert PriceReport.objects.count() == 0
        assert Venue.objects.count() == 0


@pytest.mark.django_db
class TestCreateApprovedReport:

    def test_stored_approved_with_admin_note(self, moderator):
        report = create_approved_report(
            place=PLACE, product=PRODUCT, size=SIZE, price_cents=820, moderator=moderator,
        )

        assert report.status == ReportStatus.APPROVED
        assert report.moderated_by == moderator
        assert report.moderation_note == ADMIN_EDIT_NOTE

    def test_becomes_accepted_price(self, moderator):
        create_approved_report(
            place=PLACE, product=PRODUCT, size=SIZE, price_cents=820, moderator=moderator,
        )

        assert submit(820).status == ReportStatus.APPROVED

    def test_requires_moderator(self, user):
        with pytest.raises(NotModeratorError):
            create_approved_report(
                place=PLACE, product=PRODUCT, size=SIZE, price_cents=820, moderator=user,
            )

        assert PriceReport.objects.count() == 0
