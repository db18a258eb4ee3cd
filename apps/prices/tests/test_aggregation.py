from datetime import datetime, timedelta, timezone as dt_timezone

from apps.catalog.models import Product, ProductSize
from apps.prices.models import PriceReport
from apps.prices.services import (
    summarize_prices,
    build_pending_queue,
    build_grouping_key,
    EMPTY_SUMMARY,
    PriceSummary,
)
from apps.venues.models import Venue


T0 = datetime(2024, 5, 1, 18, 0, tzinfo=dt_timezone.utc)


def at(minutes):
    return T0 + timedelta(minutes=minutes)


def report(price_cents, minutes=0, venue=None, size=None):
    """Unsaved report; aggregation never touches the database."""
    fields = {'price_cents': price_cents, 'created_at': at(minutes)}
    if venue is not None:
        fields['venue'] = venue
    if size is not None:
        fields['product_size'] = size
    return PriceReport(**fields)


class TestSummarizePrices:

    def test_counts_latest_and_agreement(self):
        reports = [report(500, 3), report(600, 2), report(500, 1)]

        summary = summarize_prices(reports)

        assert summary.counts == {500: 2, 600: 1}
        assert list(summary.counts) == [500, 600]
        assert summary.latest_price_cents == 500
        assert summary.latest_created_at == at(3)
        assert summary.latest_count == 2

    def test_latest_is_by_timestamp_not_position(self):
        reports = [report(500, 1), report(600, 2), report(500, 3)]

        summary = summarize_prices(reports)

        assert summary.latest_price_cents == 500
        assert summary.latest_created_at == at(3)

    def test_counts_sorted_ascending(self):
        summary = summarize_prices([report(900, 3), report(450, 2), report(700, 1)])

        assert list(summary.counts) == [450, 700, 900]
        assert summary.latest_price_cents == 900
        assert summary.latest_count == 1

    def test_timestamp_tie_first_seen_wins(self):
        summary = summarize_prices([report(650, 5), report(700, 5)])

        assert summary.latest_price_cents == 650

    def test_empty_group(self):
        summary = summarize_prices([])

        assert summary == EMPTY_SUMMARY
        assert summary.is_empty
        assert summary.latest_price_cents is None
        assert summary.latest_count == 0

    def test_to_dict(self):
        summary = summarize_prices([report(500, 1), report(600, 2)])

        assert summary.to_dict() == {
            'counts': [
                {'price_cents': 500, 'count': 1},
                {'price_cents': 600, 'count': 1},
            ],
            'latest_price_cents': 600,
            'latest_created_at': at(2),
            'latest_count': 1,
        }


class TestBuildPendingQueue:

    def setup_method(self):
        self.sydney = Venue(google_place_id='S1', name='Harbour View', suburb='The Rocks', state='NSW')
        self.melbourne = Venue(google_place_id='M1', name='Albion', suburb='Brunswick', state='VIC')
        beer = Product(category='beer', brand='', name='Gold')
        self.schooner = ProductSize(product=beer, size_label='Schooner')
        self.pint = ProductSize(product=beer, size_label='Pint', ml=570)

    def test_groups_by_venue_and_size_regardless_of_price(self):
        reports = [
            report(750, 1, self.sydney, self.schooner),
            report(800, 2, self.sydney, self.schooner),
            report(750, 3, self.sydney, self.schooner),
            report(1100, 4, self.sydney, self.pint),
        ]

        groups = build_pending_queue(reports)

        assert len(groups) == 2
        schooners = next(g for g in groups if g.product_size is self.schooner)
        assert schooners.report_count == 3
        assert schooners.price_counts == {750: 2, 800: 1}
        assert schooners.matching_ids(750) == [reports[0].id, reports[2].id]

    def test_ordered_by_state_suburb_venue_then_product_and_size(self):
        reports = [
            report(900, 1, self.melbourne, self.schooner),
            report(750, 2, self.sydney, self.schooner),
            report(1100, 3, self.sydney, self.pint),
        ]

        groups = build_pending_queue(reports)

        assert [(g.venue.google_place_id, g.size_label) for g in groups] == [
            ('S1', 'Pint 570ml'),
            ('S1', 'Schooner'),
            ('M1', 'Schooner'),
        ]

    def test_accepted_summary_attached(self):
        key = build_grouping_key('S1', 'beer', '', 'Gold', '', 'Schooner', None)
        accepted = PriceSummary(counts={750: 3}, latest_price_cents=750, latest_count=3)

        groups = build_pending_queue([report(750, 1, self.sydney, self.schooner)], {key: accepted})

        assert groups[0].accepted is accepted
        assert groups[0].key == key

    def test_missing_accepted_summary_is_empty(self):
        groups = build_pending_queue([report(750, 1, self.sydney, self.schooner)])

        assert groups[0].accepted.is_empty
