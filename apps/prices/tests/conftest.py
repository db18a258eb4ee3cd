from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.catalog.models import Product, ProductSize, ProductCategory
from apps.prices.models import PriceReport, ReportStatus
from apps.venues.models import Venue


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a regular price reporter."""
    return User.objects.create_user(
        email='reporter@example.com',
        password='TestPass123!',
        display_name='Reporter',
    )


@pytest.fixture
def moderator(db):
    """Create and return a staff moderator."""
    return User.objects.create_moderator(
        email='moderator@example.com',
        password='ModPass123!',
        display_name='Moderator',
    )


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def user_client(user):
    """API client authenticated as a regular user."""
    return _client_for(user)


@pytest.fixture
def moderator_client(moderator):
    """API client authenticated as a moderator."""
    return _client_for(moderator)


@pytest.fixture
def venue(db):
    return Venue.objects.create(
        google_place_id='V1',
        name='The Royal Hotel',
        suburb='Paddington',
        state='NSW',
    )


@pytest.fixture
def other_venue(db):
    return Venue.objects.create(
        google_place_id='V2',
        name='The Albion',
        suburb='Brunswick',
        state='VIC',
    )


@pytest.fixture
def beer(db):
    return Product.objects.create(category=ProductCategory.BEER, brand='', name='Gold')


@pytest.fixture
def schooner(beer):
    return ProductSize.objects.create(product=beer, size_label='Schooner')


@pytest.fixture
def pint(beer):
    return ProductSize.objects.create(product=beer, size_label='Pint', ml=570)


@pytest.fixture
def submission_payload():
    """Submission for (V1, beer, "Gold", "Schooner")."""
    def build(price_cents=750, **overrides):
        data = {
            'place': {'place_id': 'V1', 'name': 'The Royal Hotel'},
            'product': {'brand': '', 'name': 'Gold', 'category': 'beer'},
            'size': {'size_label': 'Schooner'},
            'price_cents': price_cents,
        }
        data.update(overrides)
        return data
    return build


@pytest.fixture
def make_report(venue, schooner):
    """
    Factory for price reports.

    ``age_minutes`` backdates created_at so ordering is deterministic.
    """
    def build(
        price_cents,
        status=ReportStatus.PENDING,
        membership=None,
        venue=venue,
        size=schooner,
        age_minutes=None,
        **extra
    ):
        report = PriceReport.objects.create(
            venue=venue,
            product_size=size,
            price_cents=price_cents,
            membership=membership,
            status=status,
            **extra
        )
        if age_minutes is not None:
            created_at = timezone.now() - timedelta(minutes=age_minutes)
            PriceReport.objects.filter(id=report.id).update(created_at=created_at)
            report.refresh_from_db()
        return report
    return build
