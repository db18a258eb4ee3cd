from unittest.mock import Mock

import pytest
from django.core.cache import caches
from rest_framework.test import APIClient

from apps.venues.models import Venue
from apps.venues.places import PlacesClient, PlaceSearchService


def places_response(results, status='OK', next_page_token=None):
    """Build a mocked requests response for a Nearby Search page."""
    payload = {'status': status, 'results': results}
    if next_page_token:
        payload['next_page_token'] = next_page_token
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


def place_result(place_id, name='The Local', lat=-33.87, lng=151.21):
    return {
        'place_id': place_id,
        'name': name,
        'geometry': {'location': {'lat': lat, 'lng': lng}},
        'vicinity': '1 George St, Sydney',
        'rating': 4.2,
        'user_ratings_total': 120,
        'types': ['bar', 'point_of_interest'],
    }


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def venue(db):
    """Create and return a test venue."""
    return Venue.objects.create(
        google_place_id='place-123',
        name='The Royal Hotel',
        formatted_address='1 George St, Sydney NSW',
        suburb='Sydney',
        state='NSW',
        country='Australia',
    )


@pytest.fixture
def session():
    """Mocked requests session."""
    return Mock()


@pytest.fixture
def places_client(session):
    return PlacesClient(
        api_key='test-key',
        session=session,
        sleep=lambda seconds: None,
    )


@pytest.fixture
def places_cache():
    """The "places" cache, emptied around each test."""
    cache = caches['places']
    cache.clear()
    yield cache
    cache.clear()


@pytest.fixture
def place_search(places_client, places_cache):
    return PlaceSearchService(client=places_client, cache=places_cache, timeout=120)
