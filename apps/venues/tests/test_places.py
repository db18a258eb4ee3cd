import time
from unittest.mock import patch

import pytest
import requests
from django.conf import settings
from django.core.cache.backends.locmem import LocMemCache

from apps.venues.places import (
    Place,
    PlacesClient,
    make_cache_key,
    NEARBY_SEARCH_URL,
)
from apps.venues.services import PlacesUpstreamError, PlacesConfigurationError
from .conftest import places_response, place_result


def seconds_from_now(seconds):
    """Move the cache backend's clock forward."""
    return patch('time.time', return_value=time.time() + seconds)


class TestPlacesCache:

    def test_configured_from_settings(self, places_cache):
        assert isinstance(places_cache, LocMemCache)
        assert places_cache.default_timeout == settings.PLACES_CACHE_TTL_SECONDS
        assert places_cache._max_entries == settings.PLACES_CACHE_MAX_ENTRIES

    def test_hit_within_ttl(self, places_cache):
        places_cache.set('k', ('value',), timeout=120)

        with seconds_from_now(119):
            assert places_cache.get('k') == ('value',)

    def test_miss_after_expiry(self, places_cache):
        places_cache.set('k', ('value',), timeout=120)

        with seconds_from_now(120):
            assert places_cache.get('k') is None

    def test_bounded_capacity(self):
        cache = LocMemCache('places-capacity', {'OPTIONS': {'MAX_ENTRIES': 3}})
        try:
            for i in range(10):
                cache.set(f'k{i}', i)

            stored = [i for i in range(10) if cache.get(f'k{i}') is not None]
            assert len(stored) <= 3
            assert 9 in stored
            assert 0 not in stored
        finally:
            cache.clear()


class TestMakeCacheKey:

    def test_rounds_coordinates_to_four_places(self):
        key_a = make_cache_key(lat=-33.868812, lng=151.209312, radius=1500, filters={'pubs': True})
        key_b = make_cache_key(lat=-33.868791, lng=151.209284, radius=1500, filters={'pubs': True})

        assert key_a == key_b == '-33.8688,151.2093:1500:pubs'

    def test_filters_and_radius_distinguish_keys(self):
        base = dict(lat=-33.8688, lng=151.2093)

        assert make_cache_key(radius=1500, filters={'pubs': True}, **base) != \
            make_cache_key(radius=2000, filters={'pubs': True}, **base)
        assert make_cache_key(radius=1500, filters={'pubs': True, 'bars': True}, **base) == \
            '-33.8688,151.2093:1500:pubs|bars'


class TestPlacesClient:

    def test_missing_api_key(self, session):
        client = PlacesClient(api_key='', session=session)

        with pytest.raises(PlacesConfigurationError):
            client.nearby_search(lat=0, lng=0, radius=100, filters={'bars': True})
        session.get.assert_not_called()

    def test_pubs_issue_keyword_and_bar_queries(self, places_client, session):
        session.get.side_effect = [
            places_response([place_result('a')]),
            places_response([place_result('a'), place_result('b')]),
        ]

        places = places_client.nearby_search(
            lat=-33.87, lng=151.21, radius=1000, filters={'pubs': True},
        )

        assert [p.place_id for p in places] == ['a', 'b']
        first_params = session.get.call_args_list[0].kwargs['params']
        second_params = session.get.call_args_list[1].kwargs['params']
        assert first_params['keyword'] == 'pub'
        assert second_params['type'] == 'bar'
        assert session.get.call_args_list[0].args[0] == NEARBY_SEARCH_URL

    def test_shared_queries_sent_once(self, places_client, session):
        session.get.side_effect = [
            places_response([]),
            places_response([]),
        ]

        places_client.nearby_search(
            lat=0, lng=0, radius=100, filters={'pubs': True, 'bars': True},
        )

        assert session.get.call_count == 2

    def test_follows_page_tokens_up_to_three_pages(self, places_client, session):
        session.get.side_effect = [
            places_response([place_result('p1')], next_page_token='t1'),
            places_response([place_result('p2')], next_page_token='t2'),
            places_response([place_result('p3')], next_page_token='t3'),
        ]

        places = places_client.nearby_search(lat=0, lng=0, radius=100, filters={'clubs': True})

        assert [p.place_id for p in places] == ['p1', 'p2', 'p3']
        assert session.get.call_count == 3
        assert session.get.call_args_list[1].kwargs['params']['pagetoken'] == 't1'

    def test_caps_results_at_limit(self, places_client, session):
        session.get.return_value = places_response(
            [place_result(f'p{i}') for i in range(10)]
        )

        places = places_client.nearby_search(
            lat=0, lng=0, radius=100, filters={'bars': True}, limit=3,
        )

        assert len(places) == 3

    def test_quota_exceeded_raises(self, places_client, session):
        session.get.return_value = places_response([], status='OVER_QUERY_LIMIT')

        with pytest.raises(PlacesUpstreamError, match='quota'):
            places_client.nearby_search(lat=0, lng=0, radius=100, filters={'bars': True})

    def test_denied_query_is_skipped(self, places_client, session):
        session.get.side_effect = [
            places_response([], status='REQUEST_DENIED'),
            places_response([place_result('b')]),
        ]

        places = places_client.nearby_search(lat=0, lng=0, radius=100, filters={'pubs': True})

        assert [p.place_id for p in places] == ['b']

    def test_network_failure_raises_upstream_error(self, places_client, session):
        session.get.side_effect = requests.exceptions.ConnectionError('boom')

        with pytest.raises(PlacesUpstreamError):
            places_client.nearby_search(lat=0, lng=0, radius=100, filters={'bars': True})

    def test_place_from_result(self):
        place = Place.from_result(place_result('abc', name='Cheers'))

        assert place.place_id == 'abc'
        assert place.name == 'Cheers'
        assert place.address == '1 George St, Sydney'
        assert place.to_dict()['types'] == ['bar', 'point_of_interest']


class TestPlaceSearchService:

    def test_second_search_served_from_cache(self, place_search, session):
        session.get.return_value = places_response([place_result('a')])
        args = dict(lat=-33.87, lng=151.21, radius=1000, filters={'bars': True})

        first, first_cached = place_search.search(**args)
        second, second_cached = place_search.search(**args)

        assert first_cached is False
        assert second_cached is True
        assert first == second
        assert session.get.call_count == 1

    def test_expired_entry_refetches(self, place_search, session):
        session.get.return_value = places_response([place_result('a')])
        args = dict(lat=-33.87, lng=151.21, radius=1000, filters={'bars': True})

        place_search.search(**args)
        with seconds_from_now(121):
            _, cached = place_search.search(**args)

        assert cached is False
        assert session.get.call_count == 2

    def test_no_filters_returns_nothing(self, place_search, session):
        places, cached = place_search.search(lat=0, lng=0, radius=100, filters={})

        assert places == []
        assert cached is False
        session.get.assert_not_called()
