"""
Google Places nearby search, cached in the "places" Django cache.

The client is built once in VenuesConfig.ready() and handed to
PlaceSearchService together with caches["places"]; views reach the
service through the app config.
"""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass, asdict, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests
from django.core.cache.backends.base import BaseCache, DEFAULT_TIMEOUT

from .services.exceptions import PlacesUpstreamError, PlacesConfigurationError

logger = logging.getLogger(__name__)


NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"

# Nearby Search queries issued for each venue filter
FILTER_QUERIES = {
    'pubs': ({'keyword': 'pub'}, {'type': 'bar'}),
    'clubs': ({'type': 'night_club'},),
    'bars': ({'type': 'bar'},),
}
FILTER_ORDER = ('pubs', 'clubs', 'bars')

MAX_PAGES = 3
MAX_RESULTS = 40


@dataclass(frozen=True)
class Place:
    """A deduplicated place record returned to the map."""

    place_id: str
    name: str
    lat: Optional[float]
    lng: Optional[float]
    address: str = ''
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    types: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "Place":
        location = (result.get('geometry') or {}).get('location') or {}
        return cls(
            place_id=result['place_id'],
            name=result.get('name', ''),
            lat=location.get('lat'),
            lng=location.get('lng'),
            address=result.get('vicinity') or result.get('formatted_address') or '',
            rating=result.get('rating'),
            user_ratings_total=result.get('user_ratings_total'),
            types=tuple(result.get('types') or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['types'] = list(self.types)
        return data


def enabled_filters(filters: Dict[str, bool]) -> List[str]:
    return [name for name in FILTER_ORDER if filters.get(name)]


def make_cache_key(*, lat: float, lng: float, radius: int, filters: Dict[str, bool]) -> str:
    """Cache key from coordinates rounded to 4 dp, radius and enabled filters."""
    return f"{round(lat, 4)},{round(lng, 4)}:{radius}:{'|'.join(enabled_filters(filters))}"


class PlacesClient:
    """HTTP client for the Google Places Nearby Search API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
        page_token_delay: float = 1.2,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()
        self.page_token_delay = page_token_delay
        self._sleep = sleep

    def nearby_search(
        self,
        *,
        lat: float,
        lng: float,
        radius: int,
        filters: Dict[str, bool],
        limit: int = MAX_RESULTS,
    ) -> List[Place]:
        """
        Search for venues around a point.

        Each enabled filter issues one or more Nearby Search queries, each
        followed for up to three pages. Results are deduplicated by place
        ID and capped at ``limit``.

        Args:
            lat: Center latitude
            lng: Center longitude
            radius: Search radius in meters
            filters: Mapping of filter name (pubs, clubs, bars) to enabled flag
            limit: Maximum number of places to return

        Returns:
            List of Place records in discovery order

        Raises:
            PlacesConfigurationError: If no API key is configured
            PlacesUpstreamError: If the provider is unreachable or over quota
        """
        if not self.api_key:
            raise PlacesConfigurationError("GOOGLE_MAPS_API_KEY is not set")

        limit = min(max(limit, 1), MAX_RESULTS)

        queries = []
        for name in enabled_filters(filters):
            for query in FILTER_QUERIES[name]:
                if query not in queries:
                    queries.append(query)

        found: "OrderedDict[str, Place]" = OrderedDict()
        for query in queries:
            params = {
                'key': self.api_key,
                'location': f"{lat},{lng}",
                'radius': str(radius),
                'rankby': 'prominence',
                **query,
            }
            pages = 0
            while True:
                data = self._get(params)
                status = data.get('status')
                if status not in ('OK', 'ZERO_RESULTS'):
                    if status == 'OVER_QUERY_LIMIT':
                        raise PlacesUpstreamError("Places API quota exceeded")
                    logger.warning("Places query %s returned status %s", query, status)
                    break

                for result in data.get('results', []):
                    place_id = result.get('place_id')
                    if not place_id or place_id in found:
                        continue
                    found[place_id] = Place.from_result(result)
                    if len(found) >= limit:
                        return list(found.values())

                pages += 1
                page_token = data.get('next_page_token')
                if not page_token or pages >= MAX_PAGES:
                    break
                # Page tokens take a moment to become valid
                self._sleep(self.page_token_delay)
                params = {'key': self.api_key, 'pagetoken': page_token}

        return list(found.values())

    def _get(self, params: Dict[str, str]) -> Dict[str, Any]:
        try:
            response = self.session.get(NEARBY_SEARCH_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout:
            logger.warning("Places request timed out after %ss", self.timeout)
            raise PlacesUpstreamError("Places request timed out")
        except requests.exceptions.RequestException as e:
            logger.warning("Places request failed: %s", e)
            raise PlacesUpstreamError("Places request failed")
        except ValueError:
            logger.warning("Places response was not valid JSON")
            raise PlacesUpstreamError("Places response was not valid JSON")


class PlaceSearchService:
    """Cached venue search used by the map."""

    def __init__(
        self,
        *,
        client: PlacesClient,
        cache: BaseCache,
        timeout: Any = DEFAULT_TIMEOUT,
        limit: int = MAX_RESULTS,
    ):
        self.client = client
        self.cache = cache
        self.timeout = timeout
        self.limit = limit

    def search(
        self,
        *,
        lat: float,
        lng: float,
        radius: int,
        filters: Dict[str, bool],
    ) -> Tuple[List[Place], bool]:
        """Return (places, cached) for a search, consulting the cache first."""
        if not enabled_filters(filters):
            return [], False

        key = make_cache_key(lat=lat, lng=lng, radius=radius, filters=filters)
        hit = self.cache.get(key)
        if hit is not None:
            return list(hit), True

        places = self.client.nearby_search(
            lat=lat, lng=lng, radius=radius, filters=filters, limit=self.limit,
        )
        self.cache.set(key, tuple(places), timeout=self.timeout)
        logger.debug("Places search %s returned %d result(s)", key, len(places))
        return places, False
