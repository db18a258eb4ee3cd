from django.apps import AppConfig
from django.conf import settings


class VenuesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.venues'
    label = 'venues'

    place_search = None

    def ready(self):
        from django.core.cache import caches
        from .places import PlacesClient, PlaceSearchService

        client = PlacesClient(
            api_key=settings.GOOGLE_MAPS_API_KEY,
            timeout=settings.PLACES_REQUEST_TIMEOUT,
        )
        self.place_search = PlaceSearchService(
            client=client,
            cache=caches['places'],
            timeout=settings.PLACES_CACHE_TTL_SECONDS,
            limit=settings.PLACES_RESULT_LIMIT,
        )
