import logging

from django.apps import apps
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import PlaceSearchSerializer, PlaceSearchResponseSerializer
from .services import PlacesUpstreamError

logger = logging.getLogger(__name__)


def get_place_search():
    return apps.get_app_config('venues').place_search


@extend_schema(
    request=PlaceSearchSerializer,
    responses={200: PlaceSearchResponseSerializer},
    description="Find pubs, clubs and bars around a point. Results are cached briefly.",
    tags=['places'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def search_places(request):
    """Nearby venue search for the map."""
    serializer = PlaceSearchSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    try:
        places, cached = get_place_search().search(
            lat=data['centerLat'],
            lng=data['centerLng'],
            radius=data['radiusMeters'],
            filters=data['filters'],
        )
    except PlacesUpstreamError:
        logger.exception("Place search failed")
        return Response(
            {'error': 'Place search is unavailable right now, please try again'},
            status=status.HTTP_503_SERVICE_UNAVAILABLE
        )

    return Response({
        'results': [place.to_dict() for place in places],
        'cached': cached,
    })
