from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, inline_serializer, OpenApiParameter

from .serializers import ReviewSerializer, ReviewCreateSerializer
from .services import (
    create_review,
    list_recent_reviews,
    InvalidReviewError,
    ReviewTooLongError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


@extend_schema(
    methods=['GET'],
    parameters=[OpenApiParameter(name='limit', type=int)],
    responses={200: inline_serializer(
        name='ReviewListResponse',
        fields={'results': ReviewSerializer(many=True)},
    )},
    description="Most recent site reviews.",
    tags=['reviews'],
)
@extend_schema(
    methods=['POST'],
    request=ReviewCreateSerializer,
    responses={
        201: inline_serializer(name='ReviewCreateResponse', fields={'review': ReviewSerializer()}),
        400: ErrorResponseSerializer,
        413: ErrorResponseSerializer,
    },
    description="Leave a rating (1-5) and comment about the site.",
    tags=['reviews'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticatedOrReadOnly])
def reviews(request):
    """List recent reviews or leave one."""
    if request.method == 'GET':
        try:
            limit = min(max(int(request.query_params.get('limit', 20)), 1), 100)
        except ValueError:
            limit = 20
        return Response({'results': ReviewSerializer(list_recent_reviews(limit=limit), many=True).data})

    serializer = ReviewCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        review = create_review(user=request.user, **serializer.validated_data)
    except ReviewTooLongError as e:
        return Response({'error': str(e)}, status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)
    except InvalidReviewError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'review': ReviewSerializer(review).data}, status=status.HTTP_201_CREATED)
