from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import ProductCategory
from .serializers import ProductListQuerySerializer
from .services import list_product_names, list_spirits, list_mixers


@extend_schema(
    parameters=[
        OpenApiParameter(name='category', type=str, enum=ProductCategory.values, required=True),
        OpenApiParameter(name='spirit', type=str, description='List mixers recorded for this spirit'),
    ],
    description=(
        "Names for the price entry form. Beer and wine return `products`; "
        "spirits return `spirits`, or `mixers` when `spirit` is given."
    ),
    tags=['products'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def list_products(request):
    """Distinct product names, spirits, or mixers for a spirit."""
    serializer = ProductListQuerySerializer(data=request.query_params)
    if not serializer.is_valid():
        return Response({'error': 'Invalid category'}, status=status.HTTP_400_BAD_REQUEST)

    category = serializer.validated_data['category']
    spirit = serializer.validated_data.get('spirit')

    if category == ProductCategory.SPIRITS:
        if spirit:
            return Response({'mixers': list_mixers(spirit=spirit)})
        return Response({'spirits': list_spirits()})

    return Response({'products': list_product_names(category=category)})
