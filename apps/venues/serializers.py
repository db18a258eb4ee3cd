from rest_framework import serializers
from .models import Venue


class VenueSerializer(serializers.ModelSerializer):
    """Venue details shown alongside price reports."""

    class Meta:
        model = Venue
        fields = [
            'id',
            'google_place_id',
            'name',
            'formatted_address',
            'suburb',
            'state',
            'country',
            'lat',
            'lng',
        ]
        read_only_fields = fields


class PlaceFiltersSerializer(serializers.Serializer):
    pubs = serializers.BooleanField(default=False)
    clubs = serializers.BooleanField(default=False)
    bars = serializers.BooleanField(default=False)


class PlaceSearchSerializer(serializers.Serializer):
    """Input for the map's nearby venue search."""

    centerLat = serializers.FloatField(min_value=-90, max_value=90)
    centerLng = serializers.FloatField(min_value=-180, max_value=180)
    radiusMeters = serializers.IntegerField(min_value=1, max_value=50000)
    filters = PlaceFiltersSerializer()


class PlaceSerializer(serializers.Serializer):
    place_id = serializers.CharField()
    name = serializers.CharField()
    lat = serializers.FloatField(allow_null=True)
    lng = serializers.FloatField(allow_null=True)
    address = serializers.CharField(allow_blank=True)
    rating = serializers.FloatField(allow_null=True)
    user_ratings_total = serializers.IntegerField(allow_null=True)
    types = serializers.ListField(child=serializers.CharField())


class PlaceSearchResponseSerializer(serializers.Serializer):
    results = PlaceSerializer(many=True)
    cached = serializers.BooleanField()
