from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    """Stored review."""

    user = UserPublicSerializer(read_only=True)

    class Meta:
        model = Review
        fields = ['id', 'user', 'rating', 'body', 'created_at']
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    """
    Incoming review.

    Range and length checks live in the service so the comment is
    trimmed before it is measured.
    """

    rating = serializers.IntegerField()
    body = serializers.CharField(allow_blank=True, trim_whitespace=False)
