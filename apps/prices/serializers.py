from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from apps.catalog.models import ProductCategory
from apps.catalog.serializers import ProductSizeSerializer
from apps.venues.serializers import VenueSerializer
from .models import PriceReport


# =============================================================================
# Report output
# =============================================================================

class PriceReportSerializer(serializers.ModelSerializer):
    """Full report with venue, product size and moderation details."""

    venue = VenueSerializer(read_only=True)
    product_size = ProductSizeSerializer(read_only=True)
    submitted_by = UserPublicSerializer(read_only=True)
    moderated_by = UserPublicSerializer(read_only=True)
    is_auto_approved = serializers.BooleanField(read_only=True)

    class Meta:
        model = PriceReport
        fields = [
            'id',
            'venue',
            'product_size',
            'price_cents',
            'membership',
            'observed_at',
            'notes',
            'submitted_by',
            'status',
            'moderated_by',
            'moderated_at',
            'moderation_note',
            'is_auto_approved',
            'created_at',
        ]
        read_only_fields = fields


class SubmittedReportSerializer(serializers.ModelSerializer):
    """Acknowledgement returned to the submitter."""

    class Meta:
        model = PriceReport
        fields = ['id', 'status', 'price_cents', 'membership', 'moderation_note', 'created_at']
        read_only_fields = fields


# =============================================================================
# Submission input
# =============================================================================

class PlaceRefSerializer(serializers.Serializer):
    place_id = serializers.CharField(max_length=255)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    address = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)


class ProductRefSerializer(serializers.Serializer):
    brand = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)
    name = serializers.CharField(max_length=200)
    category = serializers.ChoiceField(
        choices=ProductCategory.choices, required=False, allow_blank=True, allow_null=True,
    )
    mixer = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)


class SizeRefSerializer(serializers.Serializer):
    size_label = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    ml = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class PriceSubmissionSerializer(serializers.Serializer):
    """Payload for submitting an observed price."""

    place = PlaceRefSerializer()
    product = ProductRefSerializer()
    size = SizeRefSerializer(default=dict)
    price_cents = serializers.IntegerField(min_value=1)
    observed_at = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=2000)
    membership = serializers.BooleanField(allow_null=True, default=None)


# =============================================================================
# Map prices
# =============================================================================

class PlacePriceFilterSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=ProductCategory.choices, required=False, allow_null=True)
    product_name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    mixer = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    size_label = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    ml = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    membership = serializers.BooleanField(allow_null=True, default=None)


class PlacePricesRequestSerializer(serializers.Serializer):
    place_ids = serializers.ListField(child=serializers.CharField(max_length=255), max_length=500)
    filter = PlacePriceFilterSerializer(default=dict)


class PlacePriceSerializer(serializers.Serializer):
    place_id = serializers.CharField()
    price_cents = serializers.IntegerField()


# =============================================================================
# Moderation
# =============================================================================

class GroupRefSerializer(serializers.Serializer):
    """A grouping key as sent by the moderation screen."""

    place_id = serializers.CharField(max_length=255)
    category = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    brand = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    mixer = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    size_label = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    ml = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class ApprovedSummaryRequestSerializer(serializers.Serializer):
    groups = GroupRefSerializer(many=True)
    membership = serializers.BooleanField(allow_null=True, default=None)


class PriceCountSerializer(serializers.Serializer):
    price_cents = serializers.IntegerField()
    count = serializers.IntegerField()


class PriceSummarySerializer(serializers.Serializer):
    counts = PriceCountSerializer(many=True)
    latest_price_cents = serializers.IntegerField(allow_null=True)
    latest_created_at = serializers.DateTimeField(allow_null=True)
    latest_count = serializers.IntegerField()


class GroupSummarySerializer(PriceSummarySerializer):
    key = serializers.CharField()
    group = GroupRefSerializer()


class PendingGroupSerializer(serializers.Serializer):
    key = serializers.CharField(source='key.serialize')
    venue = VenueSerializer()
    product_size = ProductSizeSerializer()
    venue_label = serializers.CharField()
    product_label = serializers.CharField()
    size_label = serializers.CharField()
    report_count = serializers.IntegerField()
    prices = serializers.SerializerMethodField()
    accepted = serializers.SerializerMethodField()
    reports = PriceReportSerializer(many=True)

    def get_prices(self, group):
        return [
            {'price_cents': price, 'count': count}
            for price, count in group.price_counts.items()
        ]

    def get_accepted(self, group):
        return group.accepted.to_dict()


class ReportIdsSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False, max_length=500)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=2000)


class BatchConfirmSerializer(serializers.Serializer):
    confirm = serializers.BooleanField(default=False)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=2000)


class ModerationOutcomeSerializer(serializers.Serializer):
    id = serializers.CharField()
    ok = serializers.BooleanField()
    status = serializers.CharField(allow_null=True)
    error = serializers.CharField(allow_null=True)


class BatchResultSerializer(serializers.Serializer):
    results = ModerationOutcomeSerializer(many=True)
    succeeded = serializers.ListField(child=serializers.CharField())
    failed = serializers.ListField(child=serializers.CharField())


class BatchPreviewSerializer(serializers.Serializer):
    confirmed = serializers.BooleanField()
    report_id = serializers.CharField()
    price_cents = serializers.IntegerField()
    group = GroupRefSerializer(allow_null=True)
    batch_size = serializers.IntegerField()
    report_ids = serializers.ListField(child=serializers.CharField())


class ReconcileResultSerializer(serializers.Serializer):
    examined = serializers.IntegerField()
    approved = serializers.IntegerField()
    approved_ids = serializers.ListField(child=serializers.CharField())
