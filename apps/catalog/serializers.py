from rest_framework import serializers
from .models import Product, ProductSize, ProductCategory


class ProductSerializer(serializers.ModelSerializer):
    label = serializers.CharField(read_only=True)

    class Meta:
        model = Product
        fields = ['id', 'category', 'brand', 'name', 'mixer', 'label']
        read_only_fields = fields


class ProductSizeSerializer(serializers.ModelSerializer):
    """Size with its product nested, as shown to moderators."""

    product = ProductSerializer(read_only=True)
    label = serializers.CharField(read_only=True)

    class Meta:
        model = ProductSize
        fields = ['id', 'product', 'size_label', 'ml', 'label']
        read_only_fields = fields


class ProductListQuerySerializer(serializers.Serializer):
    category = serializers.ChoiceField(
        choices=ProductCategory.choices,
        error_messages={'invalid_choice': 'Invalid category'},
    )
    spirit = serializers.CharField(required=False, allow_blank=True)
