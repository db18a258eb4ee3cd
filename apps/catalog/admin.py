from django.contrib import admin
from apps.catalog.models import Product, ProductSize


class ProductSizeInline(admin.TabularInline):
    """Inline admin for product sizes."""
    model = ProductSize
    extra = 0
    fields = ['size_label', 'ml', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for products."""

    list_display = [
        'name',
        'brand',
        'category',
        'mixer',
        'created_at'
    ]
    list_filter = ['category', 'created_at']
    search_fields = ['name', 'brand', 'mixer']
    readonly_fields = ['created_at']
    inlines = [ProductSizeInline]
    ordering = ['category', 'name']


@admin.register(ProductSize)
class ProductSizeAdmin(admin.ModelAdmin):
    list_display = ['product', 'size_label', 'ml']
    list_filter = ['product__category']
    search_fields = ['product__name', 'product__brand', 'size_label']
    list_select_related = ['product']
    readonly_fields = ['created_at']
