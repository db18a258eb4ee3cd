from django.contrib import admin
from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """Admin interface for site reviews."""

    list_display = ['user', 'rating', 'short_body', 'created_at']
    list_filter = ['rating', 'created_at']
    search_fields = ['user__email', 'body']
    readonly_fields = ['user', 'rating', 'body', 'created_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def short_body(self, obj):
        return obj.body if len(obj.body) <= 60 else f"{obj.body[:57]}..."
    short_body.short_description = 'Comment'

    def has_add_permission(self, request):
        return False
