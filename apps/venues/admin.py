from django.contrib import admin
from apps.venues.models import Venue


@admin.register(Venue)
class VenueAdmin(admin.ModelAdmin):
    """Admin interface for venues."""

    list_display = [
        'name',
        'suburb',
        'state',
        'google_place_id',
        'created_at'
    ]
    list_filter = [
        'state',
        'country',
        'created_at'
    ]
    search_fields = [
        'name',
        'formatted_address',
        'suburb',
        'google_place_id'
    ]
    readonly_fields = [
        'google_place_id',
        'created_at',
        'updated_at'
    ]
    ordering = ['name']

    fieldsets = (
        ('Basic Information', {
            'fields': (
                'name',
                'google_place_id',
                'formatted_address'
            )
        }),
        ('Locality', {
            'fields': (
                'suburb',
                'state',
                'country',
                'lat',
                'lng'
            )
        }),
        ('Timestamps', {
            'fields': (
                'created_at',
                'updated_at'
            ),
            'classes': ('collapse',)
        }),
    )
