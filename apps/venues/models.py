from django.db import models
import uuid


class Venue(models.Model):
    """A pub, club or bar identified by its Google place ID."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    google_place_id = models.CharField(max_length=255, unique=True)
    name = models.CharField(max_length=255, blank=True)
    formatted_address = models.CharField(max_length=500, blank=True)
    suburb = models.CharField(max_length=120, blank=True)
    state = models.CharField(max_length=60, blank=True)
    country = models.CharField(max_length=60, blank=True)
    lat = models.FloatField(null=True, blank=True)
    lng = models.FloatField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'venues'
        indexes = [
            models.Index(fields=['name'], name='venues_name_5d8e0a_idx'),
            models.Index(fields=['state', 'suburb'], name='venues_state_3b1f7c_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name or self.google_place_id

    @property
    def locality_label(self):
        return ', '.join(part for part in (self.suburb, self.state) if part)
