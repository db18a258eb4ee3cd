from django.db import models
from django.core.validators import MinValueValidator
import uuid


class ReportStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class PriceReport(models.Model):
    """
    One observed price for a product size at a venue.

    Reports start pending (or approved when they match the accepted
    price) and are moderated exactly once. ``membership`` is tri-state;
    False and NULL both mean the non-member price.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    venue = models.ForeignKey('venues.Venue', on_delete=models.PROTECT, related_name='price_reports')
    product_size = models.ForeignKey('catalog.ProductSize', on_delete=models.PROTECT, related_name='price_reports')
    price_cents = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    membership = models.BooleanField(null=True, blank=True)
    observed_at = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True)
    submitted_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='price_reports'
    )

    # Moderation
    status = models.CharField(max_length=20, choices=ReportStatus.choices, default=ReportStatus.PENDING)
    moderated_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='moderated_price_reports'
    )
    moderated_at = models.DateTimeField(null=True, blank=True)
    moderation_note = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'price_reports'
        indexes = [
            models.Index(fields=['status', 'created_at'], name='price_repo_status_9a1c3e_idx'),
            models.Index(fields=['venue', 'status', 'created_at'], name='price_repo_venue_i_2f7d4b_idx'),
            models.Index(fields=['product_size', 'status'], name='price_repo_product_6e0b8a_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.price_cents}c at {self.venue_id} ({self.status})"

    @property
    def is_pending(self):
        return self.status == ReportStatus.PENDING

    @property
    def is_auto_approved(self):
        return self.status == ReportStatus.APPROVED and self.moderated_by_id is None
