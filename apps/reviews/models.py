from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
import uuid


class Review(models.Model):
    """Feedback about the site itself."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='site_reviews')
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    body = models.TextField(max_length=2000)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'site_reviews'
        indexes = [
            models.Index(fields=['created_at'], name='site_review_created_3c9e1a_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user.get_display_name()} ({self.rating}★)"
