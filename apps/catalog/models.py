from django.db import models
from django.db.models import Q
from django.core.validators import MinValueValidator
import uuid


class ProductCategory(models.TextChoices):
    BEER = 'beer', 'Beer'
    WINE = 'wine', 'Wine'
    SPIRITS = 'spirits', 'Spirits'


class Product(models.Model):
    """
    A drink identified by (brand, name, category, mixer).

    Absent brand, category and mixer are stored as empty strings so the
    natural key can be enforced by a plain unique constraint.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    category = models.CharField(max_length=20, choices=ProductCategory.choices, blank=True)
    brand = models.CharField(max_length=200, blank=True)
    name = models.CharField(max_length=200)
    mixer = models.CharField(max_length=200, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'products'
        constraints = [
            models.UniqueConstraint(
                fields=['brand', 'name', 'category', 'mixer'],
                name='unique_product_identity',
            ),
        ]
        indexes = [
            models.Index(fields=['category', 'name'], name='products_categor_8c2f1d_idx'),
        ]
        ordering = ['category', 'name']

    def __str__(self):
        return self.label

    @property
    def label(self):
        """Human label, e.g. "Jameson Whiskey + Coke"."""
        text = ' '.join(part for part in (self.brand, self.name) if part)
        if self.mixer:
            text = f"{text} + {self.mixer}"
        return text


class ProductSize(models.Model):
    """A serving size of a product: a label, an exact volume, or both."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='sizes')
    size_label = models.CharField(max_length=100, blank=True)
    ml = models.PositiveIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'product_sizes'
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'size_label', 'ml'],
                condition=Q(ml__isnull=False),
                name='unique_size_with_ml',
            ),
            models.UniqueConstraint(
                fields=['product', 'size_label'],
                condition=Q(ml__isnull=True),
                name='unique_size_without_ml',
            ),
        ]
        ordering = ['product', 'ml', 'size_label']

    def __str__(self):
        return f"{self.product.label} ({self.label})"

    @property
    def label(self):
        if self.size_label and self.ml:
            return f"{self.size_label} {self.ml}ml"
        if self.ml:
            return f"{self.ml}ml"
        return self.size_label
