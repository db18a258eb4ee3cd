# Generated manually for the catalog app

import uuid
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('category', models.CharField(blank=True, choices=[('beer', 'Beer'), ('wine', 'Wine'), ('spirits', 'Spirits')], max_length=20)),
                ('brand', models.CharField(blank=True, max_length=200)),
                ('name', models.CharField(max_length=200)),
                ('mixer', models.CharField(blank=True, max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'products',
                'ordering': ['category', 'name'],
                'indexes': [
                    models.Index(fields=['category', 'name'], name='products_categor_8c2f1d_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('brand', 'name', 'category', 'mixer'), name='unique_product_identity'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ProductSize',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('size_label', models.CharField(blank=True, max_length=100)),
                ('ml', models.PositiveIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(1)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sizes', to='catalog.product')),
            ],
            options={
                'db_table': 'product_sizes',
                'ordering': ['product', 'ml', 'size_label'],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('ml__isnull', False)), fields=('product', 'size_label', 'ml'), name='unique_size_with_ml'),
                    models.UniqueConstraint(condition=models.Q(('ml__isnull', True)), fields=('product', 'size_label'), name='unique_size_without_ml'),
                ],
            },
        ),
    ]
