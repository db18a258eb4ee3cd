# Generated manually for the prices app

import uuid
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        ('venues', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PriceReport',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('price_cents', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('membership', models.BooleanField(blank=True, null=True)),
                ('observed_at', models.DateTimeField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending', max_length=20)),
                ('moderated_at', models.DateTimeField(blank=True, null=True)),
                ('moderation_note', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('moderated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='moderated_price_reports', to=settings.AUTH_USER_MODEL)),
                ('product_size', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='price_reports', to='catalog.productsize')),
                ('submitted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='price_reports', to=settings.AUTH_USER_MODEL)),
                ('venue', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='price_reports', to='venues.venue')),
            ],
            options={
                'db_table': 'price_reports',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'created_at'], name='price_repo_status_9a1c3e_idx'),
                    models.Index(fields=['venue', 'status', 'created_at'], name='price_repo_venue_i_2f7d4b_idx'),
                    models.Index(fields=['product_size', 'status'], name='price_repo_product_6e0b8a_idx'),
                ],
            },
        ),
    ]
