import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Yacht",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("location", models.CharField(help_text="Home marina.", max_length=255)),
                (
                    "size",
                    models.PositiveIntegerField(
                        help_text="Length in feet. Membership tiers cap the size a member may book.",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                (
                    "capacity",
                    models.PositiveSmallIntegerField(
                        help_text="Maximum number of guests on board.",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("description", models.TextField(blank=True)),
                ("image_url", models.URLField(blank=True)),
                ("amenities", models.JSONField(blank=True, default=list)),
                (
                    "price_per_hour",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Informational; member rentals are complimentary.",
                        max_digits=10,
                    ),
                ),
                ("is_available", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="yachts",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Yacht",
                "verbose_name_plural": "Yachts",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["is_available"], name="yacht_available_idx"),
                    models.Index(fields=["location"], name="yacht_location_idx"),
                ],
            },
        ),
    ]
