import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import events.models.registration


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("date", models.DateField(db_index=True)),
                ("start_time", models.TimeField(blank=True, null=True)),
                ("end_time", models.TimeField(blank=True, null=True)),
                ("venue", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "max_seats",
                    models.PositiveIntegerField(
                        default=0, help_text="Maximum number of registrations. 0 means unlimited."
                    ),
                ),
                ("thumbnail", models.ImageField(blank=True, null=True, upload_to="event-thumbnails/")),
                (
                    "registration_fee",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        help_text="Fee in major currency units. 0 means the event is free.",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                (
                    "organizer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="organized_events",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["date", "start_time"],
                "indexes": [models.Index(fields=["organizer", "date"], name="idx_event_organizer_date")],
            },
        ),
        migrations.CreateModel(
            name="Registration",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("student_name", models.CharField(max_length=255)),
                ("register_no", models.CharField(max_length=64)),
                ("department", models.CharField(max_length=255)),
                (
                    "reg_code",
                    models.CharField(
                        default=events.models.registration.generate_registration_code,
                        editable=False,
                        max_length=64,
                        unique=True,
                    ),
                ),
                ("order_id", models.CharField(blank=True, db_index=True, max_length=255, null=True)),
                ("payment_id", models.CharField(blank=True, max_length=255, null=True, unique=True)),
                ("amount_paid", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=10)),
                ("verified", models.BooleanField(db_index=True, default=False)),
                ("verified_at", models.DateTimeField(blank=True, null=True)),
                ("certificate_issued_at", models.DateTimeField(blank=True, null=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="registrations",
                        to="events.event",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="registrations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("event", "user"), name="unique_registration_per_event_user"),
                ],
            },
        ),
    ]
