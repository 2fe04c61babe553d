import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("location", models.CharField(max_length=255)),
                ("starts_at", models.DateTimeField()),
                ("capacity", models.PositiveIntegerField(default=0)),
                ("pricing", models.JSONField(blank=True, default=dict)),
                ("layout_rows", models.PositiveIntegerField(blank=True, null=True)),
                ("layout_columns", models.PositiveIntegerField(blank=True, null=True)),
                ("booking_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["-created_at"], name="boxoffice_e_created_4c1a52_idx")],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("event_id", models.UUIDField(db_index=True)),
                ("event_name", models.CharField(max_length=255)),
                ("purchaser_name", models.CharField(max_length=255)),
                ("purchaser_email", models.EmailField(max_length=254)),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "status",
                    models.CharField(
                        choices=[("Confirmed", "Confirmed"), ("Cancelled", "Cancelled")],
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField()),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["purchaser_email"], name="boxoffice_b_purchas_7d9e21_idx")],
            },
        ),
        migrations.CreateModel(
            name="PaymentIntent",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("event_id", models.UUIDField(db_index=True)),
                ("purchaser_name", models.CharField(max_length=255)),
                ("purchaser_email", models.EmailField(max_length=254)),
                ("seat_ids", models.JSONField(default=list)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("succeeded", "Succeeded"),
                            ("failed", "Failed"),
                            ("abandoned", "Abandoned"),
                        ],
                        max_length=16,
                    ),
                ),
                ("booking_id", models.UUIDField(blank=True, null=True)),
                ("authorization_ref", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField()),
            ],
        ),
        migrations.CreateModel(
            name="Seat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("row", models.PositiveIntegerField()),
                ("column", models.PositiveIntegerField()),
                (
                    "tier",
                    models.CharField(
                        choices=[
                            ("gold", "Gold"),
                            ("silver", "Silver"),
                            ("platinum", "Platinum"),
                            ("blocked", "Blocked"),
                        ],
                        default="blocked",
                        max_length=16,
                    ),
                ),
                ("available", models.BooleanField(default=False)),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="seats",
                        to="boxoffice.event",
                    ),
                ),
            ],
            options={
                "ordering": ["row", "column"],
                "constraints": [
                    models.UniqueConstraint(fields=("event", "row", "column"), name="unique_seat_position")
                ],
            },
        ),
        migrations.CreateModel(
            name="BookingSeat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("event_id", models.UUIDField()),
                ("row", models.PositiveIntegerField()),
                ("column", models.PositiveIntegerField()),
                ("active", models.BooleanField(default=True)),
                (
                    "booking",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="seats",
                        to="boxoffice.booking",
                    ),
                ),
            ],
            options={
                "ordering": ["row", "column"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("active", True)),
                        fields=("event_id", "row", "column"),
                        name="unique_active_seat_hold",
                    )
                ],
            },
        ),
    ]
