"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models
from django.db.models import Q

TIER_CHOICES = [
    ("gold", "Gold"),
    ("silver", "Silver"),
    ("platinum", "Platinum"),
    ("blocked", "Blocked"),
]

BOOKING_STATUS_CHOICES = [
    ("Confirmed", "Confirmed"),
    ("Cancelled", "Cancelled"),
]

PAYMENT_INTENT_STATUS_CHOICES = [
    ("pending", "Pending"),
    ("succeeded", "Succeeded"),
    ("failed", "Failed"),
    ("abandoned", "Abandoned"),
]


class Event(models.Model):
    """Persistence model for events.

    ``pricing`` stores ``{tier: {"price": "100.00", "available": true}}``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    location = models.CharField(max_length=255)
    starts_at = models.DateTimeField()
    capacity = models.PositiveIntegerField(default=0)
    pricing = models.JSONField(default=dict, blank=True)
    layout_rows = models.PositiveIntegerField(null=True, blank=True)
    layout_columns = models.PositiveIntegerField(null=True, blank=True)
    booking_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="boxoffice_e_created_4c1a52_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Seat(models.Model):
    """Persistence model for a seat in an event's grid."""

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="seats")
    row = models.PositiveIntegerField()
    column = models.PositiveIntegerField()
    tier = models.CharField(max_length=16, choices=TIER_CHOICES, default="blocked")
    available = models.BooleanField(default=False)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    class Meta:
        ordering = ["row", "column"]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "row", "column"], name="unique_seat_position"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.row}-{self.column} ({self.tier})"


class Booking(models.Model):
    """Persistence model for bookings.

    ``event_id`` is a plain column, not a foreign key: a booking outlives
    the event it was made for.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.UUIDField(db_index=True)
    event_name = models.CharField(max_length=255)
    purchaser_name = models.CharField(max_length=255)
    purchaser_email = models.EmailField(max_length=254)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=16, choices=BOOKING_STATUS_CHOICES)
    created_at = models.DateTimeField()
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["purchaser_email"], name="boxoffice_b_purchas_7d9e21_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.purchaser_name} - {self.status}"


class BookingSeat(models.Model):
    """A seat referenced by a booking. At most one active row per seat."""

    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name="seats")
    event_id = models.UUIDField()
    row = models.PositiveIntegerField()
    column = models.PositiveIntegerField()
    active = models.BooleanField(default=True)

    class Meta:
        ordering = ["row", "column"]
        constraints = [
            models.UniqueConstraint(
                fields=["event_id", "row", "column"],
                condition=Q(active=True),
                name="unique_active_seat_hold",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.row}-{self.column}"


class PaymentIntent(models.Model):
    """Persistence model for payment intents awaiting authorization."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.UUIDField(db_index=True)
    purchaser_name = models.CharField(max_length=255)
    purchaser_email = models.EmailField(max_length=254)
    seat_ids = models.JSONField(default=list)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=16, choices=PAYMENT_INTENT_STATUS_CHOICES)
    booking_id = models.UUIDField(null=True, blank=True)
    authorization_ref = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField()

    def __str__(self) -> str:
        return f"{self.id} ({self.status})"
