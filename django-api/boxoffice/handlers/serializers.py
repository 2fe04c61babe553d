"""Serializers for transforming domain models to API responses, and for
parsing request bodies before they reach the services.

Input serializers only check shape; business rules stay in the services.
"""

from rest_framework import serializers


class SeatSerializer(serializers.Serializer):
    """Serializer for Seat domain model."""

    id = serializers.CharField()
    row = serializers.IntegerField()
    column = serializers.IntegerField()
    tier = serializers.CharField(source="tier.value")
    available = serializers.BooleanField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, source="price.amount")


class SeatingLayoutSerializer(serializers.Serializer):
    rows = serializers.IntegerField()
    columns = serializers.IntegerField()
    seats = SeatSerializer(many=True)
    booked_seats = serializers.SerializerMethodField()

    def get_booked_seats(self, layout) -> list[str]:
        return [str(seat_id) for seat_id in layout.booked_seats]


class EventSerializer(serializers.Serializer):
    """Serializer for a CatalogEntry (event plus live seat count)."""

    id = serializers.CharField(source="event.id")
    name = serializers.CharField(source="event.name")
    date = serializers.DateTimeField(source="event.starts_at")
    location = serializers.CharField(source="event.location")
    description = serializers.CharField(source="event.description")
    available_seats = serializers.IntegerField()
    total_seats = serializers.IntegerField(source="event.total_seats")
    booking_count = serializers.IntegerField(source="event.booking_count")
    pricing = serializers.SerializerMethodField()
    seating_layout = SeatingLayoutSerializer(source="event.seating_layout", allow_null=True)

    def get_pricing(self, entry) -> dict:
        return {
            tier.value: {"price": price.price.amount, "available": price.available}
            for tier, price in entry.event.pricing.items()
        }


class BookingSerializer(serializers.Serializer):
    """Serializer for a BookingRecord."""

    id = serializers.CharField(source="booking.id")
    eventId = serializers.CharField(source="booking.event_id")
    eventName = serializers.CharField(source="booking.event_name")
    purchaserName = serializers.CharField(source="booking.purchaser_name")
    purchaserEmail = serializers.CharField(source="booking.purchaser_email")
    seatIds = serializers.SerializerMethodField()
    totalAmount = serializers.DecimalField(
        max_digits=12, decimal_places=2, source="booking.total_amount.amount"
    )
    status = serializers.CharField(source="booking.status.value")
    createdAt = serializers.DateTimeField(source="booking.created_at")
    cancelledAt = serializers.DateTimeField(source="booking.cancelled_at", allow_null=True)
    eventDeleted = serializers.BooleanField(source="event_deleted")

    def get_seatIds(self, record) -> list[str]:
        return [str(seat_id) for seat_id in record.booking.seat_ids]


class PaymentIntentSerializer(serializers.Serializer):
    intentId = serializers.CharField(source="id")
    eventId = serializers.CharField(source="event_id")
    seatIds = serializers.SerializerMethodField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, source="amount.amount")
    status = serializers.CharField(source="status.value")
    bookingId = serializers.CharField(source="booking_id", allow_null=True)

    def get_seatIds(self, intent) -> list[str]:
        return [str(seat_id) for seat_id in intent.seat_ids]


class EventInputSerializer(serializers.Serializer):
    """Raw event fields. The catalog service parses and reports every one."""

    name = serializers.JSONField(required=False, allow_null=True, default="")
    date = serializers.JSONField(required=False, allow_null=True, default=None)
    location = serializers.JSONField(required=False, allow_null=True, default="")
    description = serializers.JSONField(required=False, allow_null=True, default="")
    total_seats = serializers.JSONField(required=False, allow_null=True, default=None)
    pricing = serializers.JSONField(required=False, allow_null=True, default=None)
    seating_layout = serializers.JSONField(required=False, allow_null=True, default=None)


class EventPatchSerializer(serializers.Serializer):
    name = serializers.JSONField(required=False, allow_null=True)
    date = serializers.JSONField(required=False, allow_null=True)
    location = serializers.JSONField(required=False, allow_null=True)
    description = serializers.JSONField(required=False, allow_null=True)
    total_seats = serializers.JSONField(required=False, allow_null=True)
    pricing = serializers.JSONField(required=False, allow_null=True)
    seating_layout = serializers.JSONField(required=False, allow_null=True)


class LayoutInputSerializer(serializers.Serializer):
    rows = serializers.IntegerField()
    columns = serializers.IntegerField()


class TierInputSerializer(serializers.Serializer):
    tier = serializers.CharField()


class BookingInputSerializer(serializers.Serializer):
    eventId = serializers.CharField()
    purchaserName = serializers.JSONField(required=False, allow_null=True, default="")
    purchaserEmail = serializers.JSONField(required=False, allow_null=True, default="")
    seatIds = serializers.JSONField(required=False, allow_null=True, default=None)


class ConfirmIntentSerializer(serializers.Serializer):
    authorizationRef = serializers.CharField(max_length=255)
