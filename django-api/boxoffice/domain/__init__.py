from boxoffice.domain.models import (
    Booking,
    BookingRecord,
    CatalogEntry,
    Event,
    PaymentIntent,
    Seat,
    SeatingLayout,
    TierPrice,
)
from boxoffice.domain.value_objects import (
    BookingId,
    BookingStatus,
    Capacity,
    EventId,
    Money,
    PaymentIntentId,
    PaymentIntentStatus,
    SeatId,
    Tier,
)

__all__ = [
    "Booking",
    "BookingRecord",
    "CatalogEntry",
    "Event",
    "PaymentIntent",
    "Seat",
    "SeatingLayout",
    "TierPrice",
    "BookingId",
    "BookingStatus",
    "Capacity",
    "EventId",
    "Money",
    "PaymentIntentId",
    "PaymentIntentStatus",
    "SeatId",
    "Tier",
]
