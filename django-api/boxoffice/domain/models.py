"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in boxoffice/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

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


@dataclass(frozen=True)
class TierPrice:
    """Entry of an event's pricing table."""

    price: Money
    available: bool = True


@dataclass(frozen=True)
class Seat:
    """Domain representation of a Seat.

    ``price`` is a frozen copy of the event's tier price at the moment the
    tier was last assigned. The seat never reads the pricing table back.
    """

    id: SeatId
    tier: Tier = Tier.BLOCKED
    available: bool = False
    price: Money = field(default_factory=Money.zero)

    @property
    def row(self) -> int:
        return self.id.row

    @property
    def column(self) -> int:
        return self.id.column


@dataclass(frozen=True)
class SeatingLayout:
    """Rows x columns seat grid, seats ordered row-major."""

    rows: int
    columns: int
    seats: tuple[Seat, ...] = ()

    def seat(self, seat_id: SeatId) -> Seat | None:
        if not (1 <= seat_id.row <= self.rows and 1 <= seat_id.column <= self.columns):
            return None
        return self.seats[(seat_id.row - 1) * self.columns + (seat_id.column - 1)]

    @property
    def booked_seats(self) -> tuple[SeatId, ...]:
        """Projection of ``available``: sellable seats that are taken."""
        return tuple(s.id for s in self.seats if not s.tier.is_blocked and not s.available)

    @property
    def open_seat_count(self) -> int:
        return sum(1 for s in self.seats if s.available and not s.tier.is_blocked)

    def has_sellable_seat(self) -> bool:
        return any(not s.tier.is_blocked for s in self.seats)


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    name: str
    starts_at: datetime
    location: str
    description: str
    capacity: Capacity
    created_at: datetime
    updated_at: datetime
    pricing: Mapping[Tier, TierPrice] = field(default_factory=lambda: MappingProxyType({}))
    seating_layout: SeatingLayout | None = None
    booking_count: int = 0

    @property
    def total_seats(self) -> int:
        if self.seating_layout is not None:
            return self.seating_layout.rows * self.seating_layout.columns
        return self.capacity.value

    @property
    def is_locked(self) -> bool:
        """Pricing and layout are immutable once a booking is confirmed."""
        return self.booking_count > 0

    def available_seats(self, held: frozenset[SeatId] = frozenset()) -> int:
        if self.seating_layout is None:
            return 0
        return sum(
            1
            for s in self.seating_layout.seats
            if s.available and not s.tier.is_blocked and s.id not in held
        )


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    id: BookingId
    event_id: EventId
    event_name: str
    purchaser_name: str
    purchaser_email: str
    seat_ids: tuple[SeatId, ...]
    total_amount: Money
    status: BookingStatus
    created_at: datetime
    cancelled_at: datetime | None = None

    @property
    def is_confirmed(self) -> bool:
        return self.status is BookingStatus.CONFIRMED


@dataclass(frozen=True)
class BookingRecord:
    """A booking as read back from the ledger.

    ``event_deleted`` is derived from the live catalog at read time and
    never persisted.
    """

    booking: Booking
    event_deleted: bool


@dataclass(frozen=True)
class CatalogEntry:
    """Read-side snapshot of an event with its live seat count."""

    event: Event
    available_seats: int


@dataclass(frozen=True)
class PaymentIntent:
    """Reserved intent to book, awaiting external payment authorization."""

    id: PaymentIntentId
    event_id: EventId
    purchaser_name: str
    purchaser_email: str
    seat_ids: tuple[SeatId, ...]
    amount: Money
    status: PaymentIntentStatus
    created_at: datetime
    booking_id: BookingId | None = None
    authorization_ref: str = ""
