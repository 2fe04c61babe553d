"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from boxoffice.domain import Booking, BookingId, Event, EventId, PaymentIntent, PaymentIntentId, SeatId


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def lock_event(self, event_id: EventId) -> AbstractContextManager[None]:
        """Hold an exclusive, re-entrant lock scoped to one event.

        Everything written inside the block commits together or not at all.
        """
        ...

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by created_at descending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def add_event(self, event: Event) -> None:
        ...

    @abstractmethod
    def save_event(self, event: Event) -> None:
        """Persist an existing event together with its seat grid."""
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> None:
        ...


class BookingStore(ABC):
    """Interface for the booking ledger."""

    @abstractmethod
    def add_booking(self, booking: Booking) -> None:
        """Persist a new booking.

        Raises:
            SeatUnavailableError: If another active booking holds one of its seats.
        """
        ...

    @abstractmethod
    def save_booking(self, booking: Booking) -> None:
        ...

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        ...

    @abstractmethod
    def list_bookings(self, purchaser_email: str | None = None) -> list[Booking]:
        """Return bookings newest first, optionally for one purchaser."""
        ...

    @abstractmethod
    def held_seats(self, event_id: EventId) -> frozenset[SeatId]:
        """Seats referenced by Confirmed bookings of an event."""
        ...


class PaymentIntentStore(ABC):
    """Interface for pending payment intents."""

    @abstractmethod
    def add_intent(self, intent: PaymentIntent) -> None:
        ...

    @abstractmethod
    def save_intent(self, intent: PaymentIntent) -> None:
        ...

    @abstractmethod
    def get_intent(self, intent_id: PaymentIntentId) -> PaymentIntent | None:
        ...


class BoxOfficeStore(EventStore, BookingStore, PaymentIntentStore):
    """Everything the services need from one backend."""
