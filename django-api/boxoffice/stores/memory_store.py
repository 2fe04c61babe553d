"""In-process store backed by dictionaries.

Used by unit tests and local tooling. Per-event ``threading.RLock``
instances provide the same exclusivity the ORM store gets from row locks.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from boxoffice.domain import Booking, BookingId, Event, EventId, PaymentIntent, PaymentIntentId, SeatId
from boxoffice.domain.errors import SeatUnavailableError
from boxoffice.stores.interfaces import BoxOfficeStore


class InMemoryStore(BoxOfficeStore):
    def __init__(self) -> None:
        self._events: dict[EventId, Event] = {}
        self._bookings: dict[BookingId, Booking] = {}
        self._intents: dict[PaymentIntentId, PaymentIntent] = {}
        self._guard = threading.Lock()
        self._locks: dict[EventId, threading.RLock] = {}

    @contextmanager
    def lock_event(self, event_id: EventId) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(event_id, threading.RLock())
        with lock:
            yield

    def list_events(self) -> list[Event]:
        return sorted(self._events.values(), key=lambda e: e.created_at, reverse=True)

    def get_event(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)

    def event_exists(self, event_id: EventId) -> bool:
        return event_id in self._events

    def add_event(self, event: Event) -> None:
        self._events[event.id] = event

    def save_event(self, event: Event) -> None:
        self._events[event.id] = event

    def delete_event(self, event_id: EventId) -> None:
        self._events.pop(event_id, None)

    def add_booking(self, booking: Booking) -> None:
        clash = self.held_seats(booking.event_id) & set(booking.seat_ids)
        if booking.is_confirmed and clash:
            raise SeatUnavailableError(str(s) for s in clash)
        self._bookings[booking.id] = booking

    def save_booking(self, booking: Booking) -> None:
        self._bookings[booking.id] = booking

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        return self._bookings.get(booking_id)

    def list_bookings(self, purchaser_email: str | None = None) -> list[Booking]:
        bookings = [
            b
            for b in list(self._bookings.values())
            if purchaser_email is None or b.purchaser_email.lower() == purchaser_email.lower()
        ]
        return sorted(bookings, key=lambda b: b.created_at, reverse=True)

    def held_seats(self, event_id: EventId) -> frozenset[SeatId]:
        return frozenset(
            seat_id
            for b in list(self._bookings.values())
            if b.event_id == event_id and b.is_confirmed
            for seat_id in b.seat_ids
        )

    def add_intent(self, intent: PaymentIntent) -> None:
        self._intents[intent.id] = intent

    def save_intent(self, intent: PaymentIntent) -> None:
        self._intents[intent.id] = intent

    def get_intent(self, intent_id: PaymentIntentId) -> PaymentIntent | None:
        return self._intents.get(intent_id)
