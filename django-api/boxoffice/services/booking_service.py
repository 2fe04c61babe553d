"""Booking ledger service.

A booking is Confirmed on creation and may only move to Cancelled. Seat
checks, the price total and the commit all happen under the owning event's
lock, so two requests for the same seat can never both succeed.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, replace
from uuid import uuid4

from boxoffice.domain import (
    Booking,
    BookingId,
    BookingRecord,
    BookingStatus,
    Event,
    EventId,
    Money,
    SeatId,
)
from boxoffice.domain import seating
from boxoffice.domain.errors import (
    BookingNotFoundError,
    ConflictError,
    EmptySelectionError,
    InvalidBookingIdError,
    InvalidStateError,
    SeatUnavailableError,
    ValidationError,
)
from boxoffice.domain.pricing import total_for
from boxoffice.services.catalog_service import Clock, parse_event_id, require_event, utcnow
from boxoffice.stores.interfaces import BoxOfficeStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def parse_booking_id(booking_id: str | BookingId) -> BookingId:
    if isinstance(booking_id, BookingId):
        return booking_id
    try:
        return BookingId.from_string(str(booking_id))
    except ValueError:
        raise InvalidBookingIdError() from None


@dataclass(frozen=True)
class Checkout:
    """A validated, priced seat selection that has not been committed."""

    event: Event
    purchaser_name: str
    purchaser_email: str
    seat_ids: tuple[SeatId, ...]
    total: Money


class BookingService:
    """Service for creating, cancelling and listing bookings."""

    def __init__(self, store: BoxOfficeStore, clock: Clock = utcnow) -> None:
        self._store = store
        self._clock = clock

    def _checkout(
        self,
        event_id: EventId,
        purchaser_name: str,
        purchaser_email: str,
        seat_ids: Sequence[str],
    ) -> Checkout:
        # Caller must hold the event lock.
        event = require_event(self._store, event_id)
        if seat_ids is None or (isinstance(seat_ids, (list, tuple)) and not seat_ids):
            raise EmptySelectionError()

        errors: dict[str, list[str]] = {}
        if not isinstance(seat_ids, (list, tuple)):
            errors["seatIds"] = ["Must be a list of seat ids."]
            seat_ids = ()
        name = purchaser_name.strip() if isinstance(purchaser_name, str) else ""
        if not name:
            errors["purchaserName"] = ["This field is required."]
        email = purchaser_email.strip() if isinstance(purchaser_email, str) else ""
        if not EMAIL_PATTERN.match(email):
            errors["purchaserEmail"] = ["Enter a valid email address."]

        selection: list[SeatId] = []
        seat_problems: list[str] = []
        layout = event.seating_layout
        for raw in seat_ids:
            try:
                seat_id = SeatId.from_string(str(raw))
            except ValueError:
                seat_problems.append(f"Malformed seat id {raw}.")
                continue
            if seat_id in selection:
                seat_problems.append(f"Seat {seat_id} selected more than once.")
            elif layout is None or layout.seat(seat_id) is None:
                seat_problems.append(f"Seat {seat_id} does not belong to this event.")
            else:
                selection.append(seat_id)
        if layout is None or not layout.has_sellable_seat():
            seat_problems.append("Event has no bookable seats.")
        if seat_problems:
            errors.setdefault("seatIds", []).extend(seat_problems)
        if errors:
            raise ValidationError(errors)

        held = self._store.held_seats(event_id)
        taken = [s for s in selection if not seating.is_bookable(layout, s, held)]
        if taken:
            logger.warning(
                "Seats %s unavailable for event %s", ", ".join(map(str, taken)), event_id
            )
            raise SeatUnavailableError(str(s) for s in taken)

        return Checkout(
            event=event,
            purchaser_name=name,
            purchaser_email=email,
            seat_ids=tuple(selection),
            total=total_for(event, selection),
        )

    def quote(
        self,
        event_id: str,
        purchaser_name: str,
        purchaser_email: str,
        seat_ids: Sequence[str],
    ) -> Checkout:
        """Validate and price a selection without committing anything."""
        eid = parse_event_id(event_id)
        with self._store.lock_event(eid):
            return self._checkout(eid, purchaser_name, purchaser_email, seat_ids)

    def create_booking(
        self,
        event_id: str,
        purchaser_name: str,
        purchaser_email: str,
        seat_ids: Sequence[str],
        expected_total: Money | None = None,
    ) -> Booking:
        """Atomically allocate every requested seat or none of them.

        Raises:
            EventNotFoundError: If the event does not exist.
            EmptySelectionError: If no seats were requested.
            ValidationError: For bad purchaser details or foreign seats.
            SeatUnavailableError: Naming every seat that cannot be allocated.
            ConflictError: If ``expected_total`` no longer matches the seat prices.
        """
        eid = parse_event_id(event_id)
        with self._store.lock_event(eid):
            checkout = self._checkout(eid, purchaser_name, purchaser_email, seat_ids)
            if expected_total is not None and checkout.total != expected_total:
                raise ConflictError(
                    f"Seat prices total {checkout.total}, authorized {expected_total}"
                )

            event = checkout.event
            now = self._clock()
            booking = Booking(
                id=BookingId(value=uuid4()),
                event_id=eid,
                event_name=event.name,
                purchaser_name=checkout.purchaser_name,
                purchaser_email=checkout.purchaser_email,
                seat_ids=checkout.seat_ids,
                total_amount=checkout.total,
                status=BookingStatus.CONFIRMED,
                created_at=now,
            )
            self._store.add_booking(booking)
            self._store.save_event(
                replace(
                    event,
                    seating_layout=seating.set_availability(
                        event.seating_layout, checkout.seat_ids, False
                    ),
                    booking_count=event.booking_count + 1,
                    updated_at=now,
                )
            )
        logger.info(
            "Booking %s confirmed for event %s: %d seat(s), total %s",
            booking.id,
            eid,
            len(booking.seat_ids),
            booking.total_amount,
        )
        return booking

    def cancel_booking(self, booking_id: str) -> Booking:
        """Cancel a confirmed booking and release its seats.

        Raises:
            InvalidBookingIdError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
            InvalidStateError: If the booking is already cancelled.
        """
        bid = parse_booking_id(booking_id)
        found = self._store.get_booking(bid)
        if found is None:
            raise BookingNotFoundError(str(bid))

        with self._store.lock_event(found.event_id):
            booking = self._store.get_booking(bid)
            if not booking.is_confirmed:
                raise InvalidStateError(booking.status.value, "cancel")
            now = self._clock()
            cancelled = replace(booking, status=BookingStatus.CANCELLED, cancelled_at=now)
            self._store.save_booking(cancelled)

            event = self._store.get_event(booking.event_id)
            if event is not None:
                layout = event.seating_layout
                if layout is not None:
                    layout = seating.set_availability(layout, booking.seat_ids, True)
                self._store.save_event(
                    replace(
                        event,
                        seating_layout=layout,
                        booking_count=max(0, event.booking_count - 1),
                        updated_at=now,
                    )
                )
        logger.info("Booking %s cancelled", bid)
        return cancelled

    def get_booking(self, booking_id: str) -> BookingRecord:
        bid = parse_booking_id(booking_id)
        booking = self._store.get_booking(bid)
        if booking is None:
            raise BookingNotFoundError(str(bid))
        return BookingRecord(
            booking=booking, event_deleted=not self._store.event_exists(booking.event_id)
        )

    def list_bookings(self, purchaser_email: str | None = None) -> list[BookingRecord]:
        """Return bookings, flagging those whose event no longer exists."""
        bookings = self._store.list_bookings(purchaser_email)
        exists: dict[EventId, bool] = {}
        records = []
        for booking in bookings:
            if booking.event_id not in exists:
                exists[booking.event_id] = self._store.event_exists(booking.event_id)
            records.append(
                BookingRecord(booking=booking, event_deleted=not exists[booking.event_id])
            )
        return records
