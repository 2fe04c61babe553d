"""Unit tests for BookingService against the in-memory store.

Run with: pytest tests/test_booking_ledger.py -v
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from boxoffice.domain import BookingStatus, EventId, Money, SeatId
from boxoffice.domain.errors import (
    BookingNotFoundError,
    ConflictError,
    EmptySelectionError,
    EventNotFoundError,
    InvalidBookingIdError,
    InvalidStateError,
    LockedError,
    SeatUnavailableError,
    ValidationError,
)


def book(bookings, event_id, seats, email="alice@mail.com"):
    return bookings.create_booking(event_id, "Alice", email, seats)


class TestCreateBooking:
    def test_books_two_gold_seats(self, catalog, bookings, gold_event):
        booking = book(bookings, gold_event, ["1-1", "1-2"])

        assert booking.status is BookingStatus.CONFIRMED
        assert booking.total_amount == Money.of(200)
        assert booking.seat_ids == (SeatId(1, 1), SeatId(1, 2))
        assert booking.event_name == "Summer Synthwave"

        entry = catalog.get_event(gold_event)
        assert entry.event.booking_count == 1
        assert entry.available_seats == 2
        assert entry.event.seating_layout.booked_seats == (SeatId(1, 1), SeatId(1, 2))

    def test_pricing_locked_after_first_booking(self, catalog, bookings, gold_event):
        book(bookings, gold_event, ["1-1", "1-2"])
        with pytest.raises(LockedError):
            catalog.update_event(gold_event, {"pricing": {"gold": {"price": 120}}})

    def test_total_uses_frozen_seat_prices(self, inventory, bookings, gold_event):
        inventory.assign_tier(gold_event, "2-1", "silver")
        booking = book(bookings, gold_event, ["1-1", "2-1"])
        assert booking.total_amount == Money.of(160)

    def test_all_or_nothing_allocation(self, catalog, bookings, gold_event):
        book(bookings, gold_event, ["1-1"])

        with pytest.raises(SeatUnavailableError) as exc:
            book(bookings, gold_event, ["1-2", "1-1"], email="bob@mail.com")

        assert exc.value.seat_ids == ["1-1"]
        assert catalog.get_event(gold_event).available_seats == 3
        assert len(bookings.list_bookings()) == 1

    def test_blocked_seat_is_unavailable(self, inventory, bookings, gold_event):
        inventory.assign_tier(gold_event, "2-2", "blocked")
        with pytest.raises(SeatUnavailableError) as exc:
            book(bookings, gold_event, ["2-2"])
        assert exc.value.seat_ids == ["2-2"]

    def test_empty_selection(self, bookings, gold_event):
        with pytest.raises(EmptySelectionError):
            book(bookings, gold_event, [])

    def test_unknown_event(self, bookings):
        with pytest.raises(EventNotFoundError):
            book(bookings, str(uuid4()), ["1-1"])

    def test_seat_outside_event(self, bookings, gold_event):
        with pytest.raises(ValidationError) as exc:
            book(bookings, gold_event, ["1-1", "7-7"])
        assert "seatIds" in exc.value.fields

    def test_duplicate_seat_in_selection(self, bookings, gold_event):
        with pytest.raises(ValidationError) as exc:
            book(bookings, gold_event, ["1-1", "1-1"])
        assert "seatIds" in exc.value.fields

    def test_invalid_purchaser_details(self, bookings, gold_event):
        with pytest.raises(ValidationError) as exc:
            bookings.create_booking(gold_event, " ", "not-an-email", ["1-1"])
        assert set(exc.value.fields) == {"purchaserName", "purchaserEmail"}

    def test_event_without_sellable_seats(self, catalog, bookings, clock):
        entry = catalog.create_event(
            name="x",
            date=clock.now + timedelta(days=1),
            location="y",
            seating_layout={"rows": 1, "columns": 1},
        )
        with pytest.raises(ValidationError) as exc:
            book(bookings, str(entry.event.id), ["1-1"])
        assert "seatIds" in exc.value.fields

    def test_expected_total_mismatch(self, bookings, gold_event):
        with pytest.raises(ConflictError):
            bookings.create_booking(
                gold_event, "Alice", "alice@mail.com", ["1-1"], expected_total=Money.of(90)
            )
        assert bookings.list_bookings() == []

    def test_quote_commits_nothing(self, catalog, bookings, gold_event):
        checkout = bookings.quote(gold_event, "Alice", "alice@mail.com", ["1-1", "2-2"])

        assert checkout.total == Money.of(200)
        assert catalog.get_event(gold_event).event.booking_count == 0
        assert bookings.list_bookings() == []


class TestCancelBooking:
    def test_cancel_releases_seats(self, catalog, bookings, clock, gold_event):
        booking = book(bookings, gold_event, ["1-1", "1-2"])
        clock.advance(hours=1)

        cancelled = bookings.cancel_booking(str(booking.id))

        assert cancelled.status is BookingStatus.CANCELLED
        assert cancelled.cancelled_at == clock.now
        entry = catalog.get_event(gold_event)
        assert entry.available_seats == 4
        assert entry.event.booking_count == 0
        assert entry.event.seating_layout.booked_seats == ()

    def test_released_seats_can_be_rebooked(self, bookings, gold_event):
        first = book(bookings, gold_event, ["1-1"])
        bookings.cancel_booking(str(first.id))

        again = book(bookings, gold_event, ["1-1"], email="bob@mail.com")

        assert again.status is BookingStatus.CONFIRMED

    def test_double_cancel_is_invalid_state(self, bookings, gold_event):
        booking = book(bookings, gold_event, ["1-1"])
        bookings.cancel_booking(str(booking.id))

        with pytest.raises(InvalidStateError):
            bookings.cancel_booking(str(booking.id))

    def test_cancel_unknown_booking(self, bookings):
        with pytest.raises(BookingNotFoundError):
            bookings.cancel_booking(str(uuid4()))

    def test_cancel_malformed_id(self, bookings):
        with pytest.raises(InvalidBookingIdError):
            bookings.cancel_booking("nope")

    def test_cancel_after_event_removed(self, store, bookings, gold_event):
        booking = book(bookings, gold_event, ["1-1"])
        store.delete_event(EventId.from_string(gold_event))

        record = bookings.get_booking(str(booking.id))
        assert record.event_deleted

        cancelled = bookings.cancel_booking(str(booking.id))
        assert cancelled.status is BookingStatus.CANCELLED
        assert bookings.get_booking(str(booking.id)).event_deleted


class TestListBookings:
    def test_newest_first(self, bookings, clock, gold_event):
        older = book(bookings, gold_event, ["1-1"])
        clock.advance(minutes=5)
        newer = book(bookings, gold_event, ["1-2"])

        assert [r.booking.id for r in bookings.list_bookings()] == [newer.id, older.id]

    def test_filters_by_email_case_insensitively(self, bookings, gold_event):
        book(bookings, gold_event, ["1-1"], email="alice@mail.com")
        book(bookings, gold_event, ["1-2"], email="bob@mail.com")

        records = bookings.list_bookings("ALICE@mail.com")

        assert [r.booking.purchaser_email for r in records] == ["alice@mail.com"]

    def test_cancelled_bookings_stay_listed(self, bookings, gold_event):
        booking = book(bookings, gold_event, ["1-1"])
        bookings.cancel_booking(str(booking.id))

        (record,) = bookings.list_bookings()
        assert record.booking.status is BookingStatus.CANCELLED
        assert not record.event_deleted
