"""Concurrency tests: racing requests against one event.

Run with: pytest tests/test_concurrency.py -v
"""

import threading
from datetime import datetime, timezone

import pytest
from django.db import connections

from boxoffice.domain import Tier
from boxoffice.domain.errors import LockedError, SeatUnavailableError
from boxoffice.services import BookingService, CatalogService, InventoryService
from boxoffice.stores.django_store import DjangoStore


def race(*calls):
    """Run the callables together and return (results, errors)."""
    barrier = threading.Barrier(len(calls))
    results, errors = [], []

    def run(call):
        barrier.wait()
        try:
            results.append(call())
        except Exception as exc:
            errors.append(exc)
        finally:
            connections.close_all()

    threads = [threading.Thread(target=run, args=(call,)) for call in calls]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return results, errors


class TestSeatRace:
    def test_only_one_booking_wins_a_seat(self, catalog, bookings, gold_event):
        results, errors = race(
            *[
                lambda i=i: bookings.create_booking(
                    gold_event, f"Buyer {i}", f"buyer{i}@mail.com", ["1-1"]
                )
                for i in range(8)
            ]
        )

        assert len(results) == 1
        assert len(errors) == 7
        assert all(isinstance(e, SeatUnavailableError) for e in errors)
        assert catalog.get_event(gold_event).event.booking_count == 1

    def test_overlapping_selections_never_double_sell(self, catalog, bookings, gold_event):
        results, _ = race(
            lambda: bookings.create_booking(gold_event, "A", "a@mail.com", ["1-1", "1-2"]),
            lambda: bookings.create_booking(gold_event, "B", "b@mail.com", ["1-2", "2-1"]),
            lambda: bookings.create_booking(gold_event, "C", "c@mail.com", ["2-2"]),
        )

        sold = [seat for booking in results for seat in booking.seat_ids]
        assert len(sold) == len(set(sold))
        entry = catalog.get_event(gold_event)
        assert entry.available_seats == 4 - len(sold)
        assert entry.event.booking_count == len(results)


class TestEditRace:
    def test_pricing_edit_racing_a_booking(self, catalog, bookings, gold_event):
        results, errors = race(
            lambda: bookings.create_booking(gold_event, "A", "a@mail.com", ["1-1"]),
            lambda: catalog.update_event(gold_event, {"pricing": {"gold": {"price": 10}}}),
        )

        booking = next(r for r in results if hasattr(r, "total_amount"))
        entry = catalog.get_event(gold_event)
        if errors:
            # Booking went first, so the edit was refused.
            assert isinstance(errors[0], LockedError)
            assert str(entry.event.pricing[Tier.GOLD].price) == "100.00"
        else:
            assert str(entry.event.pricing[Tier.GOLD].price) == "10.00"
        # Either way the booking paid the seat's painted price.
        assert str(booking.total_amount) == "100.00"
        assert entry.event.booking_count == 1

    def test_layout_regeneration_racing_a_booking(self, catalog, inventory, bookings, gold_event):
        results, errors = race(
            lambda: bookings.create_booking(gold_event, "A", "a@mail.com", ["1-1"]),
            lambda: inventory.generate_layout(gold_event, 3, 3),
        )

        assert len(results) + len(errors) == 2
        entry = catalog.get_event(gold_event)
        if entry.event.booking_count:
            # The booking won; the regeneration must have been refused.
            assert isinstance(errors[0], LockedError)
            assert entry.event.total_seats == 4
        else:
            # The grid was rebuilt first; every seat is blocked again.
            assert entry.event.total_seats == 9
            assert not isinstance(errors[0], LockedError)


@pytest.mark.django_db(transaction=True)
class TestDatabaseSeatRace:
    """The same races through the ORM store, one connection per thread."""

    @pytest.fixture
    def event_id(self) -> str:
        store = DjangoStore()
        entry = CatalogService(store).create_event(
            name="Raced",
            date=datetime(2099, 6, 1, 19, 0, tzinfo=timezone.utc),
            location="Hall",
            pricing={"gold": {"price": 100}},
            seating_layout={"rows": 2, "columns": 2},
        )
        event_id = str(entry.event.id)
        InventoryService(store).bulk_assign_tier(event_id, "gold")
        return event_id

    def test_losers_get_seat_unavailable(self, event_id):
        results, errors = race(
            *[
                lambda i=i: BookingService(DjangoStore()).create_booking(
                    event_id, f"Buyer {i}", f"buyer{i}@mail.com", ["1-1"]
                )
                for i in range(6)
            ]
        )

        assert len(results) == 1
        assert [type(e) for e in errors] == [SeatUnavailableError] * 5
        entry = CatalogService(DjangoStore()).get_event(event_id)
        assert entry.event.booking_count == 1
        assert entry.available_seats == 3

    def test_pricing_edit_racing_a_booking(self, event_id):
        results, errors = race(
            lambda: BookingService(DjangoStore()).create_booking(
                event_id, "A", "a@mail.com", ["1-1"]
            ),
            lambda: CatalogService(DjangoStore()).update_event(
                event_id, {"pricing": {"gold": {"price": 10}}}
            ),
        )

        assert all(isinstance(e, LockedError) for e in errors)
        assert len(results) + len(errors) == 2
        assert CatalogService(DjangoStore()).get_event(event_id).event.booking_count == 1
