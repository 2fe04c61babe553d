"""Unit tests for CatalogService and InventoryService.

These test error handling and domain error mapping against the in-memory store.
Run with: pytest tests/test_services.py -v
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from boxoffice.domain import Money, Tier
from boxoffice.domain.errors import (
    ConflictError,
    EventNotFoundError,
    InvalidEventIdError,
    InvalidTierError,
    LockedError,
    SeatNotFoundError,
    ValidationError,
)


def book(bookings, event_id, seats=("1-1",)):
    return bookings.create_booking(event_id, "Alice", "alice@mail.com", list(seats))


class TestCreateEvent:
    def test_creates_capacity_only_event(self, catalog, clock):
        entry = catalog.create_event(
            name="Jazz Under Stars",
            date=clock.now + timedelta(days=1),
            location="Central Park",
            total_seats=18,
        )

        assert entry.event.total_seats == 18
        assert entry.event.seating_layout is None
        assert entry.available_seats == 0
        assert entry.event.booking_count == 0

    def test_creates_event_with_generated_layout(self, catalog, clock):
        entry = catalog.create_event(
            name="Indie Rock Night",
            date=clock.now + timedelta(days=1),
            location="The Cave",
            seating_layout={"rows": 3, "columns": 4},
        )

        assert entry.event.total_seats == 12
        assert len(entry.event.seating_layout.seats) == 12
        assert entry.available_seats == 0

    def test_validation_enumerates_every_violated_field(self, catalog, clock):
        with pytest.raises(ValidationError) as exc:
            catalog.create_event(
                name="  ",
                date=clock.now - timedelta(minutes=1),
                location="",
                pricing={"gold": {"price": -5}},
            )

        assert set(exc.value.fields) == {"name", "date", "location", "total_seats", "pricing.gold"}

    def test_rejects_invalid_layout(self, catalog, clock):
        with pytest.raises(ValidationError) as exc:
            catalog.create_event(
                name="x",
                date=clock.now + timedelta(days=1),
                location="y",
                seating_layout={"rows": 0, "columns": 2},
            )
        assert set(exc.value.fields) == {"seating_layout.rows"}

    def test_total_seats_must_match_layout(self, catalog, clock):
        with pytest.raises(ValidationError) as exc:
            catalog.create_event(
                name="x",
                date=clock.now + timedelta(days=1),
                location="y",
                total_seats=5,
                seating_layout={"rows": 2, "columns": 2},
            )
        assert set(exc.value.fields) == {"total_seats"}

    def test_rejects_naive_datetime(self, catalog, clock):
        with pytest.raises(ValidationError) as exc:
            catalog.create_event(
                name="x",
                date=(clock.now + timedelta(days=1)).replace(tzinfo=None),
                location="y",
                total_seats=1,
            )
        assert set(exc.value.fields) == {"date"}

    def test_parses_iso_date_strings(self, catalog, clock):
        entry = catalog.create_event(
            name="x", date="2099-06-01T19:00:00Z", location="y", total_seats=1
        )
        assert entry.event.starts_at.isoformat() == "2099-06-01T19:00:00+00:00"

    def test_unparseable_date_is_reported_with_other_fields(self, catalog, clock):
        with pytest.raises(ValidationError) as exc:
            catalog.create_event(name="", date="soon", location="", total_seats="ten")
        assert set(exc.value.fields) == {"name", "date", "location", "total_seats"}
        assert exc.value.fields["date"] == ["Must be a date and time."]


class TestReadEvents:
    def test_get_event_invalid_id_raises_error(self, catalog):
        with pytest.raises(InvalidEventIdError):
            catalog.get_event("not-a-uuid")

    def test_get_event_not_found_raises_error(self, catalog):
        with pytest.raises(EventNotFoundError):
            catalog.get_event(str(uuid4()))

    def test_list_events_newest_first(self, catalog, clock):
        first = catalog.create_event(
            name="first", date=clock.now + timedelta(days=2), location="a", total_seats=1
        )
        clock.advance(minutes=1)
        second = catalog.create_event(
            name="second", date=clock.now + timedelta(days=2), location="a", total_seats=1
        )

        assert [e.event.id for e in catalog.list_events()] == [second.event.id, first.event.id]

    def test_available_seats_is_live(self, catalog, bookings, gold_event):
        assert catalog.get_event(gold_event).available_seats == 4
        book(bookings, gold_event, ["1-1", "2-2"])
        assert catalog.get_event(gold_event).available_seats == 2


class TestUpdateEvent:
    def test_partial_update(self, catalog, gold_event):
        entry = catalog.update_event(gold_event, {"name": "Renamed", "description": "New"})
        assert entry.event.name == "Renamed"
        assert entry.event.description == "New"
        assert entry.event.location == "Roof-top @ Downtown"

    def test_pricing_patch_merges_tiers(self, catalog, gold_event):
        entry = catalog.update_event(gold_event, {"pricing": {"silver": {"price": 70}}})
        assert entry.event.pricing[Tier.SILVER].price == Money.of(70)
        assert entry.event.pricing[Tier.GOLD].price == Money.of(100)

    def test_layout_patch_regenerates_grid(self, catalog, gold_event):
        entry = catalog.update_event(gold_event, {"seating_layout": {"rows": 1, "columns": 3}})
        assert entry.event.total_seats == 3
        assert entry.available_seats == 0

    def test_unknown_field(self, catalog, gold_event):
        with pytest.raises(ValidationError) as exc:
            catalog.update_event(gold_event, {"booking_count": 0})
        assert "booking_count" in exc.value.fields

    def test_total_seats_is_derived_from_layout(self, catalog, gold_event):
        with pytest.raises(ValidationError):
            catalog.update_event(gold_event, {"total_seats": 10})

    @pytest.mark.parametrize(
        "patch",
        [
            {"pricing": {"gold": {"price": 1}}},
            {"seating_layout": {"rows": 1, "columns": 1}},
            {"name": "ok", "pricing": {}},
        ],
    )
    def test_pricing_and_layout_locked_after_booking(self, catalog, bookings, gold_event, patch):
        book(bookings, gold_event)
        with pytest.raises(LockedError):
            catalog.update_event(gold_event, patch)

    def test_other_fields_stay_editable_after_booking(self, catalog, bookings, gold_event):
        book(bookings, gold_event)
        entry = catalog.update_event(gold_event, {"location": "Main Hall"})
        assert entry.event.location == "Main Hall"
        assert entry.event.booking_count == 1


class TestDeleteEvent:
    def test_delete_without_bookings(self, catalog, gold_event):
        catalog.delete_event(gold_event)
        with pytest.raises(EventNotFoundError):
            catalog.get_event(gold_event)

    def test_delete_with_booking_conflicts(self, catalog, bookings, gold_event):
        book(bookings, gold_event)
        with pytest.raises(ConflictError):
            catalog.delete_event(gold_event)

    def test_delete_allowed_once_bookings_cancelled(self, catalog, bookings, gold_event):
        booking = book(bookings, gold_event)
        bookings.cancel_booking(str(booking.id))

        catalog.delete_event(gold_event)

        assert catalog.list_events() == []


class TestInventory:
    def test_assign_tier_uses_current_price(self, inventory, gold_event):
        seat = inventory.assign_tier(gold_event, "1-2", "platinum")
        assert seat.tier is Tier.PLATINUM
        assert seat.price == Money.of(150)
        assert seat.available

    def test_assign_unknown_tier(self, inventory, gold_event):
        with pytest.raises(InvalidTierError):
            inventory.assign_tier(gold_event, "1-1", "diamond")

    def test_assign_unknown_seat(self, inventory, gold_event):
        with pytest.raises(SeatNotFoundError):
            inventory.assign_tier(gold_event, "5-5", "gold")

    def test_assign_on_event_without_layout(self, catalog, inventory, clock):
        entry = catalog.create_event(
            name="x", date=clock.now + timedelta(days=1), location="y", total_seats=3
        )
        with pytest.raises(SeatNotFoundError):
            inventory.assign_tier(str(entry.event.id), "1-1", "gold")
        with pytest.raises(ValidationError):
            inventory.bulk_assign_tier(str(entry.event.id), "gold")

    def test_generate_layout_replaces_grid(self, inventory, gold_event):
        event = inventory.generate_layout(gold_event, 3, 3)
        assert event.total_seats == 9
        assert event.seating_layout.open_seat_count == 0

    def test_edits_locked_after_booking(self, inventory, bookings, gold_event):
        book(bookings, gold_event)
        with pytest.raises(LockedError):
            inventory.assign_tier(gold_event, "2-2", "silver")
        with pytest.raises(LockedError):
            inventory.bulk_assign_tier(gold_event, "blocked")
        with pytest.raises(LockedError):
            inventory.generate_layout(gold_event, 1, 1)
        with pytest.raises(LockedError):
            inventory.cycle_tier(gold_event, "2-2")

    def test_cycle_walks_the_tier_ring(self, inventory, gold_event):
        tiers = [inventory.cycle_tier(gold_event, "1-1").tier for _ in range(4)]
        assert tiers == [Tier.SILVER, Tier.PLATINUM, Tier.BLOCKED, Tier.GOLD]

    def test_cycle_skips_unpriced_tiers(self, catalog, inventory, clock):
        entry = catalog.create_event(
            name="x",
            date=clock.now + timedelta(days=1),
            location="y",
            pricing={"gold": {"price": 10}},
            seating_layout={"rows": 1, "columns": 1},
        )
        event_id = str(entry.event.id)

        assert inventory.cycle_tier(event_id, "1-1").tier is Tier.GOLD
        assert inventory.cycle_tier(event_id, "1-1").tier is Tier.BLOCKED

    def test_is_bookable(self, inventory, bookings, gold_event):
        assert inventory.is_bookable(gold_event, "1-1")
        book(bookings, gold_event, ["1-1"])
        assert not inventory.is_bookable(gold_event, "1-1")
        assert not inventory.is_bookable(gold_event, "9-9")
        assert not inventory.is_bookable(gold_event, "garbage")

    def test_list_seats(self, inventory, gold_event):
        assert [str(s.id) for s in inventory.list_seats(gold_event)] == [
            "1-1",
            "1-2",
            "2-1",
            "2-2",
        ]
