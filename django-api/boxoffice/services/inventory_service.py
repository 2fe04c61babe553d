"""Seat inventory service: layout generation and tier painting."""

import logging
from dataclasses import replace

from boxoffice.domain import Capacity, Event, Seat, SeatId
from boxoffice.domain import seating
from boxoffice.domain.errors import (
    LockedError,
    SeatNotFoundError,
    ValidationError,
)
from boxoffice.domain.pricing import parse_tier
from boxoffice.services.catalog_service import Clock, parse_event_id, require_event, utcnow
from boxoffice.stores.interfaces import BoxOfficeStore

logger = logging.getLogger(__name__)


def parse_seat_id(seat_id: str | SeatId) -> SeatId:
    if isinstance(seat_id, SeatId):
        return seat_id
    try:
        return SeatId.from_string(str(seat_id))
    except ValueError:
        raise SeatNotFoundError(str(seat_id)) from None


class InventoryService:
    """Service for the per-event seat grid.

    Every edit is refused with ``LockedError`` once the event has a
    confirmed booking; the check and the write share the event lock.
    """

    def __init__(self, store: BoxOfficeStore, clock: Clock = utcnow) -> None:
        self._store = store
        self._clock = clock

    def _editable(self, event: Event) -> Event:
        if event.is_locked:
            logger.warning("Rejected seat edit on booked event %s", event.id)
            raise LockedError(str(event.id))
        return event

    def list_seats(self, event_id: str) -> tuple[Seat, ...]:
        event = require_event(self._store, parse_event_id(event_id))
        return event.seating_layout.seats if event.seating_layout else ()

    def generate_layout(self, event_id: str, rows: int, columns: int) -> Event:
        """Replace the event's grid with rows x columns blocked seats."""
        eid = parse_event_id(event_id)
        with self._store.lock_event(eid):
            event = self._editable(require_event(self._store, eid))
            layout = seating.generate_layout(rows, columns)
            updated = replace(
                event,
                seating_layout=layout,
                capacity=Capacity(value=rows * columns),
                updated_at=self._clock(),
            )
            self._store.save_event(updated)
        logger.info("Generated %dx%d layout for event %s", rows, columns, eid)
        return updated

    def assign_tier(self, event_id: str, seat_id: str, tier: str) -> Seat:
        """Repaint one seat and freeze the tier's current price onto it.

        Raises:
            InvalidTierError: If the tier is unknown or not priced for the event.
            LockedError: If the event has confirmed bookings.
            SeatNotFoundError: If the seat is not in the layout.
        """
        eid = parse_event_id(event_id)
        new_tier = parse_tier(tier)
        sid = parse_seat_id(seat_id)
        with self._store.lock_event(eid):
            event = self._editable(require_event(self._store, eid))
            if event.seating_layout is None:
                raise SeatNotFoundError(str(sid))
            layout = seating.assign_tier(event.seating_layout, sid, new_tier, event.pricing)
            self._store.save_event(
                replace(event, seating_layout=layout, updated_at=self._clock())
            )
        return layout.seat(sid)

    def bulk_assign_tier(self, event_id: str, tier: str) -> Event:
        eid = parse_event_id(event_id)
        new_tier = parse_tier(tier)
        with self._store.lock_event(eid):
            event = self._editable(require_event(self._store, eid))
            if event.seating_layout is None:
                raise ValidationError({"seating_layout": ["Generate a seating layout first."]})
            layout = seating.bulk_assign_tier(event.seating_layout, new_tier, event.pricing)
            updated = replace(event, seating_layout=layout, updated_at=self._clock())
            self._store.save_event(updated)
        logger.info("Painted all seats of event %s as %s", eid, new_tier.value)
        return updated

    def cycle_tier(self, event_id: str, seat_id: str) -> Seat:
        """Advance a seat to the next tier in the gold/silver/platinum/blocked cycle.

        Tiers the event has no price for are skipped.
        """
        eid = parse_event_id(event_id)
        sid = parse_seat_id(seat_id)
        with self._store.lock_event(eid):
            event = require_event(self._store, eid)
            seat = event.seating_layout.seat(sid) if event.seating_layout else None
            if seat is None:
                raise SeatNotFoundError(str(sid))
            tier = seat.tier.next()
            while not tier.is_blocked and tier not in event.pricing:
                tier = tier.next()
            return self.assign_tier(event_id, seat_id, tier.value)

    def is_bookable(self, event_id: str, seat_id: str) -> bool:
        eid = parse_event_id(event_id)
        event = require_event(self._store, eid)
        try:
            sid = parse_seat_id(seat_id)
        except SeatNotFoundError:
            return False
        return seating.is_bookable(event.seating_layout, sid, self._store.held_seats(eid))
