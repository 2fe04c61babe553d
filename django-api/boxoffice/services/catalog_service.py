"""Event catalog service - all catalog business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime, timezone
from types import MappingProxyType
from uuid import uuid4

from boxoffice.domain import Capacity, CatalogEntry, Event, EventId
from boxoffice.domain.errors import (
    ConflictError,
    EventNotFoundError,
    InvalidEventIdError,
    LockedError,
    ValidationError,
)
from boxoffice.domain.pricing import parse_pricing
from boxoffice.domain.seating import generate_layout, layout_errors
from boxoffice.stores.interfaces import BoxOfficeStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

EDITABLE_FIELDS = frozenset(
    {"name", "date", "location", "description", "total_seats", "pricing", "seating_layout"}
)
LOCKED_FIELDS = frozenset({"pricing", "seating_layout"})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_event_id(event_id: str | EventId) -> EventId:
    if isinstance(event_id, EventId):
        return event_id
    try:
        return EventId.from_string(str(event_id))
    except ValueError:
        raise InvalidEventIdError() from None


def require_event(store: BoxOfficeStore, event_id: EventId) -> Event:
    event = store.get_event(event_id)
    if event is None:
        raise EventNotFoundError(str(event_id))
    return event


def _required_text(value: object) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def _parse_date(value: object, now: datetime) -> tuple[datetime | None, list[str]]:
    """Accept a datetime or an ISO 8601 string carrying a UTC offset."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            return None, ["Must be a date and time."]
    if not isinstance(value, datetime):
        return None, ["Must be a date and time."]
    if value.tzinfo is None:
        return None, ["Must include a timezone."]
    if value < now:
        return None, ["Must not be in the past."]
    return value, []


def _capacity_errors(value: object) -> list[str]:
    if isinstance(value, bool) or not isinstance(value, int):
        return ["Must be an integer."]
    if value < 1:
        return ["Must be a positive number of seats."]
    return []


def _layout_shape(raw: object) -> tuple[object, object]:
    if isinstance(raw, Mapping):
        return raw.get("rows"), raw.get("columns")
    return None, None


class CatalogService:
    """Service for event catalog operations."""

    def __init__(self, store: BoxOfficeStore, clock: Clock = utcnow) -> None:
        self._store = store
        self._clock = clock

    def _entry(self, event: Event) -> CatalogEntry:
        held = self._store.held_seats(event.id)
        return CatalogEntry(event=event, available_seats=event.available_seats(held))

    def list_events(self) -> list[CatalogEntry]:
        """Return all events with live seat counts."""
        return [self._entry(event) for event in self._store.list_events()]

    def get_event(self, event_id: str) -> CatalogEntry:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        return self._entry(require_event(self._store, parse_event_id(event_id)))

    def create_event(
        self,
        *,
        name: str,
        date: datetime | str,
        location: str,
        description: str = "",
        total_seats: int | None = None,
        pricing: Mapping[str, object] | None = None,
        seating_layout: Mapping[str, object] | None = None,
    ) -> CatalogEntry:
        """Create an event, optionally with its seat grid.

        Raises:
            ValidationError: Listing every invalid field, not just the first.
        """
        now = self._clock()
        errors: dict[str, list[str]] = {}

        clean_name = _required_text(name)
        if clean_name is None:
            errors["name"] = ["This field is required."]
        clean_location = _required_text(location)
        if clean_location is None:
            errors["location"] = ["This field is required."]
        starts_at, date_problems = _parse_date(date, now)
        if date_problems:
            errors["date"] = date_problems
        if not isinstance(description, str):
            errors["description"] = ["Must be text."]

        table, pricing_problems = parse_pricing(pricing if pricing is not None else {})
        errors.update(pricing_problems)

        rows, columns = _layout_shape(seating_layout)
        if seating_layout is not None:
            if not isinstance(seating_layout, Mapping):
                errors["seating_layout"] = ["Must be an object with rows and columns."]
            else:
                for key, problems in layout_errors(rows, columns).items():
                    errors[f"seating_layout.{key}"] = problems

        if total_seats is not None:
            if capacity_problems := _capacity_errors(total_seats):
                errors["total_seats"] = capacity_problems
            elif (
                seating_layout is not None
                and not any(k.startswith("seating_layout") for k in errors)
                and total_seats != rows * columns
            ):
                errors["total_seats"] = ["Must equal rows x columns of the seating layout."]
        elif seating_layout is None:
            errors["total_seats"] = ["Provide a positive seat capacity or a seating layout."]

        if errors:
            raise ValidationError(errors)

        layout = generate_layout(rows, columns) if seating_layout is not None else None
        event = Event(
            id=EventId(value=uuid4()),
            name=clean_name,
            starts_at=starts_at,
            location=clean_location,
            description=description.strip(),
            capacity=Capacity(value=total_seats if total_seats is not None else rows * columns),
            created_at=now,
            updated_at=now,
            pricing=table,
            seating_layout=layout,
        )
        self._store.add_event(event)
        logger.info("Created event %s (%s)", event.id, event.name)
        return self._entry(event)

    def update_event(self, event_id: str, patch: Mapping[str, object]) -> CatalogEntry:
        """Apply a partial update.

        Raises:
            LockedError: If the patch touches pricing or layout after the first booking.
            ValidationError: If any patched field is invalid.
        """
        eid = parse_event_id(event_id)
        unknown = sorted(set(patch) - EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({key: ["Unknown field."] for key in unknown})

        with self._store.lock_event(eid):
            event = require_event(self._store, eid)
            if event.is_locked and LOCKED_FIELDS & set(patch):
                logger.warning("Rejected pricing/layout edit on booked event %s", eid)
                raise LockedError(str(eid))

            now = self._clock()
            errors: dict[str, list[str]] = {}
            changes: dict[str, object] = {}

            for field in ("name", "location"):
                if field in patch:
                    value = _required_text(patch[field])
                    if value is None:
                        errors[field] = ["This field is required."]
                    else:
                        changes[field] = value
            if "description" in patch:
                if isinstance(patch["description"], str):
                    changes["description"] = patch["description"].strip()
                else:
                    errors["description"] = ["Must be text."]
            if "date" in patch:
                starts_at, date_problems = _parse_date(patch["date"], now)
                if date_problems:
                    errors["date"] = date_problems
                else:
                    changes["starts_at"] = starts_at

            if "pricing" in patch:
                table, pricing_problems = parse_pricing(patch["pricing"])
                errors.update(pricing_problems)
                changes["pricing"] = MappingProxyType({**event.pricing, **table})

            layout = event.seating_layout
            if "seating_layout" in patch:
                raw = patch["seating_layout"]
                rows, columns = _layout_shape(raw)
                if not isinstance(raw, Mapping):
                    errors["seating_layout"] = ["Must be an object with rows and columns."]
                elif shape_problems := layout_errors(rows, columns):
                    for key, problems in shape_problems.items():
                        errors[f"seating_layout.{key}"] = problems
                else:
                    layout = generate_layout(rows, columns)
                    changes["seating_layout"] = layout
                    changes["capacity"] = Capacity(value=rows * columns)

            if "total_seats" in patch:
                total = patch["total_seats"]
                if capacity_problems := _capacity_errors(total):
                    errors["total_seats"] = capacity_problems
                elif layout is not None and total != layout.rows * layout.columns:
                    errors["total_seats"] = ["Derived from the seating layout."]
                else:
                    changes["capacity"] = Capacity(value=total)

            if errors:
                raise ValidationError(errors)

            updated = replace(event, **changes, updated_at=now)
            self._store.save_event(updated)
        logger.info("Updated event %s fields=%s", eid, sorted(patch))
        return self._entry(updated)

    def delete_event(self, event_id: str) -> None:
        """Remove an event that has no confirmed bookings.

        Raises:
            ConflictError: If the event still has confirmed bookings.
        """
        eid = parse_event_id(event_id)
        with self._store.lock_event(eid):
            event = require_event(self._store, eid)
            if event.booking_count > 0:
                raise ConflictError(
                    f"Cannot delete event with {event.booking_count} confirmed booking(s)"
                )
            self._store.delete_event(eid)
        logger.info("Deleted event %s", eid)
