"""Django ORM implementation of the box office store."""

from collections.abc import Iterator
from contextlib import contextmanager
from types import MappingProxyType

from django.db import IntegrityError, transaction
from django.db.models import Prefetch

from boxoffice import models
from boxoffice.domain import (
    Booking,
    BookingId,
    BookingStatus,
    Capacity,
    Event,
    EventId,
    Money,
    PaymentIntent,
    PaymentIntentId,
    PaymentIntentStatus,
    Seat,
    SeatId,
    SeatingLayout,
    Tier,
    TierPrice,
)
from boxoffice.domain.errors import SeatUnavailableError
from boxoffice.stores.interfaces import BoxOfficeStore


def _ordered_seats() -> Prefetch:
    return Prefetch("seats", queryset=models.Seat.objects.order_by("row", "column"))


def _event_to_domain(row: models.Event) -> Event:
    pricing = MappingProxyType(
        {
            Tier(tier): TierPrice(
                price=Money.of(entry["price"]),
                available=bool(entry.get("available", True)),
            )
            for tier, entry in row.pricing.items()
        }
    )
    layout = None
    if row.layout_rows and row.layout_columns:
        layout = SeatingLayout(
            rows=row.layout_rows,
            columns=row.layout_columns,
            seats=tuple(
                Seat(
                    id=SeatId(row=s.row, column=s.column),
                    tier=Tier(s.tier),
                    available=s.available,
                    price=Money.of(s.price),
                )
                for s in row.seats.all()
            ),
        )
    return Event(
        id=EventId(value=row.id),
        name=row.name,
        starts_at=row.starts_at,
        location=row.location,
        description=row.description,
        capacity=Capacity(value=row.capacity),
        created_at=row.created_at,
        updated_at=row.updated_at,
        pricing=pricing,
        seating_layout=layout,
        booking_count=row.booking_count,
    )


def _event_to_row(event: Event) -> models.Event:
    layout = event.seating_layout
    return models.Event(
        id=event.id.value,
        name=event.name,
        description=event.description,
        location=event.location,
        starts_at=event.starts_at,
        capacity=event.capacity.value,
        pricing={
            tier.value: {"price": str(entry.price), "available": entry.available}
            for tier, entry in event.pricing.items()
        },
        layout_rows=layout.rows if layout else None,
        layout_columns=layout.columns if layout else None,
        booking_count=event.booking_count,
        created_at=event.created_at,
        updated_at=event.updated_at,
    )


def _booking_to_domain(row: models.Booking) -> Booking:
    return Booking(
        id=BookingId(value=row.id),
        event_id=EventId(value=row.event_id),
        event_name=row.event_name,
        purchaser_name=row.purchaser_name,
        purchaser_email=row.purchaser_email,
        seat_ids=tuple(SeatId(row=s.row, column=s.column) for s in row.seats.all()),
        total_amount=Money.of(row.total_amount),
        status=BookingStatus(row.status),
        created_at=row.created_at,
        cancelled_at=row.cancelled_at,
    )


def _intent_to_domain(row: models.PaymentIntent) -> PaymentIntent:
    return PaymentIntent(
        id=PaymentIntentId(value=row.id),
        event_id=EventId(value=row.event_id),
        purchaser_name=row.purchaser_name,
        purchaser_email=row.purchaser_email,
        seat_ids=tuple(SeatId.from_string(s) for s in row.seat_ids),
        amount=Money.of(row.amount),
        status=PaymentIntentStatus(row.status),
        created_at=row.created_at,
        booking_id=BookingId(value=row.booking_id) if row.booking_id else None,
        authorization_ref=row.authorization_ref,
    )


def _intent_to_row(intent: PaymentIntent) -> models.PaymentIntent:
    return models.PaymentIntent(
        id=intent.id.value,
        event_id=intent.event_id.value,
        purchaser_name=intent.purchaser_name,
        purchaser_email=intent.purchaser_email,
        seat_ids=[str(s) for s in intent.seat_ids],
        amount=intent.amount.amount,
        status=intent.status.value,
        booking_id=intent.booking_id.value if intent.booking_id else None,
        authorization_ref=intent.authorization_ref,
        created_at=intent.created_at,
    )


class DjangoStore(BoxOfficeStore):
    """Database-backed store using Django ORM."""

    @contextmanager
    def lock_event(self, event_id: EventId) -> Iterator[None]:
        with transaction.atomic():
            # Row lock; a no-op on backends without SELECT ... FOR UPDATE.
            list(
                models.Event.objects.select_for_update()
                .filter(pk=event_id.value)
                .values_list("pk", flat=True)
            )
            yield

    def list_events(self) -> list[Event]:
        rows = models.Event.objects.prefetch_related(_ordered_seats()).order_by("-created_at")
        return [_event_to_domain(row) for row in rows]

    def get_event(self, event_id: EventId) -> Event | None:
        row = (
            models.Event.objects.prefetch_related(_ordered_seats())
            .filter(pk=event_id.value)
            .first()
        )
        return _event_to_domain(row) if row else None

    def event_exists(self, event_id: EventId) -> bool:
        return models.Event.objects.filter(pk=event_id.value).exists()

    @transaction.atomic
    def add_event(self, event: Event) -> None:
        row = _event_to_row(event)
        row.save(force_insert=True)
        self._sync_seats(row, event.seating_layout)

    @transaction.atomic
    def save_event(self, event: Event) -> None:
        row = _event_to_row(event)
        self._sync_seats(row, event.seating_layout)
        # Saved last so post_save observers see the finished grid.
        row.save(force_update=True)

    def delete_event(self, event_id: EventId) -> None:
        row = models.Event.objects.filter(pk=event_id.value).first()
        if row is not None:
            row.delete()

    def _sync_seats(self, row: models.Event, layout: SeatingLayout | None) -> None:
        existing = {(s.row, s.column): s for s in models.Seat.objects.filter(event_id=row.pk)}
        wanted = {} if layout is None else {(s.row, s.column): s for s in layout.seats}

        stale = [s.pk for key, s in existing.items() if key not in wanted]
        if stale:
            models.Seat.objects.filter(pk__in=stale).delete()

        created, changed = [], []
        for key, seat in wanted.items():
            current = existing.get(key)
            if current is None:
                created.append(
                    models.Seat(
                        event_id=row.pk,
                        row=seat.row,
                        column=seat.column,
                        tier=seat.tier.value,
                        available=seat.available,
                        price=seat.price.amount,
                    )
                )
            elif (current.tier, current.available, Money.of(current.price)) != (
                seat.tier.value,
                seat.available,
                seat.price,
            ):
                current.tier = seat.tier.value
                current.available = seat.available
                current.price = seat.price.amount
                changed.append(current)
        if created:
            models.Seat.objects.bulk_create(created)
        if changed:
            models.Seat.objects.bulk_update(changed, ["tier", "available", "price"])

    def add_booking(self, booking: Booking) -> None:
        try:
            with transaction.atomic():
                row = models.Booking.objects.create(
                    id=booking.id.value,
                    event_id=booking.event_id.value,
                    event_name=booking.event_name,
                    purchaser_name=booking.purchaser_name,
                    purchaser_email=booking.purchaser_email,
                    total_amount=booking.total_amount.amount,
                    status=booking.status.value,
                    created_at=booking.created_at,
                    cancelled_at=booking.cancelled_at,
                )
                models.BookingSeat.objects.bulk_create(
                    [
                        models.BookingSeat(
                            booking=row,
                            event_id=booking.event_id.value,
                            row=seat_id.row,
                            column=seat_id.column,
                            active=booking.is_confirmed,
                        )
                        for seat_id in booking.seat_ids
                    ]
                )
        except IntegrityError as exc:
            raise SeatUnavailableError(str(s) for s in booking.seat_ids) from exc

    @transaction.atomic
    def save_booking(self, booking: Booking) -> None:
        models.Booking.objects.filter(pk=booking.id.value).update(
            status=booking.status.value,
            cancelled_at=booking.cancelled_at,
        )
        models.BookingSeat.objects.filter(booking_id=booking.id.value).update(
            active=booking.is_confirmed
        )

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        row = (
            models.Booking.objects.prefetch_related("seats")
            .filter(pk=booking_id.value)
            .first()
        )
        return _booking_to_domain(row) if row else None

    def list_bookings(self, purchaser_email: str | None = None) -> list[Booking]:
        rows = models.Booking.objects.prefetch_related("seats").order_by("-created_at")
        if purchaser_email is not None:
            rows = rows.filter(purchaser_email__iexact=purchaser_email)
        return [_booking_to_domain(row) for row in rows]

    def held_seats(self, event_id: EventId) -> frozenset[SeatId]:
        pairs = models.BookingSeat.objects.filter(
            event_id=event_id.value, active=True
        ).values_list("row", "column")
        return frozenset(SeatId(row=r, column=c) for r, c in pairs)

    def add_intent(self, intent: PaymentIntent) -> None:
        _intent_to_row(intent).save(force_insert=True)

    def save_intent(self, intent: PaymentIntent) -> None:
        _intent_to_row(intent).save(force_update=True)

    def get_intent(self, intent_id: PaymentIntentId) -> PaymentIntent | None:
        row = models.PaymentIntent.objects.filter(pk=intent_id.value).first()
        return _intent_to_domain(row) if row else None
