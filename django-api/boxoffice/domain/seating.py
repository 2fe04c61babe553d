"""Pure seat-grid operations.

Every function returns a new layout; nothing here touches storage or
locking. Callers decide whether the owning event may still be edited.
"""

from collections.abc import Iterable, Mapping
from dataclasses import replace

from boxoffice.domain.errors import SeatNotFoundError, ValidationError
from boxoffice.domain.models import Seat, SeatingLayout, TierPrice
from boxoffice.domain.pricing import price_for_tier
from boxoffice.domain.value_objects import SeatId, Tier

MAX_ROWS = 100
MAX_COLUMNS = 100


def layout_errors(rows: object, columns: object) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for name, value, limit in (("rows", rows, MAX_ROWS), ("columns", columns, MAX_COLUMNS)):
        if isinstance(value, bool) or not isinstance(value, int):
            errors[name] = ["Must be an integer."]
        elif value < 1:
            errors[name] = ["Must be at least 1."]
        elif value > limit:
            errors[name] = [f"Must be at most {limit}."]
    return errors


def generate_layout(rows: int, columns: int) -> SeatingLayout:
    """Build a rows x columns grid of blocked, unpriced seats."""
    errors = layout_errors(rows, columns)
    if errors:
        raise ValidationError(errors)
    seats = tuple(
        Seat(id=SeatId(row=r, column=c))
        for r in range(1, rows + 1)
        for c in range(1, columns + 1)
    )
    return SeatingLayout(rows=rows, columns=columns, seats=seats)


def _painted(seat: Seat, tier: Tier, pricing: Mapping[Tier, TierPrice]) -> Seat:
    return replace(
        seat,
        tier=tier,
        available=not tier.is_blocked,
        price=price_for_tier(pricing, tier),
    )


def assign_tier(
    layout: SeatingLayout,
    seat_id: SeatId,
    tier: Tier,
    pricing: Mapping[Tier, TierPrice],
) -> SeatingLayout:
    """Repaint one seat, freezing the current tier price onto it."""
    current = layout.seat(seat_id)
    if current is None:
        raise SeatNotFoundError(str(seat_id))
    painted = _painted(current, tier, pricing)
    seats = tuple(painted if s.id == seat_id else s for s in layout.seats)
    return replace(layout, seats=seats)


def bulk_assign_tier(
    layout: SeatingLayout,
    tier: Tier,
    pricing: Mapping[Tier, TierPrice],
) -> SeatingLayout:
    price = price_for_tier(pricing, tier)
    seats = tuple(
        replace(s, tier=tier, available=not tier.is_blocked, price=price)
        for s in layout.seats
    )
    return replace(layout, seats=seats)


def is_bookable(
    layout: SeatingLayout | None,
    seat_id: SeatId,
    held: frozenset[SeatId] = frozenset(),
) -> bool:
    if layout is None:
        return False
    seat = layout.seat(seat_id)
    return (
        seat is not None
        and not seat.tier.is_blocked
        and seat.available
        and seat_id not in held
    )


def set_availability(
    layout: SeatingLayout, seat_ids: Iterable[SeatId], available: bool
) -> SeatingLayout:
    """Flip ``available`` on the given seats. Blocked seats stay unavailable."""
    targets = set(seat_ids)
    seats = tuple(
        replace(s, available=available and not s.tier.is_blocked) if s.id in targets else s
        for s in layout.seats
    )
    return replace(layout, seats=seats)
