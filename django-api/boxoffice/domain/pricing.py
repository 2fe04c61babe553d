"""Pricing resolver.

The event owns the authoritative tier price table. Seats carry a frozen copy
taken at tier assignment, and booking totals are summed from those copies so
a later edit to the table never changes the price of a selection in flight.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from boxoffice.domain.errors import (
    EmptySelectionError,
    InvalidTierError,
    ValidationError,
)
from boxoffice.domain.models import Event, TierPrice
from boxoffice.domain.value_objects import PRICED_TIERS, Money, SeatId, Tier

# Fits Seat.price, and a full 100x100 grid at this price fits Booking.total_amount.
MAX_TIER_PRICE = Money.of("999999.99")


def parse_tier(value: str | Tier) -> Tier:
    if isinstance(value, Tier):
        return value
    try:
        return Tier(str(value).lower())
    except ValueError:
        raise InvalidTierError(str(value)) from None


def price_for_tier(pricing: Mapping[Tier, TierPrice], tier: Tier) -> Money:
    if tier.is_blocked:
        return Money.zero()
    entry = pricing.get(tier)
    if entry is None:
        raise InvalidTierError(tier.value)
    return entry.price


def price_of(event: Event, tier: str | Tier) -> Money:
    """Current table price for ``tier`` on ``event``. Blocked seats cost nothing."""
    return price_for_tier(event.pricing, parse_tier(tier))


def total_for(event: Event, seat_ids: Iterable[SeatId]) -> Money:
    """Sum of the stored (frozen) price of each selected seat."""
    selection = list(seat_ids)
    if not selection:
        raise EmptySelectionError()
    layout = event.seating_layout
    total = Money.zero()
    missing = []
    for seat_id in selection:
        seat = layout.seat(seat_id) if layout is not None else None
        if seat is None:
            missing.append(str(seat_id))
            continue
        total = total + seat.price
    if missing:
        raise ValidationError({"seat_ids": [f"Unknown seat {s}." for s in missing]})
    return total


def parse_pricing(raw: object) -> tuple[Mapping[Tier, TierPrice], dict[str, list[str]]]:
    """Turn a wire-shaped ``{tier: {price, available}}`` table into domain form.

    Returns the parsed table and a field -> problems map; the table is only
    meaningful when the map is empty.
    """
    errors: dict[str, list[str]] = {}
    table: dict[Tier, TierPrice] = {}
    if not isinstance(raw, Mapping):
        return MappingProxyType(table), {"pricing": ["Must be an object keyed by tier."]}

    for key, entry in raw.items():
        name = f"pricing.{key}"
        try:
            tier = parse_tier(key)
        except InvalidTierError:
            errors[name] = ["Unknown tier."]
            continue
        if tier not in PRICED_TIERS:
            errors[name] = ["Blocked seats cannot be priced."]
            continue
        if isinstance(entry, TierPrice):
            table[tier] = entry
            continue
        if not isinstance(entry, Mapping) or "price" not in entry:
            errors[name] = ["Must provide a price."]
            continue
        price = entry["price"]
        if isinstance(price, bool):
            errors[name] = ["Price must be a number."]
            continue
        try:
            money = Money.of(price)
        except ValueError:
            errors[name] = ["Price must be a non-negative number."]
            continue
        if money.amount > MAX_TIER_PRICE.amount:
            errors[name] = [f"Price must be at most {MAX_TIER_PRICE}."]
            continue
        available = entry.get("available", True)
        if not isinstance(available, bool):
            errors[name] = ["Availability must be a boolean."]
            continue
        table[tier] = TierPrice(price=money, available=available)
    return MappingProxyType(table), errors
