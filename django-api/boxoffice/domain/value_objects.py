"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PaymentIntentId:
    """Unique identifier for a PaymentIntent."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class SeatId:
    """Position of a seat in its event's grid, rendered as "{row}-{column}"."""

    row: int
    column: int

    def __post_init__(self) -> None:
        if self.row < 1 or self.column < 1:
            raise ValueError("Seat row and column are 1-indexed")

    @classmethod
    def from_string(cls, value: str) -> Self:
        row, sep, column = value.partition("-")
        if not sep or not row.isdigit() or not column.isdigit():
            raise ValueError(f"Malformed seat id: {value!r}")
        return cls(row=int(row), column=int(column))

    def __str__(self) -> str:
        return f"{self.row}-{self.column}"


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def of(cls, value: Decimal | int | float | str) -> Self:
        try:
            amount = Decimal(str(value))
            if not amount.is_finite():
                raise ValueError(f"Not a monetary amount: {value!r}")
            amount = amount.quantize(Decimal("0.01"))
        except InvalidOperation as exc:
            raise ValueError(f"Not a monetary amount: {value!r}") from exc
        return cls(amount=amount)

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0.00"))

    def __add__(self, other: "Money") -> "Money":
        return Money(amount=self.amount + other.amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


class Tier(Enum):
    """Seat tier. Determines price and bookability."""

    GOLD = "gold"
    SILVER = "silver"
    PLATINUM = "platinum"
    BLOCKED = "blocked"

    @property
    def is_blocked(self) -> bool:
        return self is Tier.BLOCKED

    def next(self) -> "Tier":
        """Rotate gold -> silver -> platinum -> blocked -> gold."""
        order = list(Tier)
        return order[(order.index(self) + 1) % len(order)]


PRICED_TIERS = (Tier.GOLD, Tier.SILVER, Tier.PLATINUM)


class BookingStatus(Enum):
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"


class PaymentIntentStatus(Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ABANDONED = "abandoned"
