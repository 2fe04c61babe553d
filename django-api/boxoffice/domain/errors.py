"""Domain error codes for the box office."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    LOCKED = "LOCKED"
    CONFLICT = "CONFLICT"
    SEAT_UNAVAILABLE = "SEAT_UNAVAILABLE"
    INVALID_TIER = "INVALID_TIER"
    EMPTY_SELECTION = "EMPTY_SELECTION"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    SEAT_NOT_FOUND = "SEAT_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    PAYMENT_INTENT_NOT_FOUND = "PAYMENT_INTENT_NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_BOOKING_ID = "INVALID_BOOKING_ID"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when input is malformed. Carries every violated field."""

    def __init__(self, fields: Mapping[str, Iterable[str]]) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message="Invalid fields: " + ", ".join(sorted(fields)),
        )
        self.fields = {name: list(problems) for name, problems in fields.items()}


class LockedError(DomainError):
    """Raised when pricing or layout is edited after the first booking."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.LOCKED,
            message="Pricing and seating layout are locked once bookings exist",
        )
        self.event_id = event_id


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.CONFLICT, message=message)


class SeatUnavailableError(DomainError):
    """Raised when one or more requested seats cannot be allocated."""

    def __init__(self, seat_ids: Iterable[str]) -> None:
        self.seat_ids = sorted(seat_ids)
        super().__init__(
            code=ErrorCode.SEAT_UNAVAILABLE,
            message="Seats not available: " + ", ".join(self.seat_ids),
        )


class InvalidTierError(DomainError):
    """Raised when a tier is not recognized or not priced for the event."""

    def __init__(self, tier: str) -> None:
        super().__init__(code=ErrorCode.INVALID_TIER, message=f"Invalid tier: {tier}")
        self.tier = tier


class EmptySelectionError(DomainError):
    """Raised when no seats are selected."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.EMPTY_SELECTION, message="No seats selected")


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class SeatNotFoundError(DomainError):
    """Raised when a seat does not exist in the event's layout."""

    def __init__(self, seat_id: str) -> None:
        super().__init__(code=ErrorCode.SEAT_NOT_FOUND, message=f"Seat {seat_id} not found")
        self.seat_id = seat_id


class BookingNotFoundError(DomainError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id


class PaymentIntentNotFoundError(DomainError):
    def __init__(self, intent_id: str) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_INTENT_NOT_FOUND,
            message="Payment intent not found",
        )
        self.intent_id = intent_id


class InvalidStateError(DomainError):
    """Raised on a transition the current state does not allow."""

    def __init__(self, current: str, attempted: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATE,
            message=f"Cannot {attempted} from state {current}",
        )
        self.current = current


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidBookingIdError(DomainError):
    """Raised when a booking ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_BOOKING_ID,
            message="Invalid booking ID format",
        )
