"""Two-phase checkout: reserve an intent, let an external processor
authorize payment, then commit the booking.

Intents do not hold seats. The commit re-runs every allocation check and
fails the intent when the seats were taken or repriced in the meantime; the
caller is then expected to void the authorization.
"""

import logging
from collections.abc import Sequence
from dataclasses import replace
from uuid import uuid4

from boxoffice.domain import Booking, PaymentIntent, PaymentIntentId, PaymentIntentStatus
from boxoffice.domain.errors import (
    DomainError,
    InvalidStateError,
    PaymentIntentNotFoundError,
)
from boxoffice.services.booking_service import BookingService
from boxoffice.services.catalog_service import Clock, utcnow
from boxoffice.stores.interfaces import BoxOfficeStore

logger = logging.getLogger(__name__)


class PaymentService:
    def __init__(
        self,
        store: BoxOfficeStore,
        bookings: BookingService | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._store = store
        self._clock = clock
        self._bookings = bookings or BookingService(store, clock=clock)

    def _require(self, intent_id: str) -> PaymentIntent:
        try:
            iid = PaymentIntentId.from_string(str(intent_id))
        except ValueError:
            raise PaymentIntentNotFoundError(str(intent_id)) from None
        intent = self._store.get_intent(iid)
        if intent is None:
            raise PaymentIntentNotFoundError(str(iid))
        return intent

    def get_intent(self, intent_id: str) -> PaymentIntent:
        return self._require(intent_id)

    def create_intent(
        self,
        event_id: str,
        purchaser_name: str,
        purchaser_email: str,
        seat_ids: Sequence[str],
    ) -> PaymentIntent:
        """Price a bookable selection and record the amount to authorize."""
        checkout = self._bookings.quote(event_id, purchaser_name, purchaser_email, seat_ids)
        intent = PaymentIntent(
            id=PaymentIntentId(value=uuid4()),
            event_id=checkout.event.id,
            purchaser_name=checkout.purchaser_name,
            purchaser_email=checkout.purchaser_email,
            seat_ids=checkout.seat_ids,
            amount=checkout.total,
            status=PaymentIntentStatus.PENDING,
            created_at=self._clock(),
        )
        self._store.add_intent(intent)
        logger.info("Payment intent %s opened for %s", intent.id, intent.amount)
        return intent

    def confirm_intent(self, intent_id: str, authorization_ref: str) -> Booking:
        """Commit the booking for an authorized intent.

        Raises:
            InvalidStateError: If the intent is no longer pending.
            SeatUnavailableError: If a seat was taken since the intent was opened.
            ConflictError: If the seat prices no longer match the authorized amount.
        """
        intent = self._require(intent_id)
        failure: DomainError | None = None
        with self._store.lock_event(intent.event_id):
            intent = self._require(intent_id)
            if intent.status is not PaymentIntentStatus.PENDING:
                raise InvalidStateError(intent.status.value, "confirm")
            try:
                booking = self._bookings.create_booking(
                    str(intent.event_id),
                    intent.purchaser_name,
                    intent.purchaser_email,
                    [str(s) for s in intent.seat_ids],
                    expected_total=intent.amount,
                )
            except DomainError as exc:
                failure = exc
                self._store.save_intent(
                    replace(
                        intent,
                        status=PaymentIntentStatus.FAILED,
                        authorization_ref=authorization_ref,
                    )
                )
            else:
                self._store.save_intent(
                    replace(
                        intent,
                        status=PaymentIntentStatus.SUCCEEDED,
                        authorization_ref=authorization_ref,
                        booking_id=booking.id,
                    )
                )
        if failure is not None:
            logger.warning("Payment intent %s failed: %s", intent.id, failure)
            raise failure
        logger.info("Payment intent %s settled as booking %s", intent.id, booking.id)
        return booking

    def abandon_intent(self, intent_id: str) -> PaymentIntent:
        """Close a pending intent whose payment was declined or given up."""
        intent = self._require(intent_id)
        with self._store.lock_event(intent.event_id):
            intent = self._require(intent_id)
            if intent.status is not PaymentIntentStatus.PENDING:
                raise InvalidStateError(intent.status.value, "abandon")
            abandoned = replace(intent, status=PaymentIntentStatus.ABANDONED)
            self._store.save_intent(abandoned)
        return abandoned
