"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to handlers.errors.exception_handler
- Never contain business logic
- Never expose internal error details
"""

from django.conf import settings
from django.core.cache import cache
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAdminUser, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from boxoffice import cache_keys
from boxoffice.domain.errors import BookingNotFoundError, PaymentIntentNotFoundError
from boxoffice.handlers.serializers import (
    BookingInputSerializer,
    BookingSerializer,
    ConfirmIntentSerializer,
    EventInputSerializer,
    EventPatchSerializer,
    EventSerializer,
    LayoutInputSerializer,
    PaymentIntentSerializer,
    SeatSerializer,
    TierInputSerializer,
)
from boxoffice.services import BookingService, CatalogService, InventoryService, PaymentService
from boxoffice.services.catalog_service import parse_event_id
from boxoffice.stores.django_store import DjangoStore


def catalog_service() -> CatalogService:
    return CatalogService(DjangoStore())


def inventory_service() -> InventoryService:
    return InventoryService(DjangoStore())


def booking_service() -> BookingService:
    return BookingService(DjangoStore())


def payment_service() -> PaymentService:
    return PaymentService(DjangoStore())


class PublicReadMixin:
    """Anyone may read; only staff may write."""

    def get_permissions(self):
        if self.request.method in ("GET", "HEAD", "OPTIONS"):
            return [AllowAny()]
        return [IsAdminUser()]


class EventListView(PublicReadMixin, APIView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        data = cache.get(cache_keys.EVENT_LIST)
        if data is None:
            data = EventSerializer(catalog_service().list_events(), many=True).data
            cache.set(cache_keys.EVENT_LIST, data, settings.CATALOG_CACHE_TTL)
        return Response({"data": data})

    def post(self, request: Request) -> Response:
        serializer = EventInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = catalog_service().create_event(**serializer.validated_data)
        return Response({"data": EventSerializer(entry).data}, status=status.HTTP_201_CREATED)


class EventDetailView(PublicReadMixin, APIView):
    """Handler for GET/PATCH/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        key = cache_keys.event_detail(parse_event_id(event_id))
        data = cache.get(key)
        if data is None:
            data = EventSerializer(catalog_service().get_event(event_id)).data
            cache.set(key, data, settings.CATALOG_CACHE_TTL)
        return Response({"data": data})

    def patch(self, request: Request, event_id: str) -> Response:
        serializer = EventPatchSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        entry = catalog_service().update_event(event_id, serializer.validated_data)
        return Response({"data": EventSerializer(entry).data})

    def delete(self, request: Request, event_id: str) -> Response:
        catalog_service().delete_event(event_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventLayoutView(APIView):
    """Handler for POST /api/events/{event_id}/layout"""

    permission_classes = [IsAdminUser]

    def post(self, request: Request, event_id: str) -> Response:
        serializer = LayoutInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        inventory_service().generate_layout(event_id, **serializer.validated_data)
        entry = catalog_service().get_event(event_id)
        return Response({"data": EventSerializer(entry).data}, status=status.HTTP_201_CREATED)


class SeatListView(APIView):
    """Handler for GET /api/events/{event_id}/seats"""

    permission_classes = [AllowAny]

    def get(self, request: Request, event_id: str) -> Response:
        key = cache_keys.event_seats(parse_event_id(event_id))
        data = cache.get(key)
        if data is None:
            data = SeatSerializer(inventory_service().list_seats(event_id), many=True).data
            cache.set(key, data, settings.CATALOG_CACHE_TTL)
        return Response({"data": data})


class SeatBulkTierView(APIView):
    """Handler for PUT /api/events/{event_id}/seats/tier"""

    permission_classes = [IsAdminUser]

    def put(self, request: Request, event_id: str) -> Response:
        serializer = TierInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = inventory_service().bulk_assign_tier(event_id, serializer.validated_data["tier"])
        return Response({"data": SeatSerializer(event.seating_layout.seats, many=True).data})


class SeatTierView(APIView):
    """Handler for PUT /api/events/{event_id}/seats/{seat_id}/tier"""

    permission_classes = [IsAdminUser]

    def put(self, request: Request, event_id: str, seat_id: str) -> Response:
        serializer = TierInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        seat = inventory_service().assign_tier(
            event_id, seat_id, serializer.validated_data["tier"]
        )
        return Response({"data": SeatSerializer(seat).data})


class SeatCycleView(APIView):
    """Handler for POST /api/events/{event_id}/seats/{seat_id}/cycle"""

    permission_classes = [IsAdminUser]

    def post(self, request: Request, event_id: str, seat_id: str) -> Response:
        seat = inventory_service().cycle_tier(event_id, seat_id)
        return Response({"data": SeatSerializer(seat).data})


def _purchaser(request: Request, payload: dict) -> tuple[str, str]:
    """Fill purchaser details the client left blank from the signed-in account."""
    user = request.user
    name = payload["purchaserName"] or user.get_full_name() or user.get_username()
    email = payload["purchaserEmail"] or user.email
    return name, email


def _owns(request: Request, purchaser_email: str) -> bool:
    """Staff see everything; customers only what was bought under their email."""
    if request.user.is_staff:
        return True
    email = (request.user.email or "").lower()
    return bool(email) and purchaser_email.lower() == email


class BookingListView(APIView):
    """Handler for GET/POST /api/bookings

    Staff may list every booking (optionally ``?email=``); everyone else
    sees the bookings made under their own account email.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        if request.user.is_staff:
            email = request.query_params.get("email") or None
        else:
            email = request.user.email or ""
        records = booking_service().list_bookings(email)
        return Response({"data": BookingSerializer(records, many=True).data})

    def post(self, request: Request) -> Response:
        serializer = BookingInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload = serializer.validated_data
        booking = booking_service().create_booking(
            payload["eventId"],
            *_purchaser(request, payload),
            payload["seatIds"],
        )
        return Response(
            {"bookingId": str(booking.id), "totalAmount": booking.total_amount.amount},
            status=status.HTTP_201_CREATED,
        )


class BookingDetailView(APIView):
    """Handler for GET /api/bookings/{booking_id}"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, booking_id: str) -> Response:
        record = booking_service().get_booking(booking_id)
        if not _owns(request, record.booking.purchaser_email):
            raise BookingNotFoundError(booking_id)
        return Response({"data": BookingSerializer(record).data})


class BookingCancelView(APIView):
    """Handler for POST /api/bookings/{booking_id}/cancel"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, booking_id: str) -> Response:
        service = booking_service()
        if not _owns(request, service.get_booking(booking_id).booking.purchaser_email):
            raise BookingNotFoundError(booking_id)
        service.cancel_booking(booking_id)
        return Response({"success": True})


def _owned_intent(request: Request, service: PaymentService, intent_id: str):
    intent = service.get_intent(intent_id)
    if not _owns(request, intent.purchaser_email):
        raise PaymentIntentNotFoundError(intent_id)
    return intent


class PaymentIntentListView(APIView):
    """Handler for POST /api/payments/intents"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        serializer = BookingInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload = serializer.validated_data
        intent = payment_service().create_intent(
            payload["eventId"],
            *_purchaser(request, payload),
            payload["seatIds"],
        )
        return Response(PaymentIntentSerializer(intent).data, status=status.HTTP_201_CREATED)


class PaymentIntentDetailView(APIView):
    """Handler for GET /api/payments/intents/{intent_id}"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, intent_id: str) -> Response:
        intent = _owned_intent(request, payment_service(), intent_id)
        return Response(PaymentIntentSerializer(intent).data)


class PaymentIntentConfirmView(APIView):
    """Handler for POST /api/payments/intents/{intent_id}/confirm

    Called once the external processor has authorized the amount.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, intent_id: str) -> Response:
        serializer = ConfirmIntentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = payment_service()
        _owned_intent(request, service, intent_id)
        booking = service.confirm_intent(
            intent_id, serializer.validated_data["authorizationRef"]
        )
        return Response({"bookingId": str(booking.id), "totalAmount": booking.total_amount.amount})


class PaymentIntentAbandonView(APIView):
    """Handler for POST /api/payments/intents/{intent_id}/abandon"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, intent_id: str) -> Response:
        service = payment_service()
        _owned_intent(request, service, intent_id)
        intent = service.abandon_intent(intent_id)
        return Response(PaymentIntentSerializer(intent).data)
