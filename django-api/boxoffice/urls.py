from django.urls import path

from boxoffice.handlers import (
    BookingCancelView,
    BookingDetailView,
    BookingListView,
    EventDetailView,
    EventLayoutView,
    EventListView,
    PaymentIntentAbandonView,
    PaymentIntentConfirmView,
    PaymentIntentDetailView,
    PaymentIntentListView,
    SeatBulkTierView,
    SeatCycleView,
    SeatListView,
    SeatTierView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/layout", EventLayoutView.as_view(), name="event-layout"),
    path("events/<str:event_id>/seats", SeatListView.as_view(), name="seat-list"),
    path("events/<str:event_id>/seats/tier", SeatBulkTierView.as_view(), name="seat-bulk-tier"),
    path(
        "events/<str:event_id>/seats/<str:seat_id>/tier",
        SeatTierView.as_view(),
        name="seat-tier",
    ),
    path(
        "events/<str:event_id>/seats/<str:seat_id>/cycle",
        SeatCycleView.as_view(),
        name="seat-cycle",
    ),
    path("bookings", BookingListView.as_view(), name="booking-list"),
    path("bookings/<str:booking_id>", BookingDetailView.as_view(), name="booking-detail"),
    path(
        "bookings/<str:booking_id>/cancel",
        BookingCancelView.as_view(),
        name="booking-cancel",
    ),
    path("payments/intents", PaymentIntentListView.as_view(), name="intent-list"),
    path(
        "payments/intents/<str:intent_id>",
        PaymentIntentDetailView.as_view(),
        name="intent-detail",
    ),
    path(
        "payments/intents/<str:intent_id>/confirm",
        PaymentIntentConfirmView.as_view(),
        name="intent-confirm",
    ),
    path(
        "payments/intents/<str:intent_id>/abandon",
        PaymentIntentAbandonView.as_view(),
        name="intent-abandon",
    ),
]
