from boxoffice.handlers.views import (
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

__all__ = [
    "BookingCancelView",
    "BookingDetailView",
    "BookingListView",
    "EventDetailView",
    "EventLayoutView",
    "EventListView",
    "PaymentIntentAbandonView",
    "PaymentIntentConfirmView",
    "PaymentIntentDetailView",
    "PaymentIntentListView",
    "SeatBulkTierView",
    "SeatCycleView",
    "SeatListView",
    "SeatTierView",
]
