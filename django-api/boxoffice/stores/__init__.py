from boxoffice.stores.interfaces import BookingStore, BoxOfficeStore, EventStore, PaymentIntentStore
from boxoffice.stores.memory_store import InMemoryStore

__all__ = [
    "BookingStore",
    "BoxOfficeStore",
    "EventStore",
    "InMemoryStore",
    "PaymentIntentStore",
]
