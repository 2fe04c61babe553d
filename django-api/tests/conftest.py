"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from boxoffice.services import BookingService, CatalogService, InventoryService, PaymentService
from boxoffice.stores import InMemoryStore

NOW = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
FAR_FUTURE = "2099-06-01T19:00:00Z"


class FakeClock:
    """Deterministic clock; tests move it forward explicitly."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def catalog(store, clock) -> CatalogService:
    return CatalogService(store, clock=clock)


@pytest.fixture
def inventory(store, clock) -> InventoryService:
    return InventoryService(store, clock=clock)


@pytest.fixture
def bookings(store, clock) -> BookingService:
    return BookingService(store, clock=clock)


@pytest.fixture
def payments(store, clock, bookings) -> PaymentService:
    return PaymentService(store, bookings=bookings, clock=clock)


@pytest.fixture
def gold_event(catalog, inventory, clock) -> str:
    """A 2x2 event with every seat painted gold at 100."""
    entry = catalog.create_event(
        name="Summer Synthwave",
        date=clock.now + timedelta(days=30),
        location="Roof-top @ Downtown",
        pricing={
            "gold": {"price": 100},
            "silver": {"price": 60},
            "platinum": {"price": 150},
        },
        seating_layout={"rows": 2, "columns": 2},
    )
    event_id = str(entry.event.id)
    inventory.bulk_assign_tier(event_id, "gold")
    return event_id


@pytest.fixture
def admin_user(django_user_model):
    return django_user_model.objects.create_user(
        username="admin", email="admin@example.com", password="pw", is_staff=True
    )


@pytest.fixture
def customer(django_user_model):
    return django_user_model.objects.create_user(
        username="alice", email="alice@mail.com", password="pw", first_name="Alice"
    )


@pytest.fixture
def admin_client(admin_user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def customer_client(customer) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=customer)
    return client
