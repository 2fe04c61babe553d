from boxoffice.services.booking_service import BookingService, Checkout
from boxoffice.services.catalog_service import CatalogService
from boxoffice.services.inventory_service import InventoryService
from boxoffice.services.payment_service import PaymentService

__all__ = [
    "BookingService",
    "CatalogService",
    "Checkout",
    "InventoryService",
    "PaymentService",
]
