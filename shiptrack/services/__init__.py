from .booking_service import BookingService
from .manifest_service import ManifestService
from .warehouse_service import WarehouseService
