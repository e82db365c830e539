# Imported in dependency order
from .base import BaseModel
from .status import BookingStatus, WarehouseStatus, LoadingStatus, ManifestStatus, MoveType
from .warehouse import Warehouse, Location, InventoryRecord, StockMovement
from .booking import Booking
from .manifest import Manifest
