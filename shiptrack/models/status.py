"""Shared status vocabulary for bookings, manifests and inventory."""


class BookingStatus:
    BOOKED = 'booked'
    IN_TRANSIT = 'in_transit'
    UNLOADED = 'unloaded'
    OUT_FOR_DELIVERY = 'out_for_delivery'
    DELIVERED = 'delivered'

    ALL = (BOOKED, IN_TRANSIT, UNLOADED, OUT_FOR_DELIVERY, DELIVERED)


class WarehouseStatus:
    """Orthogonal to BookingStatus, driven only by inventory moves"""
    IN_WAREHOUSE = 'in_warehouse'
    IN_TRANSIT = 'in_transit'

    ALL = (IN_WAREHOUSE, IN_TRANSIT)


class LoadingStatus:
    PENDING = 'pending'
    LOADED = 'loaded'


class ManifestStatus:
    CREATED = 'created'
    IN_TRANSIT = 'in_transit'
    UNLOADED = 'unloaded'


class MoveType:
    INBOUND = 'inbound'
    OUTBOUND = 'outbound'
    TRANSFER_OUT = 'transfer_out'
    TRANSFER_IN = 'transfer_in'


INVENTORY_AVAILABLE = 'available'
