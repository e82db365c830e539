class ShipTrackException(Exception):
    """Base class for engine errors"""
    def __init__(self, message, code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['code'] = self.code
        rv['success'] = False
        return rv


class NotFound(ShipTrackException):
    """Referenced booking, manifest, warehouse or location does not exist"""
    def __init__(self, message="Not found", payload=None):
        super().__init__(message, code=404, payload=payload)


class ValidationError(ShipTrackException):
    """Non-positive quantity, missing name and similar input errors"""
    def __init__(self, message="Invalid data", payload=None):
        super().__init__(message, code=400, payload=payload)


class InsufficientInventory(ShipTrackException):
    """Outbound asks for more than is on hand"""
    def __init__(self, location_id, item_id, available, requested):
        message = (f"Insufficient inventory for item {item_id} at location {location_id}: "
                   f"available {available}, requested {requested}")
        payload = {
            'location_id': location_id,
            'item_id': item_id,
            'available': available,
            'requested': requested,
        }
        super().__init__(message, code=400, payload=payload)


class ResourceBusy(ShipTrackException):
    """A lock on the booking set or inventory key could not be taken in time"""
    def __init__(self, message="Resource busy, try again", payload=None):
        super().__init__(message, code=409, payload=payload)
