"""
Repository over a SQLAlchemy session.

Services receive a Store instead of reaching for global query objects, so
the same engine code runs against the request session, a test session or
any other session factory.
"""
from shiptrack.extensions import db
from shiptrack.exceptions import NotFound
from shiptrack.models import Booking, Manifest, Warehouse, Location, InventoryRecord, StockMovement


class Store:

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    # -- generic

    def add(self, entity):
        self.session.add(entity)
        return entity

    def _get(self, model, entity_id, for_update=False):
        if entity_id is None:
            return None
        try:
            entity_id = int(entity_id)
        except (TypeError, ValueError):
            return None
        if for_update:
            # Bypass the identity map so a row read under a lock is current
            return self.session.get(model, entity_id, populate_existing=True, with_for_update=True)
        return self.session.get(model, entity_id)

    def _require(self, model, entity_id, label, for_update=False):
        entity = self._get(model, entity_id, for_update)
        if entity is None:
            raise NotFound(f'{label} {entity_id} not found', payload={'id': entity_id})
        return entity

    # -- bookings

    def get_booking(self, booking_id, for_update=False):
        return self._get(Booking, booking_id, for_update)

    def require_booking(self, booking_id, for_update=False):
        return self._require(Booking, booking_id, 'Booking', for_update)

    def list_bookings(self, status=None):
        query = self.session.query(Booking)
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.id.asc()).all()

    def count_bookings_by_status(self):
        rows = (self.session.query(Booking.status, db.func.count(Booking.id))
                .group_by(Booking.status).all())
        return {status: count for status, count in rows}

    # -- manifests

    def get_manifest(self, manifest_id):
        return self._get(Manifest, manifest_id)

    def require_manifest(self, manifest_id, for_update=False):
        return self._require(Manifest, manifest_id, 'OGPL', for_update)

    def list_manifests(self, status=None):
        query = self.session.query(Manifest)
        if status:
            query = query.filter(Manifest.status == status)
        return query.order_by(Manifest.id.asc()).all()

    # -- warehouses and locations

    def get_warehouse(self, warehouse_id):
        return self._get(Warehouse, warehouse_id)

    def require_warehouse(self, warehouse_id):
        return self._require(Warehouse, warehouse_id, 'Warehouse')

    def list_warehouses(self):
        return self.session.query(Warehouse).order_by(Warehouse.id.asc()).all()

    def get_location(self, location_id):
        return self._get(Location, location_id)

    def require_location(self, location_id):
        return self._require(Location, location_id, 'Location')

    def list_locations(self, warehouse_id=None):
        query = self.session.query(Location)
        if warehouse_id is not None:
            query = query.filter(Location.warehouse_id == warehouse_id)
        return query.order_by(Location.id.asc()).all()

    # -- inventory

    def find_inventory(self, location_id, item_id, for_update=False):
        query = self.session.query(InventoryRecord).filter(
            InventoryRecord.location_id == location_id,
            InventoryRecord.item_id == item_id,
        )
        if for_update:
            query = query.populate_existing().with_for_update()
        return query.first()

    def location_total(self, location_id):
        total = (self.session.query(db.func.sum(InventoryRecord.quantity))
                 .filter(InventoryRecord.location_id == location_id).scalar())
        return int(total or 0)

    def item_total(self, item_id):
        total = (self.session.query(db.func.sum(InventoryRecord.quantity))
                 .filter(InventoryRecord.item_id == item_id).scalar())
        return int(total or 0)

    def list_movements(self, location_id=None, item_id=None, limit=100):
        query = self.session.query(StockMovement)
        if location_id is not None:
            query = query.filter(StockMovement.location_id == location_id)
        if item_id is not None:
            query = query.filter(StockMovement.item_id == item_id)
        return query.order_by(StockMovement.id.desc()).limit(limit).all()
