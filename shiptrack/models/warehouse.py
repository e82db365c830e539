from datetime import datetime
from shiptrack.extensions import db
from .base import BaseModel
from .status import INVENTORY_AVAILABLE

NAME_LENGTH = 64
ITEM_ID_LENGTH = 64


class Warehouse(BaseModel):
    """Warehouse"""
    __tablename__ = 'warehouses'

    name = db.Column(db.String(NAME_LENGTH), nullable=False)
    branch_id = db.Column(db.Integer)
    address = db.Column(db.String(255), default='')
    city = db.Column(db.String(64), default='')
    status = db.Column(db.String(20), default='active')


class Location(BaseModel):
    """Storage slot inside a warehouse (bin, rack, shelf, floor)"""
    __tablename__ = 'warehouse_locations'

    warehouse_id = db.Column(db.Integer, db.ForeignKey('warehouses.id'), nullable=False, index=True)
    name = db.Column(db.String(NAME_LENGTH), nullable=False)
    type = db.Column(db.String(20), default='bin')
    capacity = db.Column(db.Integer, nullable=True)

    warehouse = db.relationship('Warehouse', backref='locations')


class InventoryRecord(BaseModel):
    """
    Quantity of one item at one location. Created lazily on first inbound
    and never deleted; zero is a valid resting state.
    """
    __tablename__ = 'inventory_records'
    __table_args__ = (
        db.UniqueConstraint('location_id', 'item_id', name='uq_inventory_location_item'),
    )

    location_id = db.Column(db.Integer, db.ForeignKey('warehouse_locations.id'), nullable=False, index=True)
    item_id = db.Column(db.String(ITEM_ID_LENGTH), nullable=False, index=True)
    quantity = db.Column(db.Integer, default=0, nullable=False)
    status = db.Column(db.String(20), default=INVENTORY_AVAILABLE)
    last_moved_at = db.Column(db.DateTime, default=datetime.utcnow)

    location = db.relationship('Location')


class StockMovement(BaseModel):
    """
    Inventory movement ledger, one row per touched location. Both legs of a
    transfer share a transaction code.
    """
    __tablename__ = 'stock_movements'

    transaction_code = db.Column(db.String(32), index=True)
    move_type = db.Column(db.String(20))

    location_id = db.Column(db.Integer, db.ForeignKey('warehouse_locations.id'), index=True)
    item_id = db.Column(db.String(ITEM_ID_LENGTH), index=True)
    booking_id = db.Column(db.Integer, nullable=True)

    qty_change = db.Column(db.Integer)  # +10, -5
    balance_after = db.Column(db.Integer)
    remark = db.Column(db.String(255))
