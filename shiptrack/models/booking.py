from shiptrack.extensions import db
from .base import BaseModel
from .status import BookingStatus, LoadingStatus


class Booking(BaseModel):
    """
    Shipment record (LR). Business fields are opaque to the engine; only
    status, loading_status and the warehouse pointer pair are mutated by it.
    """
    __tablename__ = 'bookings'

    lr_number = db.Column(db.String(32), index=True)
    org_id = db.Column(db.Integer)
    branch_id = db.Column(db.Integer)
    customer_name = db.Column(db.String(128))
    details = db.Column(db.String(255), default='')
    amount = db.Column(db.Numeric(12, 2), default=0)

    status = db.Column(db.String(20), default=BookingStatus.BOOKED, nullable=False, index=True)
    loading_status = db.Column(db.String(20), default=LoadingStatus.PENDING)

    # Non-null only while the freight rests in a warehouse location
    current_warehouse_location_id = db.Column(db.Integer, db.ForeignKey('warehouse_locations.id'), nullable=True)
    warehouse_status = db.Column(db.String(20), nullable=True)

    current_location = db.relationship('Location')

    def to_dict(self):
        data = super().to_dict()
        if data.get('amount') is not None:
            data['amount'] = float(data['amount'])
        return data

    def __repr__(self):
        return f'<Booking {self.id} {self.status}>'
