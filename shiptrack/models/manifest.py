from sqlalchemy.ext.mutable import MutableList
from shiptrack.extensions import db
from .base import BaseModel
from .status import ManifestStatus


class Manifest(BaseModel):
    """
    Transit manifest (OGPL): the bookings loaded for one vehicle movement.
    lr_ids is ordered and authoritative for which bookings are on board.
    """
    __tablename__ = 'manifests'

    ogpl_no = db.Column(db.String(32), unique=True, index=True)
    status = db.Column(db.String(20), default=ManifestStatus.CREATED, nullable=False, index=True)
    lr_ids = db.Column(MutableList.as_mutable(db.JSON), default=list, nullable=False)

    vehicle_number = db.Column(db.String(32))
    driver_name = db.Column(db.String(64))
    from_branch_id = db.Column(db.Integer)
    to_branch_id = db.Column(db.Integer)
    remark = db.Column(db.String(255))
    # Any other caller supplied fields, passed through untouched
    meta = db.Column(db.JSON)

    def __repr__(self):
        return f'<Manifest {self.ogpl_no} {self.status}>'
