from datetime import datetime
from shiptrack.extensions import db


class BaseModel(db.Model):
    """
    Common model base: integer primary key, created/updated timestamps and a
    column based to_dict for JSON responses.
    """
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        """
        Serialise every column; columns starting with '_' are skipped and
        datetimes are rendered as ISO strings.
        """
        data = {}
        for c in self.__table__.columns:
            if c.name.startswith('_'):
                continue
            val = getattr(self, c.name)
            if isinstance(val, datetime):
                data[c.name] = val.isoformat()
            elif isinstance(val, list):
                data[c.name] = list(val)
            else:
                data[c.name] = val
        return data
