from flask import request
from flask_wtf import FlaskForm
from wtforms import Field, IntegerField, StringField, DecimalField
from wtforms.validators import InputRequired, Optional, Length

from shiptrack.exceptions import ValidationError
from shiptrack.utils.validators import validate_positive_number, validate_booking_ids, parse_id_list


class IdListField(Field):
    """Accepts a JSON list of ids or a comma separated string"""

    def process_formdata(self, valuelist):
        values = []
        for value in valuelist:
            if isinstance(value, str) and ',' in value:
                values.extend(v for v in value.split(',') if v.strip())
            else:
                values.append(value)
        self.data = values

    def _value(self):
        return ','.join(str(v) for v in (self.data or []))


class IntField(IntegerField):
    """IntegerField that treats JSON null like a missing value"""

    def process_formdata(self, valuelist):
        super().process_formdata([v for v in valuelist if v not in (None, '')])


class ItemField(StringField):
    """Item codes may arrive as JSON numbers"""

    def process_formdata(self, valuelist):
        if valuelist and valuelist[0] is not None:
            self.data = str(valuelist[0])


def validated(form_cls):
    """Build form_cls from the current request or raise ValidationError with its errors"""
    form = form_cls()
    if not form.validate_on_submit():
        raise ValidationError('Invalid data', payload={'errors': form.errors})
    return form


def extra_fields(form):
    """JSON keys the form does not declare"""
    payload = request.get_json(silent=True) or {}
    return {k: v for k, v in payload.items() if k not in form._fields}


# ---------------------------------------------------------------- bookings

class BookingForm(FlaskForm):
    """New booking"""
    customer_name = StringField('Customer', validators=[Optional(), Length(max=128)])
    details = StringField('Details', validators=[Optional(), Length(max=255)])
    amount = DecimalField('Amount', validators=[Optional()])
    org_id = IntField('Organization', validators=[Optional()])
    branch_id = IntField('Branch', validators=[Optional()])
    branch_code = StringField('Branch code', validators=[Optional(), Length(max=8)])


# ---------------------------------------------------------------- loading

class ManifestForm(FlaskForm):
    """New OGPL"""
    # May be empty; a loading session fills the OGPL later
    booking_ids = IdListField('Bookings', default=list, validators=[validate_booking_ids])
    vehicle_number = StringField('Vehicle', validators=[Optional(), Length(max=32)])
    driver_name = StringField('Driver', validators=[Optional(), Length(max=64)])
    from_branch_id = IntField('From branch', validators=[Optional()])
    to_branch_id = IntField('To branch', validators=[Optional()])
    remark = StringField('Remark', validators=[Optional(), Length(max=255)])

    def manifest_data(self):
        data = {name: field.data for name, field in self._fields.items()
                if name != 'booking_ids' and field.data not in (None, '')}
        data.update(extra_fields(self))
        return data


class BookingIdsForm(FlaskForm):
    booking_ids = IdListField('Bookings', validators=[InputRequired(), validate_booking_ids])

    @property
    def ids(self):
        return parse_id_list(self.booking_ids.data)


class LoadingSessionForm(BookingIdsForm):
    ogpl_id = IntField('OGPL', validators=[InputRequired()])


class ManifestStatusForm(FlaskForm):
    status = StringField('Status', validators=[InputRequired(), Length(max=20)])


# ---------------------------------------------------------------- warehouse

class WarehouseForm(FlaskForm):
    name = StringField('Name', validators=[InputRequired(), Length(max=64)])
    branch_id = IntField('Branch', validators=[Optional()])
    address = StringField('Address', validators=[Optional(), Length(max=255)])
    city = StringField('City', validators=[Optional(), Length(max=64)])
    status = StringField('Status', validators=[Optional(), Length(max=20)])


class LocationForm(FlaskForm):
    warehouse_id = IntField('Warehouse', validators=[InputRequired()])
    name = StringField('Name', validators=[InputRequired(), Length(max=64)])
    type = StringField('Type', validators=[Optional(), Length(max=20)])
    capacity = IntField('Capacity', validators=[Optional(), validate_positive_number])


class InboundForm(FlaskForm):
    """Receive stock"""
    location_id = IntField('Location', validators=[InputRequired()])
    item_id = ItemField('Item', validators=[InputRequired(), Length(max=64)])
    quantity = IntField('Quantity', validators=[InputRequired(), validate_positive_number])
    status = StringField('Status', validators=[Optional(), Length(max=20)])
    booking_id = IntField('Booking', validators=[Optional()])
    remark = StringField('Remark', validators=[Optional(), Length(max=255)])


class OutboundForm(FlaskForm):
    """Dispatch stock"""
    location_id = IntField('Location', validators=[InputRequired()])
    item_id = ItemField('Item', validators=[InputRequired(), Length(max=64)])
    quantity = IntField('Quantity', validators=[InputRequired(), validate_positive_number])
    booking_id = IntField('Booking', validators=[Optional()])
    remark = StringField('Remark', validators=[Optional(), Length(max=255)])


class TransferForm(FlaskForm):
    from_location_id = IntField('From', validators=[InputRequired()])
    to_location_id = IntField('To', validators=[InputRequired()])
    item_id = ItemField('Item', validators=[InputRequired(), Length(max=64)])
    quantity = IntField('Quantity', validators=[InputRequired(), validate_positive_number])
    remark = StringField('Remark', validators=[Optional(), Length(max=255)])
