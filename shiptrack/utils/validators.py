"""
Input validators: WTForms field validators for the API forms, and plain
checks the services run before touching any state.
"""
from wtforms.validators import ValidationError as FormValidationError

from shiptrack.exceptions import ValidationError


def validate_positive_number(form, field):
    """Field must be greater than 0"""
    if field.data is not None and field.data <= 0:
        raise FormValidationError('Value must be greater than 0')


def validate_booking_ids(form, field):
    """Comma separated or list of booking ids"""
    try:
        parse_id_list(field.data)
    except ValidationError as e:
        raise FormValidationError(e.message)


def require_positive_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(f'Quantity must be a whole number, got {quantity!r}')
    if quantity <= 0:
        raise ValidationError('Quantity must be positive')
    return quantity


def require_name(name, what='Name', max_length=None):
    if name is None or not str(name).strip():
        raise ValidationError(f'{what} required')
    name = str(name).strip()
    if max_length is not None and len(name) > max_length:
        raise ValidationError(f'{what} must be at most {max_length} characters')
    return name


def parse_id_list(value):
    """Accept [1, 2], ['1', '2'] or '1,2' and return a list of ints"""
    if value is None:
        raise ValidationError('booking_ids required')
    if isinstance(value, str):
        value = [v for v in value.split(',') if v.strip()]
    if not isinstance(value, (list, tuple)):
        raise ValidationError('booking_ids must be a list')
    ids = []
    for v in value:
        try:
            ids.append(int(v))
        except (TypeError, ValueError):
            raise ValidationError(f'Invalid booking id {v!r}')
    return ids
