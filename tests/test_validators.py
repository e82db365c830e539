import pytest

from shiptrack.exceptions import ValidationError
from shiptrack.utils.validators import parse_id_list, require_name, require_positive_quantity


def test_parse_id_list():
    assert parse_id_list([1, '2']) == [1, 2]
    assert parse_id_list('3, 4,') == [3, 4]
    assert parse_id_list([]) == []


@pytest.mark.parametrize('value', [None, 5, ['x'], [None]])
def test_parse_id_list_rejects(value):
    with pytest.raises(ValidationError):
        parse_id_list(value)


def test_require_positive_quantity():
    assert require_positive_quantity(3) == 3
    for bad in (0, -1, 2.0, '3', False):
        with pytest.raises(ValidationError):
            require_positive_quantity(bad)


def test_require_name_strips():
    assert require_name('  A1 ') == 'A1'
    with pytest.raises(ValidationError) as exc:
        require_name('', 'Item id')
    assert exc.value.message == 'Item id required'


def test_require_name_max_length():
    assert require_name(' ABC ', max_length=3) == 'ABC'
    with pytest.raises(ValidationError) as exc:
        require_name('ABCD', 'Item id', max_length=3)
    assert exc.value.message == 'Item id must be at most 3 characters'
