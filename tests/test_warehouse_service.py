import pytest

from shiptrack.exceptions import InsufficientInventory, NotFound, ValidationError
from shiptrack.models import StockMovement
from tests.conftest import get_booking


def test_inbound_creates_and_accumulates(warehouse, make_location):
    location = make_location()

    assert warehouse.inbound(location, 'ART-1', 5) == 5
    assert warehouse.inbound(location, 'ART-1', 5) == 10
    assert warehouse.get_inventory(location, 'ART-1') == 10


def test_outbound_within_stock(warehouse, make_location):
    location = make_location()
    warehouse.inbound(location, 'ART-1', 10)

    assert warehouse.outbound(location, 'ART-1', 4) == 6
    assert warehouse.get_inventory(location, 'ART-1') == 6


def test_outbound_beyond_stock_is_rejected(warehouse, make_location):
    location = make_location()
    warehouse.inbound(location, 'ART-1', 6)

    with pytest.raises(InsufficientInventory) as exc:
        warehouse.outbound(location, 'ART-1', 7)

    assert exc.value.code == 400
    assert exc.value.payload['available'] == 6
    assert exc.value.payload['requested'] == 7
    assert warehouse.get_inventory(location, 'ART-1') == 6


def test_outbound_with_no_record(warehouse, make_location):
    location = make_location()
    with pytest.raises(InsufficientInventory) as exc:
        warehouse.outbound(location, 'ART-1', 1)
    assert exc.value.payload['available'] == 0


@pytest.mark.parametrize('quantity', [0, -3, 1.5, '4', True])
def test_quantity_must_be_positive_whole_number(warehouse, make_location, quantity):
    location = make_location()
    with pytest.raises(ValidationError):
        warehouse.inbound(location, 'ART-1', quantity)
    with pytest.raises(ValidationError):
        warehouse.outbound(location, 'ART-1', quantity)
    assert warehouse.get_inventory(location, 'ART-1') == 0


def test_unknown_location(warehouse):
    with pytest.raises(NotFound):
        warehouse.inbound(404, 'ART-1', 1)
    with pytest.raises(NotFound):
        warehouse.outbound(404, 'ART-1', 1)


def test_missing_item_id(warehouse, make_location):
    with pytest.raises(ValidationError):
        warehouse.inbound(make_location(), ' ', 1)


def test_inventory_read_defaults_to_zero(warehouse, make_location):
    location = make_location()
    assert warehouse.get_inventory(location, 'NOPE') == 0
    assert warehouse.get_inventory('abc', 'NOPE') == 0
    assert warehouse.get_inventory(location, None) == 0


def test_inbound_sets_status_and_move_time(warehouse, make_location):
    location = make_location()
    warehouse.inbound(location, 'ART-1', 3, status='quarantine')
    record = warehouse.store.find_inventory(location, 'ART-1')
    assert record.status == 'quarantine'
    assert record.last_moved_at is not None


def test_booking_pointer_follows_freight(warehouse, make_booking, make_location):
    booking_id = make_booking()
    location = make_location()

    warehouse.inbound(location, 'ART-1', 2, booking_id=booking_id)
    booking = get_booking(booking_id)
    assert booking.current_warehouse_location_id == location
    assert booking.warehouse_status == 'in_warehouse'

    warehouse.outbound(location, 'ART-1', 2, booking_id=booking_id)
    booking = get_booking(booking_id)
    assert booking.current_warehouse_location_id is None
    assert booking.warehouse_status == 'in_transit'


def test_rejected_outbound_keeps_booking_pointer(warehouse, make_booking, make_location):
    booking_id = make_booking()
    location = make_location()
    warehouse.inbound(location, 'ART-1', 2, booking_id=booking_id)

    with pytest.raises(InsufficientInventory):
        warehouse.outbound(location, 'ART-1', 5, booking_id=booking_id)

    booking = get_booking(booking_id)
    assert booking.current_warehouse_location_id == location
    assert booking.warehouse_status == 'in_warehouse'


def test_unknown_booking_does_not_block_stock(warehouse, make_location):
    location = make_location()
    assert warehouse.inbound(location, 'ART-1', 3, booking_id=555) == 3
    movement = warehouse.movements(location_id=location)[0]
    assert movement.booking_id is None


def test_movements_are_recorded(warehouse, make_booking, make_location):
    booking_id = make_booking()
    location = make_location()
    warehouse.inbound(location, 'ART-1', 8, booking_id=booking_id)
    warehouse.outbound(location, 'ART-1', 3)

    latest, first = warehouse.movements(location_id=location, item_id='ART-1')
    assert first.move_type == 'inbound'
    assert first.qty_change == 8
    assert first.booking_id == booking_id
    assert latest.move_type == 'outbound'
    assert latest.qty_change == -3
    assert latest.balance_after == 5
    assert latest.transaction_code.startswith('TRX-')


def test_transfer_moves_stock(db, warehouse, make_location):
    source = make_location('A1')
    target = make_location('B1')
    warehouse.inbound(source, 'ART-1', 10)

    result = warehouse.transfer(source, target, 'ART-1', 4)

    assert result['from_quantity'] == 6
    assert result['to_quantity'] == 4
    assert warehouse.store.item_total('ART-1') == 10
    legs = db.session.query(StockMovement).filter_by(transaction_code=result['transaction_code']).all()
    assert sorted(m.move_type for m in legs) == ['transfer_in', 'transfer_out']


def test_failed_transfer_leaves_both_sides(warehouse, make_location):
    source = make_location('A1')
    target = make_location('B1')
    warehouse.inbound(source, 'ART-1', 3)
    warehouse.inbound(target, 'ART-1', 1)

    with pytest.raises(InsufficientInventory):
        warehouse.transfer(source, target, 'ART-1', 5)

    assert warehouse.get_inventory(source, 'ART-1') == 3
    assert warehouse.get_inventory(target, 'ART-1') == 1


def test_transfer_to_unknown_location_changes_nothing(warehouse, make_location):
    source = make_location()
    warehouse.inbound(source, 'ART-1', 3)

    with pytest.raises(NotFound):
        warehouse.transfer(source, 999, 'ART-1', 2)

    assert warehouse.get_inventory(source, 'ART-1') == 3


def test_transfer_to_same_location(warehouse, make_location):
    location = make_location()
    warehouse.inbound(location, 'ART-1', 3)
    with pytest.raises(ValidationError):
        warehouse.transfer(location, location, 'ART-1', 1)


def test_location_capacity(warehouse, make_location):
    location = make_location(capacity=10)
    warehouse.inbound(location, 'ART-1', 6)
    warehouse.inbound(location, 'ART-2', 4)

    with pytest.raises(ValidationError):
        warehouse.inbound(location, 'ART-1', 1)

    assert warehouse.store.location_total(location) == 10


def test_create_location_validation(warehouse):
    with pytest.raises(NotFound):
        warehouse.create_location(99, 'A1')

    hub = warehouse.create_warehouse('North Hub', city='Delhi')
    with pytest.raises(ValidationError):
        warehouse.create_location(hub.id, '')
    with pytest.raises(ValidationError):
        warehouse.create_location(hub.id, 'A1', capacity=0)

    location = warehouse.create_location(hub.id, 'A1', type='rack', capacity=50)
    assert location.type == 'rack'
    assert location.warehouse_id == hub.id


def test_create_warehouse_requires_name(warehouse):
    with pytest.raises(ValidationError):
        warehouse.create_warehouse('   ')


def test_overlong_item_id_is_rejected(warehouse, make_location):
    location = make_location()
    with pytest.raises(ValidationError):
        warehouse.inbound(location, 'X' * 65, 1)
    assert warehouse.inbound(location, 'X' * 64, 1) == 1


def test_overlong_location_name_is_rejected(warehouse):
    hub = warehouse.create_warehouse('Main Hub')
    with pytest.raises(ValidationError):
        warehouse.create_location(hub.id, 'B' * 65)
