"""Warehouse inventory engine: receive, dispatch and transfer stock"""
import uuid
from datetime import datetime

from flask import current_app

from shiptrack.exceptions import InsufficientInventory, ValidationError
from shiptrack.models import (
    Warehouse, Location, InventoryRecord, StockMovement,
    MoveType, WarehouseStatus,
)
from shiptrack.models.status import INVENTORY_AVAILABLE
from shiptrack.models.warehouse import ITEM_ID_LENGTH, NAME_LENGTH
from shiptrack.store import Store
from shiptrack.utils.locks import booking_locks, inventory_locks
from shiptrack.utils.unit_of_work import UnitOfWork
from shiptrack.utils.validators import require_name, require_positive_quantity


class WarehouseService:
    """
    Quantity on hand per (location, item), plus the warehouse pointer on
    bookings whose freight is received or dispatched.

    Every mutation of a (location, item) key runs under that key's lock and
    reads the record with SELECT ... FOR UPDATE, so the outbound
    sufficiency check and the subtraction are never interleaved with
    another movement on the same key.

    Booking pointer updates ride in the same transaction as the stock
    change when the booking exists. An unknown booking id does not block
    the stock movement; it is logged and skipped.
    """

    def __init__(self, store=None):
        self.store = store or Store()

    @staticmethod
    def generate_transaction_code():
        return f"TRX-{uuid.uuid4().hex[:8].upper()}"

    @staticmethod
    def _lock_timeout():
        return current_app.config.get('LOCK_TIMEOUT')

    # ------------------------------------------------------------------
    # Registration

    def create_warehouse(self, name, branch_id=None, address='', city='', status='active'):
        name = require_name(name, max_length=NAME_LENGTH)
        warehouse = Warehouse(name=name, branch_id=branch_id, address=address or '',
                              city=city or '', status=status or 'active')
        self.store.add(warehouse)
        self.store.session.commit()
        current_app.logger.info(f'Warehouse {warehouse.id} "{warehouse.name}" registered')
        return warehouse

    def create_location(self, warehouse_id, name, type='bin', capacity=None):
        warehouse = self.store.require_warehouse(warehouse_id)
        name = require_name(name, max_length=NAME_LENGTH)
        if capacity is not None:
            capacity = require_positive_quantity(capacity)
        location = Location(warehouse_id=warehouse.id, name=name, type=type or 'bin', capacity=capacity)
        self.store.add(location)
        self.store.session.commit()
        current_app.logger.info(f'Location {location.id} "{location.name}" added to warehouse {warehouse.id}')
        return location

    # ------------------------------------------------------------------
    # Helpers

    @staticmethod
    def _normalise_item(item_id):
        return require_name(item_id, 'Item id', max_length=ITEM_ID_LENGTH)

    @staticmethod
    def _booking_lock_keys(booking_id):
        if booking_id is None:
            return []
        try:
            return [('booking', int(booking_id))]
        except (TypeError, ValueError):
            return []

    def _lock_keys(self, location, item_id):
        keys = [(location.id, item_id)]
        # Capacity is a whole-location limit, so hold the location too
        if location.capacity is not None:
            keys.append(('location', location.id))
        return keys

    def _check_capacity(self, location, quantity):
        if location.capacity is None:
            return
        on_hand = self.store.location_total(location.id)
        if on_hand + quantity > location.capacity:
            raise ValidationError(
                f'Location {location.id} capacity exceeded: {on_hand} on hand, '
                f'{quantity} incoming, capacity {location.capacity}',
                payload={'location_id': location.id, 'capacity': location.capacity, 'on_hand': on_hand},
            )

    def _credit(self, uow, location, item_id, quantity, status, now):
        record = self.store.find_inventory(location.id, item_id, for_update=True)
        if record is None:
            record = uow.add(InventoryRecord(
                location_id=location.id,
                item_id=item_id,
                quantity=0,
                status=status or INVENTORY_AVAILABLE,
                last_moved_at=now,
            ))
        else:
            uow.record(record, 'quantity', 'status', 'last_moved_at')
        record.quantity = (record.quantity or 0) + quantity
        record.last_moved_at = now
        if status:
            record.status = status
        return record

    def _debit(self, uow, location, item_id, quantity, now):
        record = self.store.find_inventory(location.id, item_id, for_update=True)
        available = record.quantity if record else 0
        if record is None or available < quantity:
            raise InsufficientInventory(location.id, item_id, available, quantity)
        uow.record(record, 'quantity', 'last_moved_at')
        record.quantity -= quantity
        record.last_moved_at = now
        return record

    def _movement(self, uow, code, move_type, record, qty_change, booking_id=None, remark=None):
        uow.add(StockMovement(
            transaction_code=code,
            move_type=move_type,
            location_id=record.location_id,
            item_id=record.item_id,
            booking_id=booking_id,
            qty_change=qty_change,
            balance_after=record.quantity,
            remark=remark,
        ))

    def _point_booking(self, uow, booking_id, location_id, warehouse_status):
        """Move the booking's warehouse pointer; unknown ids are skipped"""
        booking = self.store.get_booking(booking_id, for_update=True)
        if booking is None:
            current_app.logger.warning(f'Booking {booking_id} not found, warehouse pointer not updated')
            return None
        uow.set(booking, 'current_warehouse_location_id', location_id)
        uow.set(booking, 'warehouse_status', warehouse_status)
        return booking

    # ------------------------------------------------------------------
    # Movements

    def inbound(self, location_id, item_id, quantity, status=None, booking_id=None, remark=None):
        """
        Receive quantity of item_id into location_id and return the new
        quantity on hand. With booking_id, the booking is marked as resting
        at this location.
        """
        quantity = require_positive_quantity(quantity)
        location = self.store.require_location(location_id)
        item_id = self._normalise_item(item_id)

        keys = self._lock_keys(location, item_id)
        booking_keys = self._booking_lock_keys(booking_id)
        with inventory_locks.hold(*keys, timeout=self._lock_timeout()), \
                booking_locks.hold(*booking_keys, timeout=self._lock_timeout()):
            self._check_capacity(location, quantity)
            with UnitOfWork(self.store.session, 'inbound') as uow:
                record = self._credit(uow, location, item_id, quantity, status, datetime.utcnow())
                booking = None
                if booking_id is not None:
                    booking = self._point_booking(uow, booking_id, location.id, WarehouseStatus.IN_WAREHOUSE)
                self._movement(uow, self.generate_transaction_code(), MoveType.INBOUND,
                               record, quantity, booking.id if booking else None, remark)
                new_quantity = record.quantity

        current_app.logger.info(f'Inbound {quantity} x {item_id} -> location {location.id}, on hand {new_quantity}')
        return new_quantity

    def outbound(self, location_id, item_id, quantity, booking_id=None, remark=None):
        """
        Dispatch quantity of item_id from location_id and return what is
        left. Raises InsufficientInventory without touching anything when
        the location holds less than requested.
        """
        quantity = require_positive_quantity(quantity)
        location = self.store.require_location(location_id)
        item_id = self._normalise_item(item_id)

        booking_keys = self._booking_lock_keys(booking_id)
        with inventory_locks.hold((location.id, item_id), timeout=self._lock_timeout()), \
                booking_locks.hold(*booking_keys, timeout=self._lock_timeout()):
            with UnitOfWork(self.store.session, 'outbound') as uow:
                record = self._debit(uow, location, item_id, quantity, datetime.utcnow())
                booking = None
                if booking_id is not None:
                    booking = self._point_booking(uow, booking_id, None, WarehouseStatus.IN_TRANSIT)
                self._movement(uow, self.generate_transaction_code(), MoveType.OUTBOUND,
                               record, -quantity, booking.id if booking else None, remark)
                new_quantity = record.quantity

        current_app.logger.info(f'Outbound {quantity} x {item_id} <- location {location.id}, on hand {new_quantity}')
        return new_quantity

    def transfer(self, from_location_id, to_location_id, item_id, quantity, remark=None):
        """
        Move stock between two locations as one transaction. Both locations
        are validated and the source checked before anything changes, so a
        failed transfer leaves both sides as they were.
        """
        quantity = require_positive_quantity(quantity)
        source = self.store.require_location(from_location_id)
        target = self.store.require_location(to_location_id)
        item_id = self._normalise_item(item_id)
        if source.id == target.id:
            raise ValidationError('Source and destination locations must differ')

        keys = [(source.id, item_id)] + self._lock_keys(target, item_id)
        with inventory_locks.hold(*keys, timeout=self._lock_timeout()):
            self._check_capacity(target, quantity)
            code = self.generate_transaction_code()
            now = datetime.utcnow()
            with UnitOfWork(self.store.session, 'transfer') as uow:
                out_record = self._debit(uow, source, item_id, quantity, now)
                in_record = self._credit(uow, target, item_id, quantity, None, now)
                self._movement(uow, code, MoveType.TRANSFER_OUT, out_record, -quantity, remark=remark)
                self._movement(uow, code, MoveType.TRANSFER_IN, in_record, quantity, remark=remark)
                result = {
                    'transaction_code': code,
                    'from_quantity': out_record.quantity,
                    'to_quantity': in_record.quantity,
                }

        current_app.logger.info(
            f'Transfer {quantity} x {item_id}: location {source.id} -> {target.id} ({code})')
        return result

    # ------------------------------------------------------------------
    # Reads

    def get_inventory(self, location_id, item_id):
        """Quantity on hand; a missing record counts as zero"""
        try:
            location_id = int(location_id)
        except (TypeError, ValueError):
            return 0
        if item_id is None:
            return 0
        record = self.store.find_inventory(location_id, str(item_id).strip())
        return record.quantity if record else 0

    def movements(self, location_id=None, item_id=None, limit=100):
        return self.store.list_movements(location_id, item_id, limit)
