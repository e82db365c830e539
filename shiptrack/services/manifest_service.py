"""Manifest (OGPL) engine: loading, unloading and delivery transitions"""
import uuid
from contextlib import contextmanager
from datetime import datetime

from flask import current_app

from shiptrack.exceptions import NotFound, ValidationError
from shiptrack.models import Manifest, BookingStatus, LoadingStatus, ManifestStatus
from shiptrack.store import Store
from shiptrack.utils.locks import booking_locks
from shiptrack.utils.unit_of_work import UnitOfWork
from shiptrack.utils.validators import parse_id_list, require_name

# Manifest columns; anything else in manifest_data goes to Manifest.meta
MANIFEST_FIELDS = ('vehicle_number', 'driver_name', 'from_branch_id', 'to_branch_id', 'remark')


def _booking_key(booking_id):
    return ('booking', booking_id)


def _manifest_key(manifest_id):
    try:
        return ('manifest', int(manifest_id))
    except (TypeError, ValueError):
        raise NotFound(f'OGPL {manifest_id} not found', payload={'id': manifest_id})


class ManifestService:
    """
    Moves bookings through booked -> in_transit -> unloaded ->
    out_for_delivery -> delivered. Create and unload are all-or-nothing:
    every booking change is recorded in a UnitOfWork and undone if any
    booking in the call cannot be resolved.
    """

    def __init__(self, store=None):
        self.store = store or Store()

    @staticmethod
    def generate_ogpl_no():
        """OGPL-YYYYMMDD-XXXX"""
        date_str = datetime.now().strftime('%Y%m%d')
        random_str = uuid.uuid4().hex[:4].upper()
        return f"OGPL-{date_str}-{random_str}"

    @staticmethod
    def _lock_timeout():
        return current_app.config.get('LOCK_TIMEOUT')

    def _check_loadable(self, booking, manifest):
        if booking.status != BookingStatus.IN_TRANSIT:
            return
        if current_app.config.get('ALLOW_MANIFEST_RELOAD'):
            current_app.logger.warning(f'Booking {booking.id} reloaded while in transit onto {manifest.ogpl_no}')
            return
        raise ValidationError(f'Booking {booking.id} is already in transit',
                              payload={'booking_id': booking.id})

    def _load(self, uow, manifest, booking_ids):
        """Transition each id not yet on the manifest to in_transit and append it"""
        loaded = []
        uow.record(manifest, 'lr_ids')
        for booking_id in booking_ids:
            if booking_id in manifest.lr_ids:
                continue
            booking = self.store.require_booking(booking_id, for_update=True)
            self._check_loadable(booking, manifest)
            uow.set(booking, 'status', BookingStatus.IN_TRANSIT)
            uow.set(booking, 'loading_status', LoadingStatus.LOADED)
            manifest.lr_ids.append(booking.id)
            loaded.append(booking.id)
        return loaded

    def create_manifest(self, booking_ids, manifest_data=None):
        """
        Create a manifest carrying booking_ids and put every booking in
        transit.

        Raises NotFound naming the first unknown booking; in that case no
        manifest is stored and no booking status changes.
        """
        booking_ids = parse_id_list(booking_ids)
        data = dict(manifest_data or {})
        fields = {k: data.pop(k) for k in MANIFEST_FIELDS if k in data}

        with booking_locks.hold(*[_booking_key(b) for b in booking_ids], timeout=self._lock_timeout()):
            with UnitOfWork(self.store.session, 'create_manifest') as uow:
                manifest = uow.add(Manifest(
                    ogpl_no=self.generate_ogpl_no(),
                    status=ManifestStatus.CREATED,
                    lr_ids=[],
                    meta=data or None,
                    **fields
                ))
                self._load(uow, manifest, booking_ids)

        current_app.logger.info(f'OGPL {manifest.ogpl_no} created with {len(manifest.lr_ids)} booking(s)')
        return manifest

    @contextmanager
    def _locked_manifest(self, manifest_id):
        """
        Hold the manifest lock and yield the manifest re-read under it.
        Booking locks are always taken after the manifest lock.
        """
        with booking_locks.hold(_manifest_key(manifest_id), timeout=self._lock_timeout()):
            yield self.store.require_manifest(manifest_id, for_update=True)

    def _hold_bookings(self, booking_ids):
        return booking_locks.hold(*[_booking_key(b) for b in booking_ids], timeout=self._lock_timeout())

    def complete_unloading(self, manifest_id):
        """
        Mark every booking on the manifest unloaded, then the manifest
        itself. A booking that no longer resolves aborts the whole call.
        """
        with self._locked_manifest(manifest_id) as manifest:
            booking_ids = list(manifest.lr_ids)
            with self._hold_bookings(booking_ids):
                with UnitOfWork(self.store.session, 'complete_unloading') as uow:
                    for booking_id in booking_ids:
                        booking = self.store.require_booking(booking_id, for_update=True)
                        uow.set(booking, 'status', BookingStatus.UNLOADED)
                    uow.set(manifest, 'status', ManifestStatus.UNLOADED)

        current_app.logger.info(f'OGPL {manifest.ogpl_no} unloaded ({len(booking_ids)} booking(s))')
        return manifest

    def add_bookings(self, manifest_id, booking_ids):
        """Append ids not already on the manifest and put them in transit"""
        booking_ids = parse_id_list(booking_ids)

        with self._locked_manifest(manifest_id) as manifest:
            with self._hold_bookings(booking_ids):
                with UnitOfWork(self.store.session, 'add_bookings') as uow:
                    loaded = self._load(uow, manifest, booking_ids)

        current_app.logger.info(f'OGPL {manifest.ogpl_no}: loaded {loaded}')
        return manifest

    def remove_bookings(self, manifest_id, booking_ids):
        """
        Take ids off the manifest and return their bookings to booked.
        Ids that are not on this manifest are left alone.
        """
        booking_ids = parse_id_list(booking_ids)

        removed = []
        with self._locked_manifest(manifest_id) as manifest:
            with self._hold_bookings(booking_ids):
                with UnitOfWork(self.store.session, 'remove_bookings') as uow:
                    uow.record(manifest, 'lr_ids')
                    for booking_id in booking_ids:
                        if booking_id not in manifest.lr_ids:
                            continue
                        booking = self.store.get_booking(booking_id, for_update=True)
                        if booking is not None:
                            uow.set(booking, 'status', BookingStatus.BOOKED)
                            uow.set(booking, 'loading_status', LoadingStatus.PENDING)
                        manifest.lr_ids.remove(booking_id)
                        removed.append(booking_id)

        current_app.logger.info(f'OGPL {manifest.ogpl_no}: removed {removed}')
        return manifest

    def start_loading_session(self, manifest_id, booking_ids):
        """Load bookings and mark the manifest in transit in one step"""
        booking_ids = parse_id_list(booking_ids)

        with self._locked_manifest(manifest_id) as manifest:
            with self._hold_bookings(booking_ids):
                with UnitOfWork(self.store.session, 'loading_session') as uow:
                    self._load(uow, manifest, booking_ids)
                    uow.set(manifest, 'status', ManifestStatus.IN_TRANSIT)

        current_app.logger.info(f'OGPL {manifest.ogpl_no} departed with {len(manifest.lr_ids)} booking(s)')
        return manifest

    def update_manifest_status(self, manifest_id, status):
        status = require_name(status, 'Status')
        with self._locked_manifest(manifest_id) as manifest:
            with UnitOfWork(self.store.session, 'manifest_status') as uow:
                uow.set(manifest, 'status', status)
        return manifest

    def _set_booking_status(self, booking_id, status):
        booking_id = self.store.require_booking(booking_id).id
        with booking_locks.hold(_booking_key(booking_id), timeout=self._lock_timeout()):
            booking = self.store.require_booking(booking_id, for_update=True)
            with UnitOfWork(self.store.session, status) as uow:
                uow.set(booking, 'status', status)
        current_app.logger.info(f'Booking {booking.id} -> {status}')
        return booking

    def start_delivery(self, booking_id):
        return self._set_booking_status(booking_id, BookingStatus.OUT_FOR_DELIVERY)

    def mark_delivered(self, booking_id):
        """Proof of delivery received"""
        return self._set_booking_status(booking_id, BookingStatus.DELIVERED)

    def manifest_detail(self, manifest_id):
        """Manifest dict with the booking records resolved"""
        manifest = self.store.require_manifest(manifest_id)
        data = manifest.to_dict()
        data['loading_records'] = []
        for booking_id in manifest.lr_ids:
            booking = self.store.get_booking(booking_id)
            data['loading_records'].append({
                'booking_id': booking_id,
                'booking': booking.to_dict() if booking else None,
            })
        return data
