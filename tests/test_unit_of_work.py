import pytest

from shiptrack.models import Booking, Warehouse
from shiptrack.utils.unit_of_work import UnitOfWork


def test_commit_applies_changes(db, make_booking):
    booking = db.session.get(Booking, make_booking())

    with UnitOfWork(db.session) as uow:
        uow.set(booking, 'status', 'in_transit')
        uow.set(booking, 'loading_status', 'loaded')
        assert uow.changes == 2

    db.session.expire_all()
    assert db.session.get(Booking, booking.id).status == 'in_transit'


def test_failure_restores_previous_values(db, make_booking):
    booking_id = make_booking()
    booking = db.session.get(Booking, booking_id)

    with pytest.raises(RuntimeError):
        with UnitOfWork(db.session) as uow:
            uow.set(booking, 'status', 'in_transit')
            uow.set(booking, 'status', 'unloaded')
            raise RuntimeError('boom')

    assert db.session.get(Booking, booking_id).status == 'booked'


def test_failure_discards_added_entities(db):
    with pytest.raises(RuntimeError):
        with UnitOfWork(db.session) as uow:
            uow.add(Warehouse(name='Temp'))
            raise RuntimeError('boom')

    assert db.session.query(Warehouse).count() == 0


def test_recorded_lists_are_copied(db, manifests, make_booking):
    first = make_booking()
    manifest = manifests.create_manifest([first])

    with pytest.raises(RuntimeError):
        with UnitOfWork(db.session) as uow:
            uow.record(manifest, 'lr_ids')
            manifest.lr_ids.append(123)
            raise RuntimeError('boom')

    assert manifests.store.get_manifest(manifest.id).lr_ids == [first]
