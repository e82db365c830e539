"""
Pytest fixtures: a fresh in-memory database per test plus small factories
for bookings, warehouses and locations.
"""
import pytest

from config import config, TestingConfig
from shiptrack import create_app
from shiptrack.extensions import db as _db
from shiptrack.services import BookingService, ManifestService, WarehouseService


@pytest.fixture()
def app():
    """Flask application on an empty in-memory database"""
    app = create_app('testing')

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def threaded_app(tmp_path, monkeypatch):
    """Application on a file database, so worker threads get connections of their own"""
    class ThreadedTestingConfig(TestingConfig):
        SQLALCHEMY_DATABASE_URI = 'sqlite:///' + str(tmp_path / 'shiptrack.db')
        SQLALCHEMY_ENGINE_OPTIONS = {'connect_args': {'check_same_thread': False, 'timeout': 30}}
        LOCK_TIMEOUT = 10

    monkeypatch.setitem(config, 'threaded', ThreadedTestingConfig)
    app = create_app('threaded')

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db(app):
    return _db


@pytest.fixture()
def bookings(app):
    return BookingService()


@pytest.fixture()
def manifests(app):
    return ManifestService()


@pytest.fixture()
def warehouse(app):
    return WarehouseService()


@pytest.fixture()
def make_booking(bookings):
    """Create a booking and return its id"""
    def _make(**fields):
        fields.setdefault('customer_name', 'Acme Textiles')
        return bookings.create_booking(**fields).id
    return _make


@pytest.fixture()
def make_location(warehouse):
    """Create a location (in a new warehouse unless one is given) and return its id"""
    def _make(name='A1', warehouse_id=None, capacity=None):
        if warehouse_id is None:
            warehouse_id = warehouse.create_warehouse('Main Hub', city='Mumbai').id
        return warehouse.create_location(warehouse_id, name, capacity=capacity).id
    return _make


def get_booking(booking_id):
    from shiptrack.models import Booking
    return _db.session.get(Booking, booking_id)
