"""Booking records: upstream creation and reporting reads"""
import uuid
from datetime import datetime

from flask import current_app

from shiptrack.models import Booking, BookingStatus, LoadingStatus
from shiptrack.store import Store


class BookingService:

    def __init__(self, store=None):
        self.store = store or Store()

    @staticmethod
    def generate_lr_number(branch_code='DC'):
        """LR number: <BRANCH>-YYYYMMDD-XXXX"""
        code = (branch_code or 'DC')[:2].upper()
        date_str = datetime.now().strftime('%Y%m%d')
        random_str = uuid.uuid4().hex[:4].upper()
        return f"{code}-{date_str}-{random_str}"

    def create_booking(self, customer_name=None, details='', amount=0, org_id=None, branch_id=None,
                       lr_number=None, branch_code=None):
        """New bookings always start booked, pending, and outside any warehouse"""
        booking = Booking(
            lr_number=lr_number or self.generate_lr_number(branch_code),
            customer_name=customer_name,
            details=details or '',
            amount=amount or 0,
            org_id=org_id,
            branch_id=branch_id,
            status=BookingStatus.BOOKED,
            loading_status=LoadingStatus.PENDING,
            current_warehouse_location_id=None,
            warehouse_status=None,
        )
        self.store.add(booking)
        self.store.session.commit()
        current_app.logger.info(f'Booking {booking.id} ({booking.lr_number}) created')
        return booking

    def get_booking(self, booking_id):
        return self.store.require_booking(booking_id)

    def list_bookings(self, status=None):
        return self.store.list_bookings(status)

    def status_summary(self):
        """Booking count per status; every known status is present"""
        counts = {status: 0 for status in BookingStatus.ALL}
        counts.update(self.store.count_bookings_by_status())
        return counts
