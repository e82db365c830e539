"""Booking routes: creation, reads and the delivery transitions"""
from flask import jsonify, request

from shiptrack.blueprints.bookings import bookings_bp
from shiptrack.blueprints.forms import BookingForm, validated
from shiptrack.services import BookingService, ManifestService


@bookings_bp.route('', methods=['POST'])
def create():
    form = validated(BookingForm)
    booking = BookingService().create_booking(
        customer_name=form.customer_name.data,
        details=form.details.data,
        amount=form.amount.data,
        org_id=form.org_id.data,
        branch_id=form.branch_id.data,
        branch_code=form.branch_code.data,
    )
    return jsonify(booking.to_dict()), 201


@bookings_bp.route('', methods=['GET'])
def index():
    status = request.args.get('status', '').strip() or None
    bookings = BookingService().list_bookings(status)
    return jsonify([b.to_dict() for b in bookings])


@bookings_bp.route('/summary')
def summary():
    """Count per status"""
    return jsonify(BookingService().status_summary())


@bookings_bp.route('/<int:booking_id>')
def detail(booking_id):
    booking = BookingService().get_booking(booking_id)
    data = booking.to_dict()
    location = booking.current_location
    data['current_location'] = location.to_dict() if location else None
    return jsonify(data)


@bookings_bp.route('/<int:booking_id>/start-delivery', methods=['POST'])
def start_delivery(booking_id):
    booking = ManifestService().start_delivery(booking_id)
    return jsonify(booking.to_dict())


@bookings_bp.route('/<int:booking_id>/deliver', methods=['POST'])
def deliver(booking_id):
    """Proof of delivery"""
    booking = ManifestService().mark_delivered(booking_id)
    return jsonify(booking.to_dict())
