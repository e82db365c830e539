from flask import Blueprint

# url_prefix is set when registering in shiptrack/__init__.py
bookings_bp = Blueprint('bookings', __name__)

from . import routes
