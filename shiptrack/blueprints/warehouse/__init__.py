from flask import Blueprint

# url_prefix is set when registering in shiptrack/__init__.py
warehouse_bp = Blueprint('warehouse', __name__)

from . import routes
