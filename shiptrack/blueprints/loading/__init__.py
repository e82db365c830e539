from flask import Blueprint

# url_prefix is set when registering in shiptrack/__init__.py
loading_bp = Blueprint('loading', __name__)

from . import routes
