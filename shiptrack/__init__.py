import logging
import colorlog
from flask import Flask, jsonify
from config import config
from shiptrack.extensions import db, migrate
from shiptrack.exceptions import ShipTrackException

from shiptrack import commands


def create_app(config_name='default'):
    """ShipTrack application factory"""
    app = Flask(__name__)

    # 1. Configuration
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # 2. Extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # 3. Logging
    configure_logging(app)

    # 4. Blueprints
    register_blueprints(app)

    # 5. Error handlers
    register_error_handlers(app)

    # 6. CLI commands
    register_commands(app)

    return app


def register_blueprints(app):
    """Register the booking, loading and warehouse APIs"""
    from shiptrack.blueprints.bookings import bookings_bp
    app.register_blueprint(bookings_bp, url_prefix='/bookings')

    from shiptrack.blueprints.loading import loading_bp
    app.register_blueprint(loading_bp, url_prefix='/loading')

    from shiptrack.blueprints.warehouse import warehouse_bp
    app.register_blueprint(warehouse_bp)


def register_error_handlers(app):
    @app.errorhandler(ShipTrackException)
    def engine_error(e):
        if e.code >= 500:
            app.logger.error(e.message)
        return jsonify(e.to_dict()), e.code

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({'message': 'Resource not found', 'code': 404, 'success': False}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'message': 'Method not allowed', 'code': 405, 'success': False}), 405

    @app.errorhandler(500)
    def internal_server_error(e):
        return jsonify({'message': 'Internal server error', 'code': 500, 'success': False}), 500


def register_commands(app):
    """Flask CLI commands"""
    app.cli.add_command(commands.seed)
    app.cli.add_command(commands.status)


def configure_logging(app):
    """Coloured console logging on app.logger"""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    app.logger.setLevel(level)
    if app.testing:
        return

    handler = logging.StreamHandler()
    handler.setLevel(level)

    formatter = colorlog.ColoredFormatter(
        "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s %(blue)s%(message)s",
        datefmt="%H:%M:%S",
        reset=True,
        log_colors={
            'DEBUG':    'cyan',
            'INFO':     'green',
            'WARNING':  'yellow',
            'ERROR':    'red',
            'CRITICAL': 'red,bg_white',
        },
        secondary_log_colors={},
        style='%'
    )
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)
