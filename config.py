import os
from dotenv import load_dotenv

# Load .env variables
load_dotenv()
basedir = os.path.abspath(os.path.dirname(__file__))


class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-string'

    # Database
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_RECORD_QUERIES = True

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # The JSON API validates payloads with forms but carries no CSRF token
    WTF_CSRF_ENABLED = False

    # Whether a booking already in_transit may be loaded onto another manifest
    ALLOW_MANIFEST_RELOAD = os.environ.get('ALLOW_MANIFEST_RELOAD', 'false').lower() in ('1', 'true', 'yes')

    # Seconds to wait for a booking or inventory lock
    LOCK_TIMEOUT = float(os.environ.get('LOCK_TIMEOUT', 10))

    @staticmethod
    def init_app(app):
        # Make sure the sqlite instance folder exists
        instance_dir = os.path.join(basedir, 'instance')
        if not os.path.exists(instance_dir):
            os.makedirs(instance_dir)


class DevelopmentConfig(Config):
    """Development"""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'shiptrack.db')


class ProductionConfig(Config):
    """Production"""
    DEBUG = False

    DATABASE_URL = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'shiptrack_prod.db')
    # Hosted Postgres often hands out postgres:// URLs
    if DATABASE_URL and DATABASE_URL.startswith('postgres://'):
        DATABASE_URL = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

    SQLALCHEMY_DATABASE_URI = DATABASE_URL

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    ALLOW_MANIFEST_RELOAD = False
    LOCK_TIMEOUT = 2

    @staticmethod
    def init_app(app):
        pass


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
