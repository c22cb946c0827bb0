# /config.py
import os
import secrets
from datetime import timedelta
import logging
from logging.handlers import RotatingFileHandler

from physiohub.errors import ConfigurationError


def _database_uri():
    """Resolve the database URI from DATABASE_URL or the HEALTH_* variables."""
    if os.environ.get('DATABASE_URL'):
        return os.environ['DATABASE_URL']
    host = os.environ.get('HEALTH_HOST')
    if host:
        user = os.environ.get('HEALTH_USER', '')
        password = os.environ.get('HEALTH_PASSWORD', '')
        database = os.environ.get('HEALTH_DATABASE', 'health')
        return f'mysql+pymysql://{user}:{password}@{host}/{database}'
    return 'sqlite:///' + os.path.join(os.path.dirname(os.path.abspath(__file__)), 'physiohub.sqlite')


class Config:
    """Base configuration settings"""
    # Security
    SECRET_KEY = os.environ.get('SESSION_SECRET') or secrets.token_hex(32)

    # Password hashing: bcrypt(password + pepper) at cost 12
    BCRYPT_PEPPER = os.environ.get('BCRYPT_PEPPER')
    BCRYPT_LOG_ROUNDS = 12
    BCRYPT_HANDLE_LONG_PASSWORDS = True

    # Routing
    BASE_PATH = os.environ.get('HEALTH_BASE_PATH', '').rstrip('/')
    PORT = int(os.environ.get('PORT', 8000))

    # Session configuration
    SESSION_COOKIE_NAME = 'physiohub_session'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = False  # Set to True in production with HTTPS
    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)

    # Database
    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    # Rate Limiting
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL') or 'memory://'

    # Logging
    LOG_DIR = os.environ.get('LOG_DIR', 'logs')
    LOG_TO_FILE = True

    @staticmethod
    def init_app(app):
        """Initialize application-specific configuration"""
        if not app.config.get('BCRYPT_PEPPER'):
            raise ConfigurationError('BCRYPT_PEPPER must be set; refusing to start with unpeppered hashes')

        log_dir = app.config['LOG_DIR']
        log_to_file = app.config.get('LOG_TO_FILE') and not app.testing
        if log_to_file and not os.path.exists(log_dir):
            os.mkdir(log_dir)

        # Configure main application logging
        if log_to_file and not app.debug:
            file_handler = RotatingFileHandler(os.path.join(log_dir, 'app.log'), maxBytes=10240000, backupCount=10)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
            ))
            file_handler.setLevel(logging.INFO)
            app.logger.addHandler(file_handler)
            app.logger.setLevel(logging.INFO)
            app.logger.info('PhysioHUB startup')

        # Set up audit logger
        audit_logger = logging.getLogger('PHYSIOHUB_AUDIT')
        if not audit_logger.handlers:
            if log_to_file:
                audit_handler = RotatingFileHandler(os.path.join(log_dir, 'audit.log'), maxBytes=10240000, backupCount=20)
            else:
                audit_handler = logging.StreamHandler()
            audit_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(message)s'
            ))
            audit_logger.addHandler(audit_handler)
            audit_logger.setLevel(logging.INFO)
            audit_logger.propagate = False  # Prevent duplicate logs

        app.audit_logger = audit_logger


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True

    @staticmethod
    def init_app(app):
        Config.init_app(app)

        # Development-specific logging
        if not app.logger.handlers:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(logging.Formatter(
                '%(asctime)s %(levelname)s: %(message)s'
            ))
            app.logger.addHandler(console_handler)
        app.logger.setLevel(logging.DEBUG)


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SECRET_KEY = 'test-secret'
    BCRYPT_PEPPER = 'test-pepper'
    BCRYPT_LOG_ROUNDS = 4
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False
    LOG_TO_FILE = False

    @staticmethod
    def init_app(app):
        Config.init_app(app)


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    SESSION_COOKIE_SECURE = True  # Requires HTTPS

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)

        if not os.environ.get('SESSION_SECRET'):
            app.logger.error('SESSION_SECRET not set in production!')
            raise ConfigurationError('SESSION_SECRET must be set in production')

        if 'sqlite' in app.config['SQLALCHEMY_DATABASE_URI']:
            app.logger.warning('Running production on SQLite - set DATABASE_URL or HEALTH_HOST')


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
