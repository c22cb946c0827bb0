import os
from flask import Flask
from physiohub.extensions import db, bcrypt, migrate, limiter
from physiohub.utils.error_handlers import register_error_handlers
from physiohub.utils.session_util import current_principal, take_pending_notices
from physiohub.commands import register_commands


def create_app(config_class=None):
    """Application factory.

    Args:
        config_class: a config class; defaults to the entry of
            ``config.config`` named by FLASK_CONFIG.

    Raises:
        ConfigurationError: if the pepper (or, in production, the session
            secret) is missing.
    """
    from config import config

    if config_class is None:
        config_class = config[os.getenv('FLASK_CONFIG', 'default')]

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Fails closed before any extension touches the database
    config_class.init_app(app)

    # Initialize extensions
    db.init_app(app)
    bcrypt.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # Register blueprints
    from physiohub.views import views_bp
    app.register_blueprint(views_bp, url_prefix=app.config['BASE_PATH'] or None)

    # Register error handlers and commands
    register_error_handlers(app)
    register_commands(app)

    @app.context_processor
    def inject_session_state():
        return {
            'principal': current_principal(),
            'take_pending_notices': take_pending_notices,
        }

    return app
