# /physiohub/utils/error_handlers.py
from urllib.parse import urlparse
from flask import current_app, flash, redirect, request, url_for
from sqlalchemy.exc import SQLAlchemyError
from physiohub.extensions import db
from physiohub.errors import PhysioHubError, StorageFailure
from physiohub.utils.session_util import current_principal, DASHBOARD_ENDPOINTS


def _fallback_url():
    """Same-host referrer, else the caller's dashboard, else the login page.

    Never the page that just failed; that falls back to the home page.
    """
    referrer = request.referrer
    if referrer:
        parsed = urlparse(referrer)
        if parsed.netloc in ('', request.host) and referrer != request.url:
            return referrer

    principal = current_principal()
    endpoint = DASHBOARD_ENDPOINTS.get(principal.role) if principal else None
    target = url_for(endpoint or 'views.login')
    if target == request.path:
        return url_for('views.home')
    return target


def register_error_handlers(app):
    @app.errorhandler(PhysioHubError)
    def application_error(error):
        db.session.rollback()
        current_app.logger.warning(f"{type(error).__name__} on {request.path}: {error.message}")
        flash(error.message, error.category)
        return redirect(_fallback_url())

    @app.errorhandler(SQLAlchemyError)
    def storage_error(error):
        db.session.rollback()
        current_app.logger.error(f"Database error on {request.path}: {error}")
        flash(StorageFailure.message, 'error')
        return redirect(_fallback_url())

    @app.errorhandler(404)
    def not_found(error):
        return 'Page not found', 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        current_app.audit_logger.error(f"Internal server error: {str(error)}")
        return 'Internal server error', 500
