from functools import wraps
from flask import request, current_app, flash, redirect, url_for, make_response
from physiohub.models.system_models import AuditLog
from physiohub.models.account_models import Account
from physiohub.extensions import db
from physiohub.utils.session_util import current_principal, end_session
from sqlalchemy.exc import SQLAlchemyError


def _write_audit_entry(account_id, action, resource, resource_id, success, details):
    log_entry = AuditLog(
        account_id=account_id,
        action=action,
        resource=resource,
        resource_id=str(resource_id) if resource_id is not None else None,
        ip_address=request.remote_addr,
        user_agent=(request.headers.get('User-Agent') or '')[:255],
        success=success,
        details=details
    )
    try:
        db.session.add(log_entry)
        db.session.commit()
    except SQLAlchemyError as db_error:
        current_app.audit_logger.error(f"Failed to log audit entry due to DB error: {db_error}")
        db.session.rollback()

    log = current_app.audit_logger.info if success else current_app.audit_logger.error
    log(f"Action='{action}', Resource='{resource}', ResourceID='{resource_id}', "
        f"AccountID='{account_id}', Success='{success}', Details='{details}'")


def audit_log(action, resource, methods=('POST',)):
    """Records a state-changing request in the audit trail."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if request.method not in methods:
                return f(*args, **kwargs)

            principal = current_principal()
            account_id = principal.account_id if principal else None
            resource_id = kwargs.get('account_id')
            if resource_id is None and action in ('USER_REGISTRATION', 'USER_LOGIN'):
                resource_id = request.form.get('username')

            try:
                response = make_response(f(*args, **kwargs))
            except Exception as e:
                db.session.rollback()
                _write_audit_entry(account_id, action, resource, resource_id, False,
                                   f"{type(e).__name__}: {e}")
                raise

            if account_id is None:
                # Login establishes the principal during the request
                principal = current_principal()
                account_id = principal.account_id if principal else None
            _write_audit_entry(account_id, action, resource, resource_id,
                               response.status_code < 400,
                               f"Request completed. Status: {response.status_code}")
            return response

        return decorated_function
    return decorator


def login_required(f):
    """Rejects requests without a live session, redirecting to login."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        principal = current_principal()
        if principal is None:
            flash('Please log in to access this page.', 'error')
            return redirect(url_for('views.login'))

        account = db.session.get(Account, principal.account_id)
        if not account or not account.is_active:
            end_session()
            flash('Account is deactivated. Contact administrator.', 'error')
            return redirect(url_for('views.login'))

        return f(*args, **kwargs)
    return decorated_function


def role_required(role):
    """Allows only an exact role match and passes the principal to the view."""
    def decorator(f):
        @wraps(f)
        @login_required
        def decorated_function(*args, **kwargs):
            principal = current_principal()
            if principal.role != role:
                flash('Access denied.', 'error')
                return redirect(url_for('views.login'))
            return f(principal, *args, **kwargs)
        return decorated_function
    return decorator
