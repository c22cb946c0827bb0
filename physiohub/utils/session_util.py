# /physiohub/utils/session_util.py
from flask import session, get_flashed_messages
from physiohub.errors import AccessDenied
from physiohub.models.account_models import Role
from physiohub.services.auth_service import Principal

# Role -> dashboard endpoint. DEACTIVATED accounts have no dashboard.
DASHBOARD_ENDPOINTS = {
    Role.PATIENT: 'views.patient_dashboard',
    Role.THERAPIST: 'views.therapist_dashboard',
    Role.ADMIN: 'views.admin_dashboard',
    Role.DEACTIVATED: None,
}


def dashboard_endpoint(role: Role) -> str:
    endpoint = DASHBOARD_ENDPOINTS[role]
    if endpoint is None:
        raise AccessDenied('Account is deactivated. Contact administrator.')
    return endpoint


def start_session(principal: Principal) -> None:
    session.clear()
    session['account_id'] = principal.account_id
    session['username'] = principal.username
    session['role'] = principal.role.value


def end_session() -> None:
    session.clear()


def current_principal():
    """The principal stored in the session, or None."""
    account_id = session.get('account_id')
    if account_id is None:
        return None
    try:
        role = Role(session.get('role'))
    except ValueError:
        return None
    return Principal(account_id=account_id, username=session.get('username'), role=role)


def take_pending_notices():
    """Returns and clears the queued flash notices as (category, message) pairs."""
    return get_flashed_messages(with_categories=True)
