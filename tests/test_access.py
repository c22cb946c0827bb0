import pytest
from flask import flash
from sqlalchemy.exc import OperationalError

from physiohub.errors import AccessDenied, StorageFailure
from physiohub.models.account_models import Role
from physiohub.services import treatment_service
from physiohub.utils.session_util import DASHBOARD_ENDPOINTS, dashboard_endpoint, take_pending_notices

from conftest import flashes


def test_anonymous_is_sent_to_login(client):
    response = client.get('/patient/dashboard')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/login')
    assert ('error', 'Please log in to access this page.') in flashes(client)


@pytest.mark.parametrize('path', ['/patient/dashboard', '/admin/dashboard', '/exercise/1'])
def test_therapist_cannot_reach_other_roles(client, therapist, login, path):
    login('therapist')
    client.get('/therapist/dashboard')  # consume the welcome notice

    response = client.get(path)

    assert response.headers['Location'].endswith('/login')
    assert ('error', 'Access denied.') in flashes(client)


@pytest.mark.parametrize('path', ['/patient/dashboard', '/therapist/dashboard'])
def test_admin_has_no_implicit_access(client, admin, login, path):
    login('admin')
    response = client.get(path)
    assert response.headers['Location'].endswith('/login')


def test_matching_role_is_allowed(client, patient, login):
    login('patient')
    response = client.get('/patient/dashboard')
    assert response.status_code == 200
    assert b'Welcome, Sandro' in response.data


def test_session_of_deactivated_account_is_dropped(client, patient, login, db):
    login('patient')
    patient.role = Role.DEACTIVATED
    db.session.commit()

    response = client.get('/patient/dashboard')

    assert response.headers['Location'].endswith('/login')
    with client.session_transaction() as session:
        assert 'account_id' not in session


def test_notices_are_read_once(app):
    with app.test_request_context('/'):
        flash('Saved.', 'success')
        flash('Careful.', 'error')
        assert take_pending_notices() == [('success', 'Saved.'), ('error', 'Careful.')]


def test_notices_cleared_after_render(client, patient, login):
    login('patient')

    first = client.get('/patient/dashboard')
    second = client.get('/patient/dashboard')

    assert b'Welcome back, patient!' in first.data
    assert b'Welcome back, patient!' not in second.data


def test_every_role_has_a_dispatch_entry():
    assert set(DASHBOARD_ENDPOINTS) == set(Role)
    assert dashboard_endpoint(Role.PATIENT) == 'views.patient_dashboard'
    with pytest.raises(AccessDenied):
        dashboard_endpoint(Role.DEACTIVATED)


@pytest.mark.parametrize('error', [
    StorageFailure(),
    OperationalError('SELECT 1', {}, Exception('database is locked')),
])
def test_failing_dashboard_does_not_redirect_to_itself(client, patient, login, monkeypatch, error):
    login('patient')

    def failing_dashboard(account_id):
        raise error

    monkeypatch.setattr(treatment_service, 'get_dashboard', failing_dashboard)
    response = client.get('/patient/dashboard')

    assert response.status_code == 302
    assert not response.headers['Location'].endswith('/patient/dashboard')
    assert response.headers['Location'].endswith('/')
    assert ('error', StorageFailure.message) in flashes(client)


def test_error_redirect_ignores_referrer_of_same_page(client, patient, login, monkeypatch):
    login('patient')

    def failing_dashboard(account_id):
        raise StorageFailure()

    monkeypatch.setattr(treatment_service, 'get_dashboard', failing_dashboard)

    response = client.get('/patient/dashboard', headers={'Referer': 'http://localhost/patient/dashboard'})

    assert not response.headers['Location'].endswith('/patient/dashboard')
