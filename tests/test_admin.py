import datetime

import pytest

from physiohub.errors import InvalidInput, NotFound, SelfDeactivationForbidden
from physiohub.models.account_models import Role
from physiohub.services import admin_service, treatment_service

from conftest import flashes


def test_partial_edit_only_touches_given_fields(app, patient):
    surname = patient.surname

    assert admin_service.edit_account(patient.id, {'name': 'Alessandro'}) is True
    assert patient.name == 'Alessandro'
    assert patient.surname == surname


def test_edit_without_change_is_noop(app, patient):
    assert admin_service.edit_account(patient.id, {'name': patient.name}) is False
    assert admin_service.edit_account(patient.id, {}) is False


def test_edit_clears_illness(app, patient):
    treatment_service.submit_illness(patient.id, 'Tennis elbow')

    assert admin_service.edit_account(patient.id, {'illness': ''}) is True
    assert patient.illness is None


def test_edit_parses_dob(app, patient):
    admin_service.edit_account(patient.id, {'dob': '1985-03-14'})
    assert patient.dob == datetime.date(1985, 3, 14)


@pytest.mark.parametrize('fields', [{'role': 'admin'}, {'email': 'nope'}, {'name': ''}])
def test_edit_rejects_bad_fields(app, patient, fields):
    with pytest.raises(InvalidInput):
        admin_service.edit_account(patient.id, fields)
    assert patient.role is Role.PATIENT


def test_edit_unknown_account(app):
    with pytest.raises(NotFound):
        admin_service.edit_account(404, {'name': 'x'})


def test_self_deactivation_forbidden(app, admin):
    with pytest.raises(SelfDeactivationForbidden):
        admin_service.deactivate(admin.id, admin.id)
    assert admin.role is Role.ADMIN


def test_deactivate_keeps_history(app, admin, patient, exercises):
    treatment_service.assign_exercises(
        patient.id,
        [{'exercise_id': exercises[0].id, 'duration': 1, 'reps': 1, 'perWeek': 1}],
        notifier=lambda account_id: None
    )

    admin_service.deactivate(patient.id, admin.id)

    assert patient.role is Role.DEACTIVATED
    assert len(treatment_service.treatment_history(patient.nhs_number)) == 1
    assert patient.id not in [account.id for account in admin_service.list_accounts()]


def test_deactivate_unknown_account(app, admin):
    with pytest.raises(NotFound):
        admin_service.deactivate(404, admin.id)


def test_admin_dashboard_route(client, admin, patient, login):
    login('admin')
    response = client.get('/admin/dashboard')
    assert response.status_code == 200
    assert b'patient' in response.data


def test_self_deactivation_route(client, admin, login):
    login('admin')

    response = client.post(f'/admin/deactivate/{admin.id}')

    assert response.status_code == 302
    assert ('error', 'You cannot deactivate your own account.') in flashes(client)
    assert admin.role is Role.ADMIN


def test_deactivate_route(client, admin, patient, login):
    login('admin')

    response = client.post(f'/admin/deactivate/{patient.id}')

    assert response.headers['Location'].endswith('/admin/dashboard')
    assert patient.role is Role.DEACTIVATED


def test_edit_route(client, admin, patient, login):
    login('admin')
    assert client.get(f'/admin/edit/{patient.id}').status_code == 200

    response = client.post(f'/admin/edit/{patient.id}', data={'surname': 'Rossi', 'illness': ''})

    assert response.headers['Location'].endswith('/admin/dashboard')
    assert patient.surname == 'Rossi'
    assert ('success', 'User updated.') in flashes(client)
