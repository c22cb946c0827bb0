import logging

from physiohub.utils.email_util import build_confirmation_message, send_treatment_confirmation


def test_confirmation_message(app, patient):
    message = build_confirmation_message(patient)

    assert message['Subject'] == 'New Treatment Plan Assigned'
    assert message['To'] == patient.email
    body = message.get_payload()[0].get_payload()
    assert f'Dear {patient.name},' in body
    assert 'Go to Dashboard: /patient/dashboard' in body


def test_dashboard_link_honours_base_path(app, patient):
    app.config['BASE_PATH'] = '/usr/388'
    body = build_confirmation_message(patient).get_payload()[0].get_payload()
    assert 'Go to Dashboard: /usr/388/patient/dashboard' in body


def test_simulated_send_is_logged(app, patient, caplog):
    with caplog.at_level(logging.INFO, logger=app.logger.name):
        send_treatment_confirmation(patient.id)
    assert 'SIMULATED EMAIL' in caplog.text


def test_unknown_account_does_not_raise(app, caplog):
    with caplog.at_level(logging.INFO, logger=app.logger.name):
        send_treatment_confirmation(12345)
    assert 'Dear Client,' in caplog.text
