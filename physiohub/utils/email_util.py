# /physiohub/utils/email_util.py
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from flask import current_app
from physiohub.extensions import db
from physiohub.models.account_models import Account

SENDER = 'no-reply@physiohub.nhs.uk'


def _dashboard_url():
    base_path = current_app.config.get('BASE_PATH', '')
    return f'{base_path}/patient/dashboard'.replace('//', '/')


def build_confirmation_message(patient) -> MIMEMultipart:
    """Composes the 'treatment assigned' email for a patient."""
    patient_name = patient.name if patient and patient.name else 'Client'
    dashboard_url = _dashboard_url()

    message = MIMEMultipart("alternative")
    message["Subject"] = "New Treatment Plan Assigned"
    message["From"] = SENDER
    message["To"] = patient.email if patient and patient.email else 'unknown'

    text = f"""Dear {patient_name},

Your physiotherapy treatment has been successfully assigned!

Please log in to your dashboard to view your new exercises.

Go to Dashboard: {dashboard_url}

Best regards,
NHS PhysioHUB Team"""

    html = f"""
    <html>
      <body>
        <p>Dear {patient_name},</p>
        <p>Your physiotherapy treatment has been successfully assigned!</p>
        <p>Please log in to your <a href="{dashboard_url}">dashboard</a> to view your new exercises.</p>
        <p>Best regards,<br>NHS PhysioHUB Team</p>
      </body>
    </html>
    """

    message.attach(MIMEText(text, "plain"))
    message.attach(MIMEText(html, "html"))
    return message


def send_treatment_confirmation(account_id: int) -> None:
    """
    Simulates emailing a patient that a treatment has been assigned.

    Nothing is delivered: the composed message is written to the application
    log. Errors are logged and never raised.

    Args:
        account_id (int): The patient's account id.
    """
    try:
        patient = db.session.get(Account, account_id)
        message = build_confirmation_message(patient)
        patient_name = patient.name if patient else 'Client'
        current_app.logger.info(
            f"--- SIMULATED EMAIL ---\nTo: Patient ID {account_id} ({patient_name})\n"
            f"{message.as_string()}\n-----------------------"
        )
    except Exception as e:
        current_app.logger.error(f"Error sending confirmation email simulation for account {account_id}: {e}")
