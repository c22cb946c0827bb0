"""Illness submission, exercise assignment and the patient dashboard.

An account is either *awaiting* (``attended`` false) or *attended* (a
therapist has assigned a treatment). Illness submission always moves the
account back to awaiting; assignment moves it to attended and creates a new
Treatment. Treatments are never updated, so older plans stay on record.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from physiohub.extensions import db
from physiohub.errors import (
    EmptySelection, InvalidInput, InvalidPrescription, NotFound, StorageFailure
)
from physiohub.models.account_models import Account, Role
from physiohub.models.treatment_models import Exercise, Treatment, TreatmentExercise
from physiohub.utils.email_util import send_treatment_confirmation

PRESCRIPTION_FIELDS = ('duration', 'reps', 'perWeek')


@dataclass
class Prescription:
    exercise: Exercise
    duration: int
    reps: int
    per_week: int

    def to_record(self):
        return {'duration': self.duration, 'reps': self.reps, 'perWeek': self.per_week}


@dataclass
class Dashboard:
    account: Account
    treatment: Optional[Treatment] = None
    exercises: List[TreatmentExercise] = field(default_factory=list)


def _get_patient(account_id, lock=False):
    account = db.session.get(Account, account_id, with_for_update=lock)
    if not account or account.role != Role.PATIENT:
        raise NotFound('Patient not found.')
    return account


def _positive_int(value):
    """Parses a strictly positive integer; returns None on failure."""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def validate_prescriptions(items):
    """Checks a whole batch before anything is written.

    Args:
        items (list[dict]): ``exercise_id``, ``duration``, ``reps`` and
            ``perWeek`` per prescribed exercise, in submission order.

    Returns:
        list[Prescription]: parsed prescriptions in the same order.
    """
    if not items:
        raise EmptySelection()

    prescriptions = []
    for item in items:
        exercise_id = _positive_int(item.get('exercise_id'))
        exercise = db.session.get(Exercise, exercise_id) if exercise_id else None
        if not exercise:
            raise NotFound('Exercise not found.')

        values = [_positive_int(item.get(name)) for name in PRESCRIPTION_FIELDS]
        if any(value is None for value in values):
            raise InvalidPrescription(exercise.name)

        duration, reps, per_week = values
        prescriptions.append(Prescription(exercise, duration, reps, per_week))
    return prescriptions


def submit_illness(account_id, illness):
    """Records the patient's illness and reopens their case."""
    illness = (illness or '').strip()
    if not illness:
        raise InvalidInput('Please describe your illness.')

    account = _get_patient(account_id)
    account.illness = illness
    account.attended = False
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Illness submission failed for account {account_id}: {e}')
        raise StorageFailure()
    return account


def assign_exercises(account_id, items, notifier=send_treatment_confirmation):
    """Creates a treatment for the patient and marks them attended.

    The batch is validated in full first; the treatment row, its exercise
    links and the attended flag are then committed together while the
    patient row is locked. The notifier runs after the commit and cannot
    undo it.

    Returns:
        Treatment: the newly created treatment.
    """
    prescriptions = validate_prescriptions(items)

    try:
        account = _get_patient(account_id, lock=True)
        treatment = Treatment(nhs_number=account.nhs_number)
        for position, prescription in enumerate(prescriptions, start=1):
            treatment.exercises.append(TreatmentExercise(
                exercise=prescription.exercise,
                order_num=position,
                prescription=prescription.to_record()
            ))
        db.session.add(treatment)
        account.attended = True
        db.session.commit()
    except NotFound:
        db.session.rollback()
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Assignment failed for account {account_id}: {e}')
        raise StorageFailure('Failed to assign exercises.')

    current_app.logger.info(
        f'Assigned treatment {treatment.id} with {len(prescriptions)} exercise(s) to account {account_id}'
    )

    try:
        notifier(account_id)
    except Exception as e:
        current_app.logger.error(f'Confirmation for account {account_id} failed: {e}')

    return treatment


def current_treatment(nhs_number):
    return (Treatment.query
            .filter_by(nhs_number=nhs_number)
            .order_by(Treatment.id.desc())
            .first())


def get_dashboard(account_id):
    """Read-only view of the patient's current plan."""
    account = _get_patient(account_id)
    dashboard = Dashboard(account=account)
    if account.attended:
        treatment = current_treatment(account.nhs_number)
        if treatment:
            dashboard.treatment = treatment
            dashboard.exercises = list(treatment.exercises)
    return dashboard


def get_exercise(exercise_id):
    exercise = db.session.get(Exercise, exercise_id)
    if not exercise:
        raise NotFound('Exercise not found.')
    return exercise


def assignable_exercises():
    """Catalogue entries that have both an illustration and a description."""
    return (Exercise.query
            .filter(Exercise.illustration_sequence.isnot(None), Exercise.description.isnot(None))
            .order_by(Exercise.name)
            .all())


def treatment_history(nhs_number):
    return (Treatment.query
            .filter_by(nhs_number=nhs_number)
            .order_by(Treatment.id.desc())
            .all())


def get_patient_detail(account_id):
    """Everything the therapist needs to prescribe for one patient."""
    patient = _get_patient(account_id)
    return {
        'patient': patient,
        'exercises': assignable_exercises(),
        'treatment_history': treatment_history(patient.nhs_number),
    }


def search_patients(query=''):
    """Active patients matching name, surname or illness text, or an exact NHS number."""
    patients = Account.query.filter(Account.role == Role.PATIENT)
    query = (query or '').strip()
    if query:
        patients = patients.filter(
            Account.name.icontains(query, autoescape=True) |
            Account.surname.icontains(query, autoescape=True) |
            Account.illness.icontains(query, autoescape=True) |
            (Account.nhs_number == query.replace(' ', ''))
        )
    return patients.order_by(Account.surname, Account.name).all()
