from flask import request, render_template, redirect, url_for, flash
from physiohub.services import treatment_service


def _prescriptions_from_form(form):
    """Reads the selected exercises in submission order.

    Each selected ``exercise_id`` carries ``duration-<id>``, ``reps-<id>``
    and ``perWeek-<id>`` fields.
    """
    return [
        {
            'exercise_id': exercise_id,
            'duration': form.get(f'duration-{exercise_id}'),
            'reps': form.get(f'reps-{exercise_id}'),
            'perWeek': form.get(f'perWeek-{exercise_id}'),
        }
        for exercise_id in form.getlist('exercise_id')
    ]


def search_patients(principal):
    query = request.args.get('search', '')
    patients = treatment_service.search_patients(query)
    return render_template('therapist_dashboard.html', patients=patients, search=query)


def get_patient(principal, account_id):
    detail = treatment_service.get_patient_detail(account_id)
    return render_template('therapist_patient.html', **detail)


def assign_exercises(principal, account_id):
    items = _prescriptions_from_form(request.form)
    treatment_service.assign_exercises(account_id, items)
    flash(f'Successfully assigned {len(items)} exercise(s)!', 'success')
    return redirect(url_for('views.therapist_dashboard'))
