from flask import request, render_template, redirect, url_for, flash
from physiohub.services import treatment_service


def get_dashboard(principal):
    """Renders the patient's current treatment, or an empty plan if awaiting."""
    dashboard = treatment_service.get_dashboard(principal.account_id)
    return render_template(
        'patient_dashboard.html',
        patient=dashboard.account,
        treatment=dashboard.treatment,
        exercises=dashboard.exercises
    )


def submit_illness(principal):
    treatment_service.submit_illness(principal.account_id, request.form.get('illness'))
    flash('Illness submitted, awaiting confirmation from your therapist.', 'success')
    return redirect(url_for('views.patient_dashboard'))


def view_exercise(principal, exercise_id):
    exercise = treatment_service.get_exercise(exercise_id)
    return render_template('exercise.html', exercise=exercise)
