# /physiohub/views/routes.py
from flask import render_template
from . import views_bp
from physiohub.extensions import limiter
from physiohub.models.account_models import Role
from physiohub.utils.decorators import audit_log, login_required, role_required
from .controllers import auth_controller, patient_controller, therapist_controller, admin_controller


# --- Public pages ---
@views_bp.route('/')
def home():
    return render_template('home.html')

@views_bp.route('/about')
def about():
    return render_template('about.html')


# --- Authentication ---
@views_bp.route('/register', methods=['GET', 'POST'])
@limiter.limit("5 per hour", methods=['POST'])
@audit_log("USER_REGISTRATION", "accounts")
def register():
    return auth_controller.register_account()

@views_bp.route('/login', methods=['GET', 'POST'])
@limiter.limit("10 per minute", methods=['POST'])
@audit_log("USER_LOGIN", "authentication")
def login():
    return auth_controller.login_account()

@views_bp.route('/logout')
@login_required
@audit_log("USER_LOGOUT", "authentication", methods=("GET",))
def logout():
    return auth_controller.logout_account()


# --- Patient ---
@views_bp.route('/patient/dashboard')
@role_required(Role.PATIENT)
def patient_dashboard(principal):
    return patient_controller.get_dashboard(principal)

@views_bp.route('/patient/illness', methods=['POST'])
@audit_log("ILLNESS_SUBMISSION", "accounts")
@role_required(Role.PATIENT)
def submit_illness(principal):
    return patient_controller.submit_illness(principal)

@views_bp.route('/exercise/<int:exercise_id>')
@role_required(Role.PATIENT)
def view_exercise(principal, exercise_id):
    return patient_controller.view_exercise(principal, exercise_id)


# --- Therapist ---
@views_bp.route('/therapist/dashboard')
@role_required(Role.THERAPIST)
def therapist_dashboard(principal):
    return therapist_controller.search_patients(principal)

@views_bp.route('/therapist/patient/<int:account_id>')
@role_required(Role.THERAPIST)
def therapist_patient(principal, account_id):
    return therapist_controller.get_patient(principal, account_id)

@views_bp.route('/therapist/assign/<int:account_id>', methods=['POST'])
@audit_log("EXERCISE_ASSIGNMENT", "treatments")
@role_required(Role.THERAPIST)
def assign_exercises(principal, account_id):
    return therapist_controller.assign_exercises(principal, account_id)


# --- Admin ---
@views_bp.route('/admin/dashboard')
@role_required(Role.ADMIN)
def admin_dashboard(principal):
    return admin_controller.list_accounts(principal)

@views_bp.route('/admin/edit/<int:account_id>', methods=['GET', 'POST'])
@audit_log("ACCOUNT_EDIT", "accounts")
@role_required(Role.ADMIN)
def admin_edit(principal, account_id):
    return admin_controller.edit_account(principal, account_id)

@views_bp.route('/admin/deactivate/<int:account_id>', methods=['POST'])
@audit_log("ACCOUNT_DEACTIVATION", "accounts")
@role_required(Role.ADMIN)
def admin_deactivate(principal, account_id):
    return admin_controller.deactivate_account(principal, account_id)
