from flask import request, render_template, redirect, url_for, flash
from physiohub.services import auth_service
from physiohub.utils.session_util import start_session, end_session, dashboard_endpoint

REGISTRATION_FIELDS = ('username', 'password', 'nhs_number', 'name', 'surname', 'dob', 'address', 'email')


def register_account():
    """Handles the public registration form."""
    if request.method == 'GET':
        return render_template('register.html')

    data = {field: request.form.get(field, '') for field in REGISTRATION_FIELDS}
    auth_service.register(data, request.form.get('role', ''))
    flash('Registered successfully. Please log in.', 'success')
    return redirect(url_for('views.login'))


def login_account():
    if request.method == 'GET':
        return render_template('login.html')

    username = request.form.get('username', '')
    principal = auth_service.login(username, request.form.get('password', ''))
    endpoint = dashboard_endpoint(principal.role)
    start_session(principal)
    flash(f'Welcome back, {principal.username}!', 'success')
    return redirect(url_for(endpoint))


def logout_account():
    end_session()
    flash('You have been logged out.', 'success')
    return redirect(url_for('views.login'))
