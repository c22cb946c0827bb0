import click
from flask import current_app
from flask.cli import with_appcontext
from physiohub.extensions import db, bcrypt
from physiohub.errors import PhysioHubError
from physiohub.models.account_models import Role
from physiohub.models.treatment_models import Exercise, DEFAULT_EXERCISES
from physiohub.models import system_models  # noqa: F401  (registers audit_logs)
from physiohub.services import auth_service


def seed_exercises():
    """Adds any missing catalogue exercises; returns how many were added."""
    added = 0
    for exercise_data in DEFAULT_EXERCISES:
        if not Exercise.query.filter_by(name=exercise_data['name']).first():
            db.session.add(Exercise(**exercise_data))
            added += 1
    db.session.commit()
    return added


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create all tables and seed the exercise catalogue."""
    db.create_all()
    added = seed_exercises()
    click.echo(f"Database initialized successfully ({added} exercise(s) added).")


@click.command('create-admin')
@click.option('--username', prompt=True)
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@click.option('--nhs-number', prompt='NHS number')
@click.option('--name', prompt=True)
@click.option('--surname', prompt=True)
@click.option('--email', prompt=True)
@with_appcontext
def create_admin_command(username, password, nhs_number, name, surname, email):
    """Create an admin account."""
    data = {
        'username': username,
        'password': password,
        'nhs_number': nhs_number,
        'name': name,
        'surname': surname,
        'email': email,
    }
    try:
        account = auth_service.register(data, Role.ADMIN, allowed_roles=(Role.ADMIN,))
    except PhysioHubError as e:
        raise click.ClickException(e.message)
    click.echo(f"Admin '{account.username}' created with id {account.id}.")


@click.command('hash-password')
@click.argument('password')
@with_appcontext
def hash_password_command(password):
    """Print a peppered bcrypt hash for seeding an account by hand."""
    peppered = password + current_app.config['BCRYPT_PEPPER']
    click.echo(bcrypt.generate_password_hash(peppered).decode('utf-8'))


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(create_admin_command)
    app.cli.add_command(hash_password_command)
