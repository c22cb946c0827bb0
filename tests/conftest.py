import pytest

from config import TestingConfig
from physiohub import create_app
from physiohub.commands import seed_exercises
from physiohub.extensions import db as _db
from physiohub.models.account_models import Role
from physiohub.models.treatment_models import Exercise
from physiohub.services import auth_service

PASSWORD = 'Passw0rd!'


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        _db.create_all()
        seed_exercises()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_account(app):
    counter = {'n': 0}

    def _make(role=Role.PATIENT, username=None, nhs_number=None, password=PASSWORD, **profile):
        counter['n'] += 1
        n = counter['n']
        data = {
            'username': username or f'user{n}',
            'password': password,
            'nhs_number': nhs_number or f'{9000000000 + n}',
            'name': profile.pop('name', f'Name{n}'),
            'surname': profile.pop('surname', f'Surname{n}'),
            'email': profile.pop('email', f'user{n}@example.com'),
        }
        data.update(profile)
        return auth_service.register(data, role, allowed_roles=tuple(Role))

    return _make


@pytest.fixture
def patient(make_account):
    return make_account(Role.PATIENT, username='patient', name='Sandro', surname='Verrone')


@pytest.fixture
def therapist(make_account):
    return make_account(Role.THERAPIST, username='therapist', name='Dave', surname='Rowland')


@pytest.fixture
def admin(make_account):
    return make_account(Role.ADMIN, username='admin', name='Gold', surname='Smith')


@pytest.fixture
def exercises(app):
    return Exercise.query.order_by(Exercise.id).all()


@pytest.fixture
def login(client):
    def _login(username, password=PASSWORD):
        return client.post('/login', data={'username': username, 'password': password})
    return _login


def flashes(client):
    """Pending (category, message) notices in the client's session."""
    with client.session_transaction() as session:
        return list(session.get('_flashes', []))
