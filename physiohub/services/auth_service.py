"""Registration and login against the account store."""
import re
import secrets
from dataclasses import dataclass
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from physiohub.extensions import bcrypt, db
from physiohub.errors import (
    DuplicateIdentity, InvalidCredentials, InvalidInput, InvalidRole, StorageFailure
)
from physiohub.models.account_models import Account, Role, REGISTRABLE_ROLES

USERNAME_PATTERN = re.compile(r'^[A-Za-z0-9_.-]{3,50}$')
NHS_NUMBER_PATTERN = re.compile(r'^\d{10}$')
EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

REQUIRED_FIELDS = ('username', 'password', 'nhs_number', 'name', 'surname', 'email')


@dataclass(frozen=True)
class Principal:
    """The authenticated identity carried by a session."""
    account_id: int
    username: str
    role: Role

    @classmethod
    def for_account(cls, account):
        return cls(account_id=account.id, username=account.username, role=account.role)


def parse_role(value):
    try:
        return Role(value)
    except ValueError:
        raise InvalidRole()


def normalize_nhs_number(value):
    nhs_number = (value or '').replace(' ', '')
    if not NHS_NUMBER_PATTERN.match(nhs_number):
        raise InvalidInput('NHS number must be 10 digits.')
    return nhs_number


def validate_email(value):
    email = (value or '').strip()
    if not EMAIL_PATTERN.match(email):
        raise InvalidInput('Please enter a valid email address.')
    return email


def parse_dob(value):
    """Parses an optional YYYY-MM-DD date of birth."""
    if not value:
        return None
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        raise InvalidInput('Date of birth must be in YYYY-MM-DD format.')


def register(data, role, allowed_roles=REGISTRABLE_ROLES):
    """Creates a new account with a peppered bcrypt hash.

    Args:
        data (dict): username, password, nhs_number, name, surname, email
            and optionally dob and address.
        role (str | Role): requested role; must be one of ``allowed_roles``.
        allowed_roles (tuple): roles this entry point may create.

    Returns:
        Account: the persisted account.
    """
    role = parse_role(role)
    if role not in allowed_roles:
        raise InvalidRole()

    missing = [field for field in REQUIRED_FIELDS if not (data.get(field) or '').strip()]
    if missing:
        raise InvalidInput(f"Missing required fields: {', '.join(missing)}")

    username = data['username'].strip()
    if not USERNAME_PATTERN.match(username):
        raise InvalidInput('Username must be 3-50 letters, digits, dots, dashes or underscores.')
    nhs_number = normalize_nhs_number(data['nhs_number'])

    account = Account(
        username=username,
        role=role,
        nhs_number=nhs_number,
        name=data['name'].strip(),
        surname=data['surname'].strip(),
        dob=parse_dob(data.get('dob')),
        address=(data.get('address') or '').strip() or None,
        email=validate_email(data['email']),
        attended=False,
        illness=None
    )
    account.set_password(data['password'])

    if Account.query.filter((Account.username == username) | (Account.nhs_number == nhs_number)).first():
        raise DuplicateIdentity()

    try:
        db.session.add(account)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateIdentity()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error registering {username}: {e}')
        raise StorageFailure('Error registering user.')

    current_app.logger.info(f'Registered {account!r}')
    return account


def _check_dummy_password(password):
    """Spends one bcrypt check when there is no usable account to check against."""
    dummy_hash = current_app.extensions.get('physiohub_dummy_hash')
    if dummy_hash is None:
        dummy_hash = bcrypt.generate_password_hash(Account._pepper(secrets.token_hex(16)))
        current_app.extensions['physiohub_dummy_hash'] = dummy_hash
    bcrypt.check_password_hash(dummy_hash, Account._pepper(password or ''))


def login(username, password):
    """Verifies credentials and returns the session principal.

    Unknown usernames, deactivated accounts and wrong passwords all raise the
    same InvalidCredentials error.
    """
    account = None
    if username:
        account = Account.query.filter_by(username=username.strip()).first()

    if not account or not account.is_active:
        _check_dummy_password(password)
        raise InvalidCredentials()
    if not account.check_password(password):
        raise InvalidCredentials()

    return Principal.for_account(account)
