"""Admin account management."""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from physiohub.extensions import db
from physiohub.errors import InvalidInput, NotFound, SelfDeactivationForbidden, StorageFailure
from physiohub.models.account_models import Account, Role
from physiohub.services.auth_service import parse_dob, validate_email

EDITABLE_FIELDS = ('name', 'surname', 'email', 'address', 'dob', 'illness')


def list_accounts():
    return (Account.query
            .filter(Account.role != Role.DEACTIVATED)
            .order_by(Account.id)
            .all())


def get_account(account_id):
    account = db.session.get(Account, account_id)
    if not account:
        raise NotFound('User not found.')
    return account


def _clean(field, value):
    if field == 'illness':
        return (value or '').strip() or None
    if field == 'dob':
        return parse_dob(value)
    if field == 'email':
        return validate_email(value)
    if field in ('name', 'surname'):
        value = (value or '').strip()
        if not value:
            raise InvalidInput(f'{field.capitalize()} cannot be empty.')
        return value
    return (value or '').strip() or None


def edit_account(account_id, fields):
    """Applies a partial profile update.

    Only keys present in ``fields`` are touched; an empty illness clears it.

    Returns:
        bool: True if any column actually changed.
    """
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidInput(f"Cannot edit field(s): {', '.join(sorted(unknown))}")

    account = get_account(account_id)
    cleaned = {field: _clean(field, value) for field, value in fields.items()}
    changed = False
    for field, value in cleaned.items():
        if getattr(account, field) != value:
            setattr(account, field, value)
            changed = True

    if not changed:
        return False

    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Editing account {account_id} failed: {e}')
        raise StorageFailure()
    return True


def deactivate(account_id, acting_admin_id):
    """Soft-deletes an account; treatment history stays linked by NHS number."""
    if account_id == acting_admin_id:
        raise SelfDeactivationForbidden()

    account = get_account(account_id)
    account.role = Role.DEACTIVATED
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Deactivating account {account_id} failed: {e}')
        raise StorageFailure()

    current_app.logger.info(f'Account {account_id} deactivated by admin {acting_admin_id}')
    return account
