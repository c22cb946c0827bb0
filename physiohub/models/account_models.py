import enum
import re
from datetime import datetime
from flask import current_app
from physiohub.extensions import db, bcrypt
from physiohub.errors import WeakPassword

PASSWORD_POLICY = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[^\da-zA-Z]).{8,}$')


class Role(str, enum.Enum):
    """Account roles. DEACTIVATED is terminal and has no dashboard."""
    PATIENT = 'patient'
    THERAPIST = 'therapist'
    ADMIN = 'admin'
    DEACTIVATED = 'deactivated'


# Roles a visitor may pick on the public registration form
REGISTRABLE_ROLES = (Role.PATIENT, Role.THERAPIST)


class Account(db.Model):
    """A patient, therapist or admin. Accounts are deactivated, never deleted."""
    __tablename__ = 'accounts'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(Role, name='account_role', values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=Role.PATIENT
    )
    nhs_number = db.Column(db.String(10), unique=True, nullable=False, index=True)

    # --- Profile ---
    name = db.Column(db.String(100), nullable=False)
    surname = db.Column(db.String(100), nullable=False)
    dob = db.Column(db.Date)
    address = db.Column(db.String(255))
    email = db.Column(db.String(255))

    # --- Treatment workflow ---
    illness = db.Column(db.Text)
    attended = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_active(self):
        return self.role != Role.DEACTIVATED

    @property
    def full_name(self):
        return f'{self.name} {self.surname}'.strip()

    @staticmethod
    def _pepper(password: str) -> str:
        return password + current_app.config['BCRYPT_PEPPER']

    def set_password(self, password: str) -> None:
        """Hashes and sets the account's password, enforcing complexity rules."""
        if not self._validate_password_strength(password):
            raise WeakPassword()
        self.password_hash = bcrypt.generate_password_hash(self._pepper(password)).decode('utf-8')

    def check_password(self, password: str) -> bool:
        """Constant-time check of the peppered password against the stored hash."""
        return bcrypt.check_password_hash(self.password_hash, self._pepper(password or ''))

    @staticmethod
    def _validate_password_strength(password: str) -> bool:
        """Validates that a password meets the required complexity."""
        return bool(password) and PASSWORD_POLICY.match(password) is not None

    def __repr__(self):
        return f'<Account {self.id} {self.username} ({self.role.value})>'
