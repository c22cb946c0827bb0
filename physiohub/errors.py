# /physiohub/errors.py
"""Error taxonomy shared by the services and the request boundary.

Every error carries a user-facing message; the registered error handlers
turn them into a flash notice and a redirect.
"""


class PhysioHubError(Exception):
    """Base class for recoverable application errors."""
    message = 'Something went wrong.'
    category = 'error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidInput(PhysioHubError):
    message = 'Invalid input.'


class WeakPassword(InvalidInput):
    message = 'Password must be 8+ characters with lowercase, uppercase, number, and special char.'


class InvalidRole(InvalidInput):
    message = 'Invalid role selection.'


class DuplicateIdentity(PhysioHubError):
    message = 'Username or NHS number already exists.'


class InvalidCredentials(PhysioHubError):
    message = 'Invalid username or password.'


class AccessDenied(PhysioHubError):
    message = 'Access denied.'


class EmptySelection(PhysioHubError):
    message = 'Please select at least one exercise to assign.'


class InvalidPrescription(PhysioHubError):
    def __init__(self, exercise_name):
        self.exercise_name = exercise_name
        super().__init__(f'Invalid prescription value for exercise: {exercise_name}')


class SelfDeactivationForbidden(PhysioHubError):
    message = 'You cannot deactivate your own account.'


class NotFound(PhysioHubError):
    message = 'Not found.'


class StorageFailure(PhysioHubError):
    message = 'A database error occurred. Please try again.'


class ConfigurationError(PhysioHubError):
    """Raised at startup; never handled at the request boundary."""
    message = 'Invalid configuration.'
