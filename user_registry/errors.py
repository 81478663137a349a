"""Exceptions shared by the validator, the user store and the API layer"""
from typing import Optional


class RegistryError(Exception):
    """Base class for user registry failures.
    `message` is safe to return to API clients"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class UserValidationError(RegistryError):
    """A field is missing or malformed"""


class DuplicateKeyError(RegistryError):
    """emailId or loginId is already taken. `field` names the
    violated index when the database reports it"""


class NotFoundError(RegistryError):
    """Lookup returned no record"""


class StoreUnavailableError(RegistryError):
    """The document store failed or could not be reached"""
