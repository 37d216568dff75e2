"""
Custom Exceptions

This module defines custom exceptions for better error handling
and more specific error messages.

The auth errors carry the message sent back to the client; the HTTP
status is decided by the exception handlers registered in ``main``.
"""


class BookingAPIException(Exception):
    """Base exception for the booking service."""
    pass


class ConfigurationError(BookingAPIException):
    """Raised when the application is started with unusable settings."""

    def __init__(self, setting: str, reason: str):
        self.setting = setting
        self.reason = reason
        super().__init__(f"Invalid setting {setting}: {reason}")


class AuthError(BookingAPIException):
    """Base class for authentication and authorization failures."""

    message = "Access Denied"

    def __init__(self, reason: str = ""):
        self.reason = reason
        super().__init__(reason or self.message)


class AuthMissingError(AuthError):
    """Raised when a request carries no session token."""
    pass


class AuthInvalidError(AuthError):
    """Raised when a session token fails signature or expiry checks."""
    pass


class OwnershipMismatchError(AuthError):
    """Raised when the token identity does not own the requested resource."""

    message = "Unauthorized Access"

    def __init__(self, identity: str, requested: str | None):
        self.identity = identity
        self.requested = requested
        super().__init__(f"identity {identity!r} requested bookings of {requested!r}")


class DatabaseError(BookingAPIException):
    """Raised when database operations fail."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")


class InvalidIdentifierError(DatabaseError):
    """Raised when a document identifier is not in the datastore's format."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"'{identifier}' is not a valid document identifier")
