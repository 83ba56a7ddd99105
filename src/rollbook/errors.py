from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when a request is not authenticated."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class DuplicateKeyError(ValidationError):
    """Raised when a write would violate a uniqueness constraint."""

    def __init__(self, message: str = "Roll number already exists") -> None:
        super().__init__(message)


class InvalidTokenError(Exception):
    """Raised when a session token cannot be verified.

    Not a UserError: the access layer translates it into an AuthenticationError
    so token internals never reach the client.
    """
