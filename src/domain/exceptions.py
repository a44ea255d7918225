"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Messages never carry passwords, tokens or signing secrets.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class InvalidFormat(RegistrationError):
    """Input does not match a configured pattern (user-correctable)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmailAlreadyRegistered(RegistrationError):
    """Email already belongs to a persisted user."""

    pass


class ConfigurationError(RegistrationError):
    """Blank or invalid pattern, or undersized signing secret. Fatal at startup."""

    pass


class MalformedToken(RegistrationError):
    """Token could not be decoded or failed validation during claim extraction."""

    pass


class UnexpectedError(RegistrationError):
    """Persistence or signing failure not covered by the other kinds."""

    pass
