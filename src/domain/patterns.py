"""
Pattern validation for registration input.

Patterns come from configuration and must match the whole candidate
string (re.fullmatch). A blank or uncompilable pattern is a configuration
error, never a permissive match.
"""

import re

from .exceptions import ConfigurationError, InvalidFormat

INVALID_EMAIL_MESSAGE = "Invalid email format"


def compile_pattern(pattern: str | None, name: str) -> re.Pattern[str]:
    """
    Compile a configured pattern.

    Raises:
        ConfigurationError: If the pattern is blank, absent or not a valid regex
    """
    if pattern is None or not pattern.strip():
        raise ConfigurationError(f"{name} pattern is not configured")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"{name} pattern is not a valid regular expression") from e


def validate_email(candidate: str, pattern: str | re.Pattern[str]) -> None:
    """
    Raises:
        InvalidFormat: If candidate does not fully match pattern
    """
    compiled = pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern, "Email")
    if compiled.fullmatch(candidate) is None:
        raise InvalidFormat(INVALID_EMAIL_MESSAGE)


def validate_password(
    candidate: str, pattern: str | re.Pattern[str], failure_message: str
) -> None:
    """
    Raises:
        InvalidFormat: Carrying failure_message, if candidate does not fully match
    """
    compiled = (
        pattern if isinstance(pattern, re.Pattern) else compile_pattern(pattern, "Password")
    )
    if compiled.fullmatch(candidate) is None:
        raise InvalidFormat(failure_message)


class PatternValidator:
    """Email and password validation bound to configured patterns."""

    def __init__(self, email_pattern: str, password_pattern: str, password_message: str) -> None:
        self._email = compile_pattern(email_pattern, "Email")
        self._password = compile_pattern(password_pattern, "Password")
        if not password_message or not password_message.strip():
            raise ConfigurationError("Password failure message is not configured")
        self._password_message = password_message

    def validate_email(self, candidate: str) -> None:
        validate_email(candidate, self._email)

    def validate_password(self, candidate: str) -> None:
        validate_password(candidate, self._password, self._password_message)
