"""
Unit tests for pattern validation.

Tests verify:
- Full-string (anchored) matching semantics
- Configured password failure message
- Blank or invalid patterns are configuration errors
"""

import pytest

from src.domain.exceptions import ConfigurationError, InvalidFormat
from src.domain.patterns import (
    INVALID_EMAIL_MESSAGE,
    PatternValidator,
    validate_email,
    validate_password,
)
from tests.constants import EMAIL_PATTERN, PASSWORD_MESSAGE, PASSWORD_PATTERN


class TestValidateEmail:
    """Tests for validate_email()."""

    def test_valid_email_passes(self) -> None:
        """A well-formed email does not raise."""
        validate_email("juan@rodriguez.org", EMAIL_PATTERN)

    def test_invalid_email_raises_invalid_format(self) -> None:
        """An email without @ is rejected with the email message."""
        with pytest.raises(InvalidFormat) as exc_info:
            validate_email("invalid-email", EMAIL_PATTERN)
        assert exc_info.value.message == INVALID_EMAIL_MESSAGE

    def test_match_must_cover_whole_string(self) -> None:
        """A candidate merely containing a valid email is rejected."""
        with pytest.raises(InvalidFormat):
            validate_email("junk juan@rodriguez.org junk", EMAIL_PATTERN)

    def test_trailing_newline_rejected(self) -> None:
        """fullmatch does not tolerate a trailing newline the way $ does."""
        with pytest.raises(InvalidFormat):
            validate_email("juan@rodriguez.org\n", EMAIL_PATTERN)

    @pytest.mark.parametrize("pattern", ["", "   ", None])
    def test_blank_pattern_is_configuration_error(self, pattern: str | None) -> None:
        """Blank pattern never acts as a permissive match."""
        with pytest.raises(ConfigurationError):
            validate_email("juan@rodriguez.org", pattern)


class TestValidatePassword:
    """Tests for validate_password()."""

    def test_matching_password_passes(self) -> None:
        validate_password("hunter2", PASSWORD_PATTERN, PASSWORD_MESSAGE)

    def test_short_password_raises_configured_message(self) -> None:
        """Failure carries the configured message verbatim."""
        with pytest.raises(InvalidFormat) as exc_info:
            validate_password("abc", PASSWORD_PATTERN, PASSWORD_MESSAGE)
        assert str(exc_info.value) == PASSWORD_MESSAGE

    def test_password_message_differs_from_email_message(self) -> None:
        with pytest.raises(InvalidFormat) as exc_info:
            validate_password("abc", PASSWORD_PATTERN, PASSWORD_MESSAGE)
        assert exc_info.value.message != INVALID_EMAIL_MESSAGE

    def test_partial_match_rejected(self) -> None:
        """Only digits allowed: a password with a digit run inside letters fails."""
        with pytest.raises(InvalidFormat):
            validate_password("abc123456xyz", r"\d{6}", "digits only")

    def test_blank_pattern_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            validate_password("hunter2", "", PASSWORD_MESSAGE)


class TestPatternValidator:
    """Tests for the configured PatternValidator."""

    def test_validates_with_bound_patterns(self, validator: PatternValidator) -> None:
        validator.validate_email("juan@rodriguez.org")
        validator.validate_password("hunter2")

    def test_rejects_invalid_email(self, validator: PatternValidator) -> None:
        with pytest.raises(InvalidFormat, match=INVALID_EMAIL_MESSAGE):
            validator.validate_email("invalid-email")

    def test_rejects_invalid_password(self, validator: PatternValidator) -> None:
        with pytest.raises(InvalidFormat, match=PASSWORD_MESSAGE):
            validator.validate_password("short")

    def test_blank_email_pattern_fails_at_construction(self) -> None:
        with pytest.raises(ConfigurationError):
            PatternValidator("", PASSWORD_PATTERN, PASSWORD_MESSAGE)

    def test_blank_password_pattern_fails_at_construction(self) -> None:
        with pytest.raises(ConfigurationError):
            PatternValidator(EMAIL_PATTERN, " ", PASSWORD_MESSAGE)

    def test_uncompilable_pattern_fails_at_construction(self) -> None:
        with pytest.raises(ConfigurationError):
            PatternValidator("[unclosed", PASSWORD_PATTERN, PASSWORD_MESSAGE)

    def test_blank_password_message_fails_at_construction(self) -> None:
        with pytest.raises(ConfigurationError):
            PatternValidator(EMAIL_PATTERN, PASSWORD_PATTERN, "")
