"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for user registration and
token issuance. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    ConfigurationError,
    EmailAlreadyRegistered,
    InvalidFormat,
    MalformedToken,
    RegistrationError,
    UnexpectedError,
)
from .patterns import PatternValidator
from .ports import UserRepository
from .registration import RegistrationService
from .tokens import TokenService
from .users import Phone, PhoneInput, User, UserView, build_user, to_view

__all__ = [
    "ConfigurationError",
    "EmailAlreadyRegistered",
    "InvalidFormat",
    "MalformedToken",
    "PatternValidator",
    "Phone",
    "PhoneInput",
    "RegistrationError",
    "RegistrationService",
    "TokenService",
    "UnexpectedError",
    "User",
    "UserRepository",
    "UserView",
    "build_user",
    "to_view",
]
