"""
Registration domain service - user sign-up and credential issuance.

This module contains the core business logic for user registration.

Registration pipeline
=====================

    1. validate email          -> InvalidFormat
    2. validate password       -> InvalidFormat (configured message)
    3. exists_by_email         -> EmailAlreadyRegistered
    4. generate identity key
    5. issue token
    6. build aggregate         -> InvalidFormat (blank phone field)
    7. save                    -> EmailAlreadyRegistered / UnexpectedError
    8. project to UserView

Email is checked before password, so a request that is invalid in both
respects always reports the email error.

Duplicate gate: steps 3 and 7 are not atomic together. Step 3 is only a
fast rejection; the repository's storage-level uniqueness constraint in
step 7 is authoritative and surfaces as EmailAlreadyRegistered too.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID

from .exceptions import EmailAlreadyRegistered
from .patterns import PatternValidator
from .ports import UserRepository
from .tokens import TokenService
from .users import PhoneInput, UserView, build_user, to_view

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: input validation, duplicate
    check, token issuance, aggregate construction and persistence.
    """

    repository: UserRepository
    validator: PatternValidator
    token_service: TokenService
    id_factory: Callable[[], UUID] = field(default=uuid.uuid4)

    def register(
        self,
        name: str,
        email: str,
        password: str,
        phones: list[PhoneInput] | None = None,
    ) -> UserView:
        """
        Register a new user and issue their token.

        Args:
            name: Display name
            email: Email address (stored as submitted)
            password: Password (stored as given)
            phones: Phones owned by the new user, may be empty

        Returns:
            Public view of the persisted user

        Raises:
            InvalidFormat: If email, password or a phone field is invalid
            EmailAlreadyRegistered: If the email is already registered
            UnexpectedError: On persistence or signing failure
        """
        self.validator.validate_email(email)
        self.validator.validate_password(password)

        if self.repository.exists_by_email(email):
            raise EmailAlreadyRegistered("Email already registered")

        user_id = self.id_factory()
        token = self.token_service.issue(email, user_id)
        user = build_user(name, email, password, token, user_id, phones)

        saved = self.repository.save(user)
        logger.info("Registered user %s with %d phone(s)", saved.id, len(saved.phones))
        return to_view(saved)

    def list_all(self) -> list[UserView]:
        """Public views of every persisted user, in repository order."""
        return [to_view(user) for user in self.repository.find_all()]
