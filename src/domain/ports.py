"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Protocol

from .users import User


class UserRepository(Protocol):
    """Port interface for user aggregate persistence."""

    def exists_by_email(self, email: str) -> bool:
        """
        Check whether a user with this email is already stored.

        Comparison is case-insensitive. This is a fast-path check only;
        save() is the authoritative uniqueness gate.

        Case folding is the backend's own: the in-memory adapter uses
        str.lower(), PostgreSQL uses SQL lower() under the database
        collation. Both agree on ASCII; outside ASCII (e.g. "İ") two
        backends may disagree on whether two emails collide.

        Args:
            email: Email as submitted

        Returns:
            True if a user with a matching email exists
        """
        ...

    def save(self, user: User) -> User:
        """
        Persist a user together with its phones in one atomic write.

        Stamps created/modified/last_login on first save and modified on
        every later save (see users.stamp_created / users.stamp_modified).
        Either the user and all its phones are stored, or nothing is.

        Args:
            user: Aggregate built by users.build_user

        Returns:
            The persisted aggregate with timestamps set

        Raises:
            EmailAlreadyRegistered: If the storage uniqueness constraint rejects the email
            UnexpectedError: On any other storage failure
        """
        ...

    def find_all(self) -> list[User]:
        """
        Return every persisted user with its phones.

        No ordering or repeatable-read guarantee.
        """
        ...
