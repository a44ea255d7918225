"""
In-memory repository adapter - Implements UserRepository protocol.

Keeps aggregates in process memory behind a single lock. Gives the same
guarantees as the PostgreSQL adapter: case-insensitive email uniqueness
checked inside save(), and all-or-nothing writes of a user with its phones.
Intended for local runs (REPOSITORY_BACKEND=memory) and tests.
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timezone
from uuid import UUID

from src.domain.exceptions import EmailAlreadyRegistered
from src.domain.users import User, copy_user, stamp_created, stamp_modified

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryUserRepository:
    """
    Implements UserRepository protocol with a dict guarded by a lock.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Stored aggregates are copies, so callers cannot mutate them in place.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._users: dict[UUID, User] = {}
        self._lock = threading.Lock()

    def exists_by_email(self, email: str) -> bool:
        with self._lock:
            return self._owner_of(email) is not None

    def save(self, user: User) -> User:
        """
        Store a copy of the aggregate, stamping its timestamps.

        Raises:
            EmailAlreadyRegistered: If another user already holds the email
        """
        stored = copy_user(user)
        with self._lock:
            owner = self._owner_of(stored.email)
            if owner is not None and owner != stored.id:
                raise EmailAlreadyRegistered("Email already registered")

            if stored.is_persisted and stored.id in self._users:
                stamp_modified(stored, self._clock())
            else:
                stamp_created(stored, self._clock())
            self._users[stored.id] = stored

        logger.debug("Stored user %s", stored.id)
        return copy_user(stored)

    def find_all(self) -> list[User]:
        with self._lock:
            return [copy_user(user) for user in self._users.values()]

    def _owner_of(self, email: str) -> UUID | None:
        key = email.lower()
        for user in self._users.values():
            if user.email.lower() == key:
                return user.id
        return None
