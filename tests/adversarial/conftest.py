"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition and token forgery tests.
"""

import threading

import pytest

from src.domain.users import User

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


class GatedRepository:
    """
    Repository wrapper that holds every caller at the existence check.

    All threads pass exists_by_email() before any of them reaches save(),
    reproducing the check-then-act window between concurrent registrations.
    """

    def __init__(self, inner, parties: int) -> None:
        self._inner = inner
        self._barrier = threading.Barrier(parties, timeout=10)

    def exists_by_email(self, email: str) -> bool:
        exists = self._inner.exists_by_email(email)
        self._barrier.wait()
        return exists

    def save(self, user: User) -> User:
        return self._inner.save(user)

    def find_all(self) -> list[User]:
        return self._inner.find_all()


@pytest.fixture
def gate():
    """Factory wrapping a repository in a GatedRepository."""
    return GatedRepository
