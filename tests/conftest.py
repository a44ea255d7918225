"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Pattern validator and token service instances
- In-memory repository and registration service
- Application environment for the in-memory backend
- PostgreSQL connection pool (skipped when no database is reachable)
"""

import os
from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.memory import InMemoryUserRepository
from src.adapters.repository.postgres import run_migrations
from src.config.settings import Settings, get_settings
from src.domain.patterns import PatternValidator
from src.domain.registration import RegistrationService
from src.domain.tokens import TokenService
from tests.constants import (
    EMAIL_PATTERN,
    JWT_EXPIRATION_MS,
    JWT_SECRET,
    PASSWORD_MESSAGE,
    PASSWORD_PATTERN,
)


@pytest.fixture
def validator() -> PatternValidator:
    """Validator bound to the test patterns."""
    return PatternValidator(EMAIL_PATTERN, PASSWORD_PATTERN, PASSWORD_MESSAGE)


@pytest.fixture
def token_service() -> TokenService:
    """Token service with a 24h expiry."""
    return TokenService(secret=JWT_SECRET, expiration_ms=JWT_EXPIRATION_MS)


@pytest.fixture
def memory_repository() -> InMemoryUserRepository:
    """Fresh in-memory repository for each test."""
    return InMemoryUserRepository()


@pytest.fixture
def service(
    memory_repository: InMemoryUserRepository,
    validator: PatternValidator,
    token_service: TokenService,
) -> RegistrationService:
    """Registration service wired to the in-memory repository."""
    return RegistrationService(
        repository=memory_repository,
        validator=validator,
        token_service=token_service,
    )


@pytest.fixture
def app_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Environment for starting the application with the in-memory backend."""
    monkeypatch.setenv("REPOSITORY_BACKEND", "memory")
    monkeypatch.setenv("EMAIL_PATTERN", EMAIL_PATTERN)
    monkeypatch.setenv("PASSWORD_PATTERN", PASSWORD_PATTERN)
    monkeypatch.setenv("PASSWORD_MESSAGE", PASSWORD_MESSAGE)
    monkeypatch.setenv("JWT_SECRET", JWT_SECRET)
    monkeypatch.setenv("JWT_EXPIRATION_MS", str(JWT_EXPIRATION_MS))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def postgres_pool() -> Generator[ConnectionPool, None, None]:
    """
    Connection pool against the configured PostgreSQL database.

    Skips the requesting test when the database is unreachable.
    Runs migrations once per session.
    """
    database_url = os.environ.get("DATABASE_URL", Settings.model_fields["database_url"].default)
    try:
        with psycopg.connect(database_url, connect_timeout=2):
            pass
    except psycopg.OperationalError:
        pytest.skip("PostgreSQL is not reachable")

    pool = ConnectionPool(conninfo=database_url, min_size=1, max_size=10, open=True)
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_users(postgres_pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty the users table (phones cascade) before a test."""
    with postgres_pool.connection() as conn:
        conn.execute("DELETE FROM users")
        conn.commit()
    yield
