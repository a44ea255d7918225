"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Consistency Design:
------------------
1. **Uniqueness**: A UNIQUE index on lower(email) is the authoritative
   duplicate gate. exists_by_email() is only a fast path; concurrent
   registrations that both pass it are resolved by the index, and the
   resulting UniqueViolation is reported as EmailAlreadyRegistered.

2. **Atomicity**: The user row and all its phone rows are written inside
   one transaction. Any failure rolls back the whole aggregate.

3. **Lifecycle**: Timestamps are stamped here, at save time, through
   users.stamp_created / users.stamp_modified.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

import psycopg
from psycopg.errors import UniqueViolation
from psycopg_pool import ConnectionPool

from src.domain.exceptions import EmailAlreadyRegistered, UnexpectedError
from src.domain.users import Phone, User, copy_user, stamp_created, stamp_modified

logger = logging.getLogger(__name__)

EMAIL_UNIQUE_INDEX = "users_email_lower_key"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool, clock: Callable[[], datetime] = _utcnow) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            clock: Source of save timestamps
        """
        self._pool = pool
        self._clock = clock

    def exists_by_email(self, email: str) -> bool:
        sql = "SELECT EXISTS (SELECT 1 FROM users WHERE lower(email) = lower(%s))"

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            logger.error("Email lookup failed: %s", type(e).__name__)
            raise UnexpectedError("User lookup failed") from e
        return bool(row[0])

    def save(self, user: User) -> User:
        """
        Insert or update a user and its phones in a single transaction.

        The first save inserts and stamps all timestamps; later saves
        update the user row, restamp modified and replace its phones.

        Returns:
            A stamped copy of the aggregate as stored

        Raises:
            EmailAlreadyRegistered: If the email unique index rejects the row
            UnexpectedError: On any other database failure
        """
        insert_user_sql = """
            INSERT INTO users (id, name, email, password, token, is_active, created, modified, last_login)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
        """

        update_user_sql = """
            UPDATE users
            SET name = %s, email = %s, password = %s, token = %s, is_active = %s, modified = %s
            WHERE id = %s
        """

        delete_phones_sql = "DELETE FROM phones WHERE user_id = %s"

        insert_phone_sql = """
            INSERT INTO phones (number, city_code, country_code, user_id)
            VALUES (%s, %s, %s, %s)
        """

        stored = copy_user(user)
        is_new = not stored.is_persisted
        if is_new:
            stamp_created(stored, self._clock())
        else:
            stamp_modified(stored, self._clock())

        try:
            with self._pool.connection() as conn, conn.transaction(), conn.cursor() as cursor:
                if is_new:
                    cursor.execute(
                        insert_user_sql,
                        (
                            stored.id,
                            stored.name,
                            stored.email,
                            stored.password,
                            stored.token,
                            stored.is_active,
                            stored.created,
                            stored.modified,
                            stored.last_login,
                        ),
                    )
                else:
                    cursor.execute(
                        update_user_sql,
                        (
                            stored.name,
                            stored.email,
                            stored.password,
                            stored.token,
                            stored.is_active,
                            stored.modified,
                            stored.id,
                        ),
                    )
                    cursor.execute(delete_phones_sql, (stored.id,))

                if stored.phones:
                    cursor.executemany(
                        insert_phone_sql,
                        [
                            (phone.number, phone.city_code, phone.country_code, stored.id)
                            for phone in stored.phones
                        ],
                    )
        except UniqueViolation as e:
            if e.diag.constraint_name == EMAIL_UNIQUE_INDEX:
                raise EmailAlreadyRegistered("Email already registered") from e
            logger.error("Unique constraint %s violated saving user %s", e.diag.constraint_name, stored.id)
            raise UnexpectedError("Failed to persist user") from e
        except psycopg.Error as e:
            logger.error("Failed to save user %s: %s", stored.id, type(e).__name__)
            raise UnexpectedError("Failed to persist user") from e

        return stored

    def find_all(self) -> list[User]:
        users_sql = """
            SELECT id, name, email, password, token, is_active, created, modified, last_login
            FROM users
            ORDER BY created, id
        """

        phones_sql = """
            SELECT user_id, number, city_code, country_code
            FROM phones
            ORDER BY id
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(users_sql)
                user_rows = cursor.fetchall()
                cursor.execute(phones_sql)
                phone_rows = cursor.fetchall()
        except psycopg.Error as e:
            logger.error("Failed to list users: %s", type(e).__name__)
            raise UnexpectedError("Failed to list users") from e

        users = {
            row[0]: User(
                id=row[0],
                name=row[1],
                email=row[2],
                password=row[3],
                token=row[4],
                is_active=row[5],
                created=row[6],
                modified=row[7],
                last_login=row[8],
            )
            for row in user_rows
        }
        for user_id, number, city_code, country_code in phone_rows:
            owner = users.get(user_id)
            # Phones of a user inserted between the two reads
            if owner is None:
                continue
            owner.phones.append(
                Phone(number=number, city_code=city_code, country_code=country_code, user_id=user_id)
            )
        return list(users.values())


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
