"""
PostgreSQL repository adapter - Implements UserRepository and IntakeRepository.

This module provides the PostgreSQL implementation of the domain's
repository ports using psycopg3 with raw SQL.

Concurrency Design:
-------------------
No application-level locking is needed; the database enforces both
invariants that matter under concurrent requests:

1. **Unique email**: create_user uses INSERT ... ON CONFLICT (email) DO
   NOTHING. Of N concurrent inserts for one address exactly one returns
   a row; the rest return nothing and the domain raises DuplicateError.

2. **Single-use tokens**: consume_verification_token is a single UPDATE
   whose WHERE clause matches the digest and the expiry. A concurrent
   second UPDATE blocks on the row lock, re-evaluates the WHERE clause
   after the first commits, finds verify_token NULL and matches nothing.

Hidden columns (password_hash, verify_token, verify_token_expires) are
never part of _USER_COLUMNS; only find_credentials selects the hash.
"""

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from src.domain.exceptions import ServerError
from src.domain.ports import ContactMessage, DemoRequest, NewUser, User

logger = logging.getLogger(__name__)

_USER_COLUMNS = """
    id, name, email, phone, occupation, source,
    email_verified, created_at, updated_at
"""


def _to_user(row: dict[str, Any]) -> User:
    return User(
        id=str(row["id"]),
        name=row["name"],
        email=row["email"],
        phone=row["phone"],
        occupation=row["occupation"],
        source=row["source"],
        email_verified=row["email_verified"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except (TypeError, ValueError):
        return False
    return True


class _PostgresAdapter:
    """Shared pool handling and error translation."""

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    @contextmanager
    def _cursor(self) -> Iterator[psycopg.Cursor]:
        """
        Yield a dict-row cursor inside a committed transaction.

        Any psycopg error is logged and re-raised as ServerError so the
        domain never sees driver exceptions.
        """
        try:
            with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
                yield cursor
                conn.commit()
        except psycopg.Error as e:
            logger.exception("Database operation failed")
            raise ServerError() from e


class PostgresUserRepository(_PostgresAdapter):
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def create_user(self, new_user: NewUser) -> User | None:
        """
        Insert an unverified user unless the email is taken.

        Returns:
            The created user, or None on email conflict
        """
        sql = f"""
            INSERT INTO users (
                name, email, password_hash, phone, occupation, source,
                email_verified, verify_token, verify_token_expires
            )
            VALUES (%s, %s, %s, %s, %s, %s, FALSE, %s, %s)
            ON CONFLICT (email) DO NOTHING
            RETURNING {_USER_COLUMNS}
        """
        with self._cursor() as cursor:
            cursor.execute(
                sql,
                (
                    new_user.name,
                    new_user.email,
                    new_user.password_hash,
                    new_user.phone,
                    new_user.occupation,
                    new_user.source,
                    new_user.verify_token,
                    new_user.verify_token_expires,
                ),
            )
            row = cursor.fetchone()
        return _to_user(row) if row is not None else None

    def find_by_email(self, email: str) -> User | None:
        with self._cursor() as cursor:
            cursor.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s", (email,))
            row = cursor.fetchone()
        return _to_user(row) if row is not None else None

    def find_by_id(self, user_id: str) -> User | None:
        if not _is_uuid(user_id):
            return None
        with self._cursor() as cursor:
            cursor.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s::uuid", (user_id,))
            row = cursor.fetchone()
        return _to_user(row) if row is not None else None

    def find_credentials(self, email: str) -> tuple[User, str] | None:
        with self._cursor() as cursor:
            cursor.execute(
                f"SELECT {_USER_COLUMNS}, password_hash FROM users WHERE email = %s",
                (email,),
            )
            row = cursor.fetchone()
        if row is None:
            return None
        return _to_user(row), row["password_hash"]

    def consume_verification_token(self, token_digest: str, now: datetime) -> User | None:
        """
        Mark the token owner verified and clear the token in one statement.

        Returns:
            The verified user, or None if no unexpired token matched
        """
        sql = f"""
            UPDATE users
            SET email_verified = TRUE,
                verify_token = NULL,
                verify_token_expires = NULL,
                updated_at = NOW()
            WHERE verify_token = %s
              AND verify_token_expires > %s
            RETURNING {_USER_COLUMNS}
        """
        with self._cursor() as cursor:
            cursor.execute(sql, (token_digest, now))
            row = cursor.fetchone()
        return _to_user(row) if row is not None else None

    def replace_verification_token(
        self, user_id: str, token_digest: str, expires_at: datetime
    ) -> bool:
        """
        Overwrite token fields, but only while the user is unverified.

        Returns:
            True if a row was updated
        """
        if not _is_uuid(user_id):
            return False
        sql = """
            UPDATE users
            SET verify_token = %s,
                verify_token_expires = %s,
                updated_at = NOW()
            WHERE id = %s::uuid
              AND email_verified = FALSE
        """
        with self._cursor() as cursor:
            cursor.execute(sql, (token_digest, expires_at, user_id))
            return cursor.rowcount == 1


class PostgresIntakeRepository(_PostgresAdapter):
    """Implements IntakeRepository protocol via psycopg3."""

    def create_demo_request(
        self, name: str, email: str, contact: str, designation: str
    ) -> DemoRequest:
        sql = """
            INSERT INTO demo_requests (name, email, contact, designation)
            VALUES (%s, %s, %s, %s)
            RETURNING id, name, email, contact, designation, created_at, updated_at
        """
        with self._cursor() as cursor:
            cursor.execute(sql, (name, email, contact, designation))
            row = cursor.fetchone()
        return DemoRequest(**{**row, "id": str(row["id"])})

    def create_contact_message(
        self,
        name: str,
        email: str,
        message: str,
        phone: str | None,
        subject: str | None,
    ) -> ContactMessage:
        sql = """
            INSERT INTO contact_messages (name, email, phone, subject, message)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING id, name, email, phone, subject, message, created_at, updated_at
        """
        with self._cursor() as cursor:
            cursor.execute(sql, (name, email, phone, subject, message))
            row = cursor.fetchone()
        return ContactMessage(**{**row, "id": str(row["id"])})


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
            with pool.connection() as conn:
                conn.execute(sql_file.read_text())
            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
