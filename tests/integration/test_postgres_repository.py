"""
Integration tests for the PostgreSQL repositories.

Tests repository operations against a real PostgreSQL database.
Requires PostgreSQL at DATABASE_URL (skipped otherwise).
"""

from datetime import datetime, timedelta, timezone

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresIntakeRepository, PostgresUserRepository
from src.domain.credentials import digest_verification_token
from src.domain.ports import NewUser

pytestmark = pytest.mark.integration

HASH = "$2b$12$abcdefghijklmnopqrstuuJ0Qm6H0q8m7bq2rZ7nYw1mNn7cK3y7a"


def now() -> datetime:
    return datetime.now(timezone.utc)


def pending(email: str = "ann@x.com", token: str = "raw-token", ttl: timedelta = timedelta(hours=24)) -> NewUser:
    return NewUser(
        name="Ann",
        email=email,
        password_hash=HASH,
        verify_token=digest_verification_token(token),
        verify_token_expires=now() + ttl,
        phone="9876543210",
    )


def token_columns(pool: ConnectionPool, email: str) -> tuple:
    with pool.connection() as conn, conn.cursor() as cursor:
        cursor.execute(
            "SELECT verify_token, verify_token_expires, email_verified FROM users WHERE email = %s",
            (email,),
        )
        return cursor.fetchone()


class TestCreateUser:
    def test_returns_unverified_user(self, repository: PostgresUserRepository) -> None:
        user = repository.create_user(pending())

        assert user is not None
        assert user.email == "ann@x.com"
        assert user.email_verified is False
        assert user.phone == "9876543210"
        assert len(user.id) == 36

    def test_duplicate_returns_none(self, repository: PostgresUserRepository) -> None:
        assert repository.create_user(pending()) is not None
        assert repository.create_user(pending(token="other")) is None

    def test_duplicate_creates_no_second_row(
        self, repository: PostgresUserRepository, pool: ConnectionPool
    ) -> None:
        repository.create_user(pending())
        repository.create_user(pending(token="other"))

        with pool.connection() as conn:
            count = conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
        assert count == 1

    def test_unnormalized_email_rejected_by_schema(self, repository: PostgresUserRepository) -> None:
        from src.domain.exceptions import ServerError

        with pytest.raises(ServerError):
            repository.create_user(pending(email="Ann@X.com"))


class TestFindUser:
    def test_find_by_email(self, repository: PostgresUserRepository) -> None:
        created = repository.create_user(pending())
        assert repository.find_by_email("ann@x.com") == created

    def test_find_by_id(self, repository: PostgresUserRepository) -> None:
        created = repository.create_user(pending())
        assert repository.find_by_id(created.id) == created

    def test_find_by_id_garbage_returns_none(self, repository: PostgresUserRepository) -> None:
        assert repository.find_by_id("not-a-uuid") is None

    def test_find_missing_returns_none(self, repository: PostgresUserRepository) -> None:
        assert repository.find_by_email("nobody@x.com") is None

    def test_find_credentials_exposes_hash(self, repository: PostgresUserRepository) -> None:
        repository.create_user(pending())

        user, password_hash = repository.find_credentials("ann@x.com")

        assert user.email == "ann@x.com"
        assert password_hash == HASH


class TestConsumeVerificationToken:
    def test_marks_verified_and_clears_token(
        self, repository: PostgresUserRepository, pool: ConnectionPool
    ) -> None:
        repository.create_user(pending())

        user = repository.consume_verification_token(digest_verification_token("raw-token"), now())

        assert user is not None and user.email_verified is True
        assert token_columns(pool, "ann@x.com") == (None, None, True)

    def test_second_consume_returns_none(self, repository: PostgresUserRepository) -> None:
        repository.create_user(pending())
        digest = digest_verification_token("raw-token")

        assert repository.consume_verification_token(digest, now()) is not None
        assert repository.consume_verification_token(digest, now()) is None

    def test_expired_token_not_consumed(
        self, repository: PostgresUserRepository, pool: ConnectionPool
    ) -> None:
        repository.create_user(pending(ttl=timedelta(hours=24)))

        result = repository.consume_verification_token(
            digest_verification_token("raw-token"), now() + timedelta(hours=25)
        )

        assert result is None
        assert token_columns(pool, "ann@x.com")[2] is False

    def test_wrong_digest_not_consumed(self, repository: PostgresUserRepository) -> None:
        repository.create_user(pending())
        assert repository.consume_verification_token(digest_verification_token("nope"), now()) is None


class TestReplaceVerificationToken:
    def test_overwrites_token(self, repository: PostgresUserRepository, pool: ConnectionPool) -> None:
        user = repository.create_user(pending())
        new_digest = digest_verification_token("fresh")

        assert repository.replace_verification_token(user.id, new_digest, now() + timedelta(hours=24))
        assert token_columns(pool, "ann@x.com")[0] == new_digest
        assert repository.consume_verification_token(digest_verification_token("raw-token"), now()) is None

    def test_verified_user_untouched(
        self, repository: PostgresUserRepository, pool: ConnectionPool
    ) -> None:
        user = repository.create_user(pending())
        repository.consume_verification_token(digest_verification_token("raw-token"), now())

        replaced = repository.replace_verification_token(
            user.id, digest_verification_token("fresh"), now() + timedelta(hours=24)
        )

        assert replaced is False
        assert token_columns(pool, "ann@x.com") == (None, None, True)


class TestSchemaConstraints:
    def test_token_fields_must_be_paired(self, pool: ConnectionPool, clean_database: None) -> None:
        with pytest.raises(psycopg.errors.CheckViolation), pool.connection() as conn:
            conn.execute(
                "INSERT INTO users (name, email, password_hash, verify_token) VALUES (%s, %s, %s, %s)",
                ("Ann", "ann@x.com", HASH, "a" * 64),
            )


class TestIntakeRepository:
    def test_create_demo_request(self, intake_pg_repository: PostgresIntakeRepository) -> None:
        stored = intake_pg_repository.create_demo_request("Ravi", "ravi@corp.com", "9876543210", "N/A")

        assert stored.contact == "9876543210"
        assert stored.designation == "N/A"
        assert stored.created_at is not None

    def test_create_contact_message(self, intake_pg_repository: PostgresIntakeRepository) -> None:
        stored = intake_pg_repository.create_contact_message(
            "Meera", "meera@corp.com", "Hello", None, "Pricing"
        )

        assert stored.message == "Hello"
        assert stored.phone is None
        assert stored.subject == "Pricing"
