"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition tests against
PostgreSQL.
"""

from datetime import datetime, timedelta, timezone

import bcrypt
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresUserRepository
from src.domain.credentials import digest_verification_token
from src.domain.ports import NewUser

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def repository(pool: ConnectionPool, clean_database: None) -> PostgresUserRepository:
    """Create repository instance for each test."""
    return PostgresUserRepository(pool)


def new_user(email: str, raw_token: str, expires_in: timedelta = timedelta(hours=24)) -> NewUser:
    """Helper to build a pending user with a known raw token."""
    return NewUser(
        name="Attacker Target",
        email=email,
        password_hash=bcrypt.hashpw(b"secret1", bcrypt.gensalt(4)).decode(),
        verify_token=digest_verification_token(raw_token),
        verify_token_expires=datetime.now(timezone.utc) + expires_in,
    )
