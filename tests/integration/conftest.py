"""Fixtures for PostgreSQL integration tests."""

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresIntakeRepository, PostgresUserRepository

pytestmark = pytest.mark.integration


@pytest.fixture
def repository(pool: ConnectionPool, clean_database: None) -> PostgresUserRepository:
    """Create repository instance for each test."""
    return PostgresUserRepository(pool)


@pytest.fixture
def intake_pg_repository(pool: ConnectionPool, clean_database: None) -> PostgresIntakeRepository:
    return PostgresIntakeRepository(pool)
