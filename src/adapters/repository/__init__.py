"""Repository adapters - Database implementations."""

from .postgres import PostgresIntakeRepository, PostgresUserRepository, run_migrations

__all__ = ["PostgresIntakeRepository", "PostgresUserRepository", "run_migrations"]
