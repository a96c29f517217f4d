"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting domain services
and infrastructure adapters into routes, plus the auth gate that turns
an inbound session credential into a SessionIdentity.
"""

from datetime import timedelta

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresIntakeRepository, PostgresUserRepository
from src.adapters.session.tokens import JwtSessionSigner
from src.adapters.smtp.console import ConsoleNotifier
from src.api.session import SESSION_COOKIE
from src.config.settings import Settings, get_settings
from src.domain.accounts import AccountService
from src.domain.credentials import PasswordHasher
from src.domain.exceptions import Unauthorized, UnauthorizedReason
from src.domain.intake import IntakeService
from src.domain.ports import Notifier, SessionIdentity

# Fallback when the lifespan did not install a notifier (e.g. bare test apps)
_console_notifier = ConsoleNotifier()


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_user_repository(request: Request) -> PostgresUserRepository:
    """Create repository with connection pool from app state."""
    return PostgresUserRepository(get_pool(request))


def get_intake_repository(request: Request) -> PostgresIntakeRepository:
    return PostgresIntakeRepository(get_pool(request))


def get_notifier(request: Request) -> Notifier:
    """Notifier built at startup, or the console notifier."""
    return getattr(request.app.state, "notifier", None) or _console_notifier


def get_session_signer(settings: Settings = Depends(get_settings)) -> JwtSessionSigner:
    return JwtSessionSigner(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(seconds=settings.session_ttl_seconds),
    )


def get_account_service(
    request: Request,
    settings: Settings = Depends(get_settings),
    signer: JwtSessionSigner = Depends(get_session_signer),
) -> AccountService:
    """
    Create account service with injected dependencies.

    Wires together the repository, notifier and session signer for the
    domain service.
    """
    return AccountService(
        repository=get_user_repository(request),
        notifier=get_notifier(request),
        session_signer=signer,
        verify_url_base=f"{settings.api_base_url.rstrip('/')}/api/auth/verify",
        hasher=PasswordHasher(settings.bcrypt_cost),
        admin_email=settings.admin_email,
        verification_ttl=timedelta(seconds=settings.verification_ttl_seconds),
    )


def get_intake_service(
    request: Request, settings: Settings = Depends(get_settings)
) -> IntakeService:
    return IntakeService(
        repository=get_intake_repository(request),
        notifier=get_notifier(request),
        admin_email=settings.admin_email,
    )


# Bearer scheme for OpenAPI documentation; the cookie is the browser path
http_bearer = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
) -> str | None:
    """
    Extract the raw session credential.

    An Authorization: Bearer header wins over the session cookie.
    """
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(SESSION_COOKIE) or None


def get_current_identity(
    token: str | None = Depends(get_session_token),
    signer: JwtSessionSigner = Depends(get_session_signer),
) -> SessionIdentity:
    """
    Auth gate: validate the credential and return its identity claims.

    The user record is not re-fetched; claims are trusted as of issuance.

    Raises:
        Unauthorized: MISSING, MALFORMED or EXPIRED (all rendered as 401)
    """
    if token is None:
        raise Unauthorized(UnauthorizedReason.MISSING)
    return signer.decode(token)
