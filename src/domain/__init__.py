"""
Domain layer - Pure business logic with zero framework imports.

This package contains the verification lifecycle, credential primitives
and form intake logic. It defines its own port interfaces for
infrastructure abstraction, keeping FastAPI, pydantic, psycopg and jose
out of the core.
"""

from .accounts import AccountService, LoginResult, account_state, normalize_email
from .credentials import PasswordHasher, digest_verification_token, generate_verification_token
from .exceptions import (
    AccountError,
    DuplicateError,
    InvalidCredentials,
    InvalidOrExpiredToken,
    NotFoundError,
    NotVerifiedError,
    ServerError,
    Unauthorized,
    UnauthorizedReason,
    ValidationError,
)
from .intake import IntakeService
from .ports import (
    AccountState,
    ContactMessage,
    DemoRequest,
    IntakeRepository,
    NewUser,
    Notifier,
    SessionCredential,
    SessionIdentity,
    SessionSigner,
    User,
    UserRepository,
)

__all__ = [
    "AccountError",
    "AccountService",
    "AccountState",
    "ContactMessage",
    "DemoRequest",
    "DuplicateError",
    "IntakeRepository",
    "IntakeService",
    "InvalidCredentials",
    "InvalidOrExpiredToken",
    "LoginResult",
    "NewUser",
    "NotFoundError",
    "NotVerifiedError",
    "Notifier",
    "PasswordHasher",
    "ServerError",
    "SessionCredential",
    "SessionIdentity",
    "SessionSigner",
    "Unauthorized",
    "UnauthorizedReason",
    "User",
    "UserRepository",
    "ValidationError",
    "account_state",
    "digest_verification_token",
    "generate_verification_token",
    "normalize_email",
]
