"""
Domain exceptions - Semantic error types for accounts and intake.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
The API layer maps each class to an HTTP status (see src.api.errors).
"""

from enum import Enum


class AccountError(Exception):
    """Base class for account domain errors."""

    default_message = "Request failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccountError):
    """Required input missing or malformed."""

    default_message = "Invalid input."


class DuplicateError(AccountError):
    """Email is already registered."""

    default_message = "Email already registered."


class InvalidCredentials(AccountError):
    """Unknown email or wrong password (deliberately indistinguishable)."""

    default_message = "Invalid credentials."


class NotVerifiedError(AccountError):
    """Credentials matched but the email address is not verified yet."""

    default_message = "Please verify your email to continue."


class InvalidOrExpiredToken(AccountError):
    """Verification token is wrong, already consumed, or expired."""

    default_message = "Invalid or expired verification link."


class NotFoundError(AccountError):
    """Requested account does not exist."""

    default_message = "User not found."


class UnauthorizedReason(str, Enum):
    """Why a session credential was rejected. Logged, never sent to clients."""

    MISSING = "missing"
    MALFORMED = "malformed"
    EXPIRED = "expired"


class Unauthorized(AccountError):
    """Session credential missing, malformed, or expired."""

    default_message = "Not authorized."

    def __init__(self, reason: UnauthorizedReason, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message)


class ServerError(AccountError):
    """Persistence or infrastructure failure."""

    default_message = "Internal server error."
