"""
Session cookie delivery.

The credential itself is minted by the SessionSigner; this module only
decides how it travels to and from the browser.
"""

from fastapi import Response

from src.config.settings import Settings
from src.domain.ports import SessionCredential

SESSION_COOKIE = "token"


def set_session_cookie(response: Response, credential: SessionCredential, settings: Settings) -> None:
    """Write the HTTP-only, SameSite=Lax session cookie."""
    response.set_cookie(
        key=SESSION_COOKIE,
        value=credential.token,
        max_age=settings.session_ttl_seconds,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """
    Expire the session cookie (logout).

    There is no server-side revocation: a copy of the credential taken
    before logout stays valid until its own expiry.
    """
    response.delete_cookie(
        key=SESSION_COOKIE,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
