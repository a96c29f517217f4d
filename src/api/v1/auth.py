"""
Account routes.

Registration, email verification, resend, login/logout and the current
user endpoint. Domain errors propagate to the handlers in src.api.errors.
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import RedirectResponse

from src.api.dependencies import get_account_service, get_current_identity
from src.api.models import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    ResendVerificationRequest,
    UserResponse,
    UserSummary,
)
from src.api.session import clear_session_cookie, set_session_cookie
from src.config.settings import Settings, get_settings
from src.domain.accounts import AccountService
from src.domain.exceptions import AccountError
from src.domain.ports import SessionIdentity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Invalid input or email taken"}},
    summary="Register a new user",
    description="Create an unverified account and email a verification link "
    "that stays valid for 24 hours. Passwords must be 6 characters to 72 bytes (UTF-8).",
)
def register(
    request_data: RegisterRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    service.register(
        name=request_data.name,
        email=request_data.email,
        password=request_data.password,
        phone=request_data.phone,
        occupation=request_data.occupation,
        source=request_data.source,
    )
    return MessageResponse(
        message="User registered. Please check your email to verify your account."
    )


@router.get(
    "/verify/{token}",
    status_code=status.HTTP_302_FOUND,
    response_class=RedirectResponse,
    summary="Verify email address",
    description="Target of the emailed link. Redirects to the frontend "
    "success or failure page.",
)
def verify_email(
    token: str,
    service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    frontend = settings.frontend_url.rstrip("/")
    try:
        service.verify_email(token)
    except AccountError as e:
        logger.info("Email verification failed: %s", type(e).__name__)
        return RedirectResponse(f"{frontend}/verify-failed", status_code=status.HTTP_302_FOUND)
    return RedirectResponse(f"{frontend}/verify-success", status_code=status.HTTP_302_FOUND)


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
    summary="Resend the verification email",
)
def resend_verification(
    request_data: ResendVerificationRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    if not service.resend_verification(request_data.email):
        return MessageResponse(message="Email already verified.")
    return MessageResponse(message="Verification email resent successfully.")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "Email not verified"},
    },
    summary="Log in",
    description="Check credentials and set the HTTP-only session cookie.",
)
def login(
    request_data: LoginRequest,
    response: Response,
    service: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    result = service.login(request_data.email, request_data.password)
    set_session_cookie(response, result.session, settings)
    user = result.user
    return LoginResponse(
        message="Login successful.",
        user=UserSummary(id=user.id, name=user.name, email=user.email),
    )


@router.post("/logout", response_model=MessageResponse, summary="Log out")
def logout(response: Response, settings: Settings = Depends(get_settings)) -> MessageResponse:
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out successfully.")


@router.get(
    "/me",
    response_model=UserResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Not authorized"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Get the logged-in user",
)
def me(
    identity: SessionIdentity = Depends(get_current_identity),
    service: AccountService = Depends(get_account_service),
) -> UserResponse:
    return UserResponse.model_validate(service.current_user(identity.user_id))
