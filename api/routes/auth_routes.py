from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import User
from api.schemas.auth_schemas import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    VerifyEmailRequest,
    VerifyEmailResponse,
)
from api.schemas.user_schemas import UserPublic
from api.services import account_service
from api.services.email_service import EmailSender, get_email_sender
from api.utils.auth import authenticate_user, clear_auth_cookie, get_current_user, set_auth_cookie
from api.utils.logger import configure_logging

auth_routes = APIRouter()
logger = configure_logging()

FORGOT_PASSWORD_MESSAGE = "If that email is registered, a reset code has been sent"


def to_public(user: User) -> UserPublic:
    return UserPublic(
        id=user.id,
        username=user.username,
        email=user.email,
        email_verified=bool(user.email_verified),
    )


@auth_routes.post("/register", response_model=RegisterResponse)
def register(
    request: RegisterRequest,
    db: Session = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
) -> RegisterResponse:
    """Register a new, unverified user and email a verification code."""
    user, code = account_service.register_user(request.username, request.email, request.password, db)
    if not mailer.send_verification_code(user.email, user.username, code):
        logger.warning("verification email not delivered user_id=%s", user.id)
    return RegisterResponse(message="Registration successful, check your email for the code", user_id=user.id)


@auth_routes.post("/verify-email", response_model=VerifyEmailResponse)
def verify_email(
    request: VerifyEmailRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> VerifyEmailResponse:
    """Confirm the emailed code; signs the user in on success."""
    user = account_service.verify_email(request.user_id, request.code, db)
    set_auth_cookie(response, user)
    return VerifyEmailResponse(message="Email verified", user=to_public(user))


@auth_routes.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, response: Response, db: Session = Depends(get_db)) -> LoginResponse:
    """Authenticate user and set HTTP-only cookie with token."""
    user = authenticate_user(request.email, request.password, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )
    if not user.email_verified:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Email not verified"
        )

    set_auth_cookie(response, user)
    return LoginResponse(message="Login successful", user=to_public(user))


@auth_routes.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Clear the authentication cookie."""
    clear_auth_cookie(response)
    return MessageResponse(message="Logout successful")


@auth_routes.get("/me", response_model=UserPublic)
def get_current_user_info(current_user: User = Depends(get_current_user)) -> UserPublic:
    return to_public(current_user)


@auth_routes.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    request: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    mailer: EmailSender = Depends(get_email_sender),
) -> MessageResponse:
    """Email a reset code. Same answer whether or not the email exists."""
    issued = account_service.request_password_reset(request.email, db)
    if issued is not None:
        user, code = issued
        if not mailer.send_reset_code(user.email, code):
            logger.warning("reset email not delivered user_id=%s", user.id)
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@auth_routes.post("/reset-password", response_model=MessageResponse)
def reset_password(request: ResetPasswordRequest, db: Session = Depends(get_db)) -> MessageResponse:
    account_service.reset_password(request.email, request.code, request.new_password, db)
    return MessageResponse(message="Password has been reset")
