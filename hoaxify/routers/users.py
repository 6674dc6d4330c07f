"""User API endpoints."""

import logging

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.orm import Session

from hoaxify.database import get_db
from hoaxify.dependencies import (
    MAX_ID,
    AuthenticatedUser,
    Pagination,
    get_authenticated_user,
    get_language,
    get_pagination,
)
from hoaxify.exceptions import ForbiddenException
from hoaxify.i18n import translate
from hoaxify.rate_limit import limiter
from hoaxify.schemas.common import MessageResponse
from hoaxify.schemas.user import (
    PasswordResetRequest,
    PasswordUpdateRequest,
    UserCreateRequest,
    UserPage,
    UserResponse,
    UserUpdateRequest,
)
from hoaxify.services.file import decode_base64, get_file_service
from hoaxify.services.user import get_user_service
from hoaxify.validation import FieldValidator, ensure_valid, password_validator, username_validator

logger = logging.getLogger("hoaxify")

router = APIRouter(prefix="/api/1.0/users", tags=["Users"])


def _image_within_size(value: str) -> bool:
    data = decode_base64(value)
    return data is None or get_file_service().is_less_than_limit(data)


def _image_supported(value: str) -> bool:
    data = decode_base64(value)
    return data is not None and get_file_service().is_supported_image(data)


def _image_validator() -> FieldValidator:
    return (
        FieldValidator("image", optional=True)
        .custom(_image_within_size, "profile_image_size")
        .custom(_image_supported, "unsupported_image_file")
    )


@router.get("", response_model=UserPage)
def list_users(
    pagination: Pagination = Depends(get_pagination),
    caller: AuthenticatedUser | None = Depends(get_authenticated_user),
    db: Session = Depends(get_db),
) -> dict:
    """List active users, excluding the caller."""
    return get_user_service().get_users(
        db, pagination.page, pagination.size, caller.user_id if caller else None
    )


@router.post("", response_model=MessageResponse)
@limiter.limit("5/minute")
def register(
    request: Request,
    body: UserCreateRequest | None = None,
    language: str = Depends(get_language),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Register a new, inactive account and send the activation e-mail."""
    body = body or UserCreateRequest()
    service = get_user_service()
    ensure_valid(
        body.model_dump(),
        [
            username_validator(),
            FieldValidator("email")
            .not_empty("email_null")
            .is_email("email_invalid")
            .custom(lambda email: service.find_by_email(db, email) is None, "email_inuse"),
            password_validator(),
        ],
    )
    user = service.save_user(db, body.username, body.email, body.password)
    logger.info("Registered user %d", user.id)
    return MessageResponse(message=translate("user_create_success", language))


@router.post("/token/{token}", response_model=MessageResponse)
def activate(token: str, language: str = Depends(get_language), db: Session = Depends(get_db)) -> MessageResponse:
    """Activate an account with the token from the activation e-mail."""
    get_user_service().activate_user(db, token)
    return MessageResponse(message=translate("account_activation_success", language))


@router.post("/password", response_model=MessageResponse)
@limiter.limit("3/minute")
def request_password_reset(
    request: Request,
    body: PasswordResetRequest | None = None,
    language: str = Depends(get_language),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """E-mail a password reset token."""
    body = body or PasswordResetRequest()
    ensure_valid(body.model_dump(), [FieldValidator("email").is_email("email_invalid")])
    get_user_service().password_reset_request(db, body.email)
    return MessageResponse(message=translate("password_reset_request_success", language))


@router.put("/password", response_model=MessageResponse)
@limiter.limit("5/minute")
def update_password(
    request: Request,
    body: PasswordUpdateRequest | None = None,
    language: str = Depends(get_language),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Set a new password using a reset token. Every existing session of the user is revoked."""
    body = body or PasswordUpdateRequest()
    service = get_user_service()
    if service.find_by_password_reset_token(db, body.passwordResetToken) is None:
        raise ForbiddenException("unauthorized_password_reset")

    ensure_valid(body.model_dump(), [password_validator()])
    service.update_password(db, body.passwordResetToken, body.password)
    return MessageResponse(message=translate("password_update_success", language))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int = Path(ge=-MAX_ID, le=MAX_ID),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Get an active user."""
    return UserResponse.model_validate(get_user_service().get_user(db, user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int = Path(ge=-MAX_ID, le=MAX_ID),
    body: UserUpdateRequest | None = None,
    caller: AuthenticatedUser | None = Depends(get_authenticated_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Update own username and profile image (base64 PNG or JPEG)."""
    body = body or UserUpdateRequest()
    if caller is None or caller.user_id != user_id:
        raise ForbiddenException("unauthorized_user_update")

    ensure_valid(body.model_dump(), [username_validator(), _image_validator()])
    user = get_user_service().update_user(db, user_id, body.username, body.image)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int = Path(ge=-MAX_ID, le=MAX_ID),
    caller: AuthenticatedUser | None = Depends(get_authenticated_user),
    language: str = Depends(get_language),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Delete own account together with its files, tokens and hoaxes."""
    if caller is None or caller.user_id != user_id:
        raise ForbiddenException("unauthorized_user_delete")

    get_user_service().delete_user(db, user_id)
    logger.info("Deleted user %d", user_id)
    return MessageResponse(message=translate("user_delete_success", language))
