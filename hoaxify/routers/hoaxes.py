"""Hoax API endpoints."""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from hoaxify.database import get_db
from hoaxify.dependencies import (
    MAX_ID,
    AuthenticatedUser,
    Pagination,
    get_authenticated_user,
    get_language,
    get_pagination,
    parse_id,
)
from hoaxify.exceptions import AuthenticationException, ForbiddenException
from hoaxify.i18n import translate
from hoaxify.schemas.common import MessageResponse
from hoaxify.schemas.hoax import HoaxCreateRequest, HoaxPage
from hoaxify.services.hoax import get_hoax_service
from hoaxify.validation import FieldValidator, ensure_valid

router = APIRouter(prefix="/api/1.0", tags=["Hoaxes"])


@router.post("/hoaxes", response_model=MessageResponse)
def submit_hoax(
    body: HoaxCreateRequest | None = None,
    caller: AuthenticatedUser | None = Depends(get_authenticated_user),
    language: str = Depends(get_language),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Post a hoax, optionally claiming a previously uploaded attachment."""
    if caller is None:
        raise AuthenticationException("unauthorized_hoax_submit")

    body = body or HoaxCreateRequest()
    ensure_valid(body.model_dump(), [FieldValidator("content").length(10, 5000, "hoax_content_size")])
    get_hoax_service().save_hoax(db, body.content, caller.user_id, parse_id(body.fileAttachment))
    return MessageResponse(message=translate("hoax_submit_success", language))


@router.get("/hoaxes", response_model=HoaxPage, response_model_exclude_unset=True)
def list_hoaxes(pagination: Pagination = Depends(get_pagination), db: Session = Depends(get_db)) -> dict:
    """List all hoaxes, newest first."""
    return get_hoax_service().get_hoaxes(db, pagination.page, pagination.size)


@router.get("/users/{user_id}/hoaxes", response_model=HoaxPage, response_model_exclude_unset=True)
def list_user_hoaxes(
    user_id: int = Path(ge=-MAX_ID, le=MAX_ID),
    pagination: Pagination = Depends(get_pagination),
    db: Session = Depends(get_db),
) -> dict:
    """List one user's hoaxes, newest first."""
    return get_hoax_service().get_hoaxes(db, pagination.page, pagination.size, user_id=user_id)


@router.delete("/hoaxes/{hoax_id}")
def delete_hoax(
    hoax_id: int = Path(ge=-MAX_ID, le=MAX_ID),
    caller: AuthenticatedUser | None = Depends(get_authenticated_user),
    db: Session = Depends(get_db),
) -> dict:
    """Delete own hoax and its attachment."""
    if caller is None:
        raise ForbiddenException("unauthorized_hoax_delete")

    get_hoax_service().delete_hoax(db, hoax_id, caller.user_id)
    return {}
