"""Authentication API endpoints."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from hoaxify.database import get_db
from hoaxify.dependencies import get_bearer_token
from hoaxify.rate_limit import limiter
from hoaxify.schemas.auth import LoginRequest, LoginResponse
from hoaxify.services.auth import get_auth_service
from hoaxify.services.token import get_token_service

logger = logging.getLogger("hoaxify")

router = APIRouter(prefix="/api/1.0/auth", tags=["Authentication"])


@router.post("", response_model=LoginResponse)
@limiter.limit("10/minute")
def login(request: Request, body: LoginRequest | None = None, db: Session = Depends(get_db)) -> LoginResponse:
    """Check credentials and issue a bearer token."""
    body = body or LoginRequest()
    result = get_auth_service().login(db, body.email, body.password)
    logger.info("User %d logged in", result.user_id)
    return LoginResponse(id=result.user_id, username=result.username, image=result.image, token=result.token)


@router.post("/logout")
def logout(request: Request, db: Session = Depends(get_db)) -> dict:
    """Revoke the bearer token of the request, if any. Always succeeds."""
    token = get_bearer_token(request)
    if token:
        get_token_service().delete_token(db, token)
    return {}
