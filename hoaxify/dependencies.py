"""Request dependencies shared by the API routers."""

import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from hoaxify.database import get_db
from hoaxify.exceptions import AuthenticationException
from hoaxify.i18n import resolve_language
from hoaxify.services.auth import get_auth_service
from hoaxify.services.token import get_token_service

logger = logging.getLogger("hoaxify")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 10
# ids and offsets are stored as signed 64-bit integers
MAX_ID = 2**63 - 1
MAX_PAGE = MAX_ID // MAX_PAGE_SIZE


@dataclass
class AuthenticatedUser:
    """Caller identity resolved from the Authorization header."""

    user_id: int
    token: str | None = None


def get_bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


def get_authenticated_user(
    request: Request,
    db: Session = Depends(get_db),
) -> AuthenticatedUser | None:
    """Resolve the caller, or None for anonymous requests.

    A Bearer token is verified (which also extends its life); Basic
    credentials are checked against active accounts. Invalid credentials
    leave the request anonymous; each route decides whether that is an error.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    token = get_bearer_token(request)
    if token:
        try:
            user_id = get_token_service().verify(db, token)
        except AuthenticationException:
            logger.debug("Rejected bearer token on %s", request.url.path)
            return None
        return AuthenticatedUser(user_id=user_id, token=token)

    if auth_header.startswith("Basic "):
        user = get_auth_service().authenticate_basic(db, auth_header[6:].strip())
        if user is not None:
            return AuthenticatedUser(user_id=user.id)
    return None


@dataclass
class Pagination:
    page: int
    size: int


def _parse_int(value: str | None) -> int | None:
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


def parse_id(value: object) -> int | None:
    """Read an id sent in a JSON body. Anything that is not a storable positive integer gives None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = _parse_int(value)
    if not isinstance(value, int) or value < 1 or value > MAX_ID:
        return None
    return value


def get_pagination(page: str | None = None, size: str | None = None) -> Pagination:
    """Read page/size query parameters. Bad or out-of-range values fall back to page 0, size 10."""
    page_number = _parse_int(page)
    if page_number is None or page_number < 0 or page_number > MAX_PAGE:
        page_number = 0

    page_size = _parse_int(size)
    if page_size is None or page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE

    return Pagination(page=page_number, size=page_size)


def get_language(request: Request) -> str:
    """Language for response messages, from the Accept-Language header."""
    return resolve_language(request.headers.get("Accept-Language"))
