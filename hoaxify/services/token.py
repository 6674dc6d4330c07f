"""Bearer token service."""

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from hoaxify.config import get_settings
from hoaxify.exceptions import AuthenticationException
from hoaxify.models.token import Token
from hoaxify.models.user import User
from hoaxify.security import random_string

logger = logging.getLogger("hoaxify")

TOKEN_LENGTH = 32


class TokenService:
    """Issues, verifies and revokes opaque bearer tokens.

    Tokens expire on a sliding window: every successful verification moves
    last_used_at to now, and a token untouched for TOKEN_TTL_DAYS is rejected
    and later removed by the hourly sweep.
    """

    def __init__(self) -> None:
        settings = get_settings()
        self.ttl = timedelta(days=settings.TOKEN_TTL_DAYS)

    def _cutoff(self) -> datetime:
        return datetime.utcnow() - self.ttl

    def create_token(self, db: Session, user: User) -> str:
        """Issue a new token for the user."""
        token = random_string(TOKEN_LENGTH)
        db.add(Token(token=token, user_id=user.id, last_used_at=datetime.utcnow()))
        db.commit()
        return token

    def verify(self, db: Session, token: str) -> int:
        """Return the user id bound to an unexpired token and refresh its last use.

        Raises AuthenticationException if the token is unknown, expired, or
        removed while being verified.
        """
        if not token:
            raise AuthenticationException()

        row = db.query(Token.id, Token.user_id).filter(Token.token == token, Token.last_used_at >= self._cutoff()).first()
        if row is None:
            raise AuthenticationException()

        # conditional update: zero rows means the sweep or a logout got there first
        updated = (
            db.query(Token)
            .filter(Token.id == row.id, Token.last_used_at >= self._cutoff())
            .update({Token.last_used_at: datetime.utcnow()}, synchronize_session=False)
        )
        db.commit()
        if updated == 0:
            raise AuthenticationException()
        return row.user_id

    def delete_token(self, db: Session, token: str) -> None:
        """Revoke a single token (logout)."""
        db.query(Token).filter(Token.token == token).delete(synchronize_session=False)
        db.commit()

    def clear_tokens(self, db: Session, user_id: int) -> None:
        """Revoke every token of a user."""
        db.query(Token).filter(Token.user_id == user_id).delete(synchronize_session=False)
        db.commit()

    def remove_expired_tokens(self, db: Session) -> int:
        """Delete tokens not used within the TTL. Returns the number removed."""
        removed = db.query(Token).filter(Token.last_used_at < self._cutoff()).delete(synchronize_session=False)
        db.commit()
        if removed:
            logger.info("Token cleanup removed %d expired token(s)", removed)
        return removed


_token_service: TokenService | None = None


def get_token_service() -> TokenService:
    """Get singleton token service instance."""
    global _token_service
    if _token_service is None:
        _token_service = TokenService()
    return _token_service
