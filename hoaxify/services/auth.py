"""Authentication service."""

import base64
import binascii
from dataclasses import dataclass

from sqlalchemy.orm import Session

from hoaxify.exceptions import AuthenticationException, ForbiddenException
from hoaxify.models.user import User
from hoaxify.security import verify_password
from hoaxify.services.token import get_token_service
from hoaxify.validation import is_valid_email


@dataclass
class LoginResult:
    """Result of a successful login."""

    user_id: int
    username: str
    image: str | None
    token: str


class AuthService:
    """Handles credential checks and login."""

    def authenticate(self, db: Session, email: str | None, password: str | None) -> User:
        """Check e-mail and password. Raises AuthenticationException or ForbiddenException."""
        if not is_valid_email(email) or not isinstance(password, str) or not password:
            raise AuthenticationException()

        user = db.query(User).filter(User.email == email).first()
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationException()

        if user.inactive:
            raise ForbiddenException("inactive_authentication_failure")

        return user

    def login(self, db: Session, email: str | None, password: str | None) -> LoginResult:
        """Authenticate and issue a bearer token."""
        user = self.authenticate(db, email, password)
        token = get_token_service().create_token(db, user)
        return LoginResult(user_id=user.id, username=user.username, image=user.image, token=token)

    def authenticate_basic(self, db: Session, credentials: str) -> User | None:
        """Resolve base64 'email:password' Basic credentials to an active user, or None."""
        try:
            decoded = base64.b64decode(credentials, validate=True).decode("utf-8")
        except (binascii.Error, ValueError):
            return None
        email, _, password = decoded.partition(":")
        user = db.query(User).filter(User.email == email).first()
        if user is None or user.inactive or not verify_password(password, user.password_hash):
            return None
        return user


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
