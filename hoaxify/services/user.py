"""User service for registration, activation, profile and password management."""

import logging
import math

from sqlalchemy.orm import Session

from hoaxify.exceptions import EmailException, InvalidTokenException, NotFoundException
from hoaxify.models.user import User
from hoaxify.security import hash_password, random_string
from hoaxify.services.email import EmailDeliveryError, get_email_service
from hoaxify.services.file import get_file_service
from hoaxify.services.token import get_token_service

logger = logging.getLogger("hoaxify")

ACTIVATION_TOKEN_LENGTH = 16
PASSWORD_RESET_TOKEN_LENGTH = 16


def user_summary(user: User) -> dict:
    return {"id": user.id, "username": user.username, "email": user.email, "image": user.image}


class UserService:
    """Handles the user lifecycle."""

    def save_user(self, db: Session, username: str, email: str, password: str) -> User:
        """Create an inactive user and send the activation e-mail.

        The row and the e-mail succeed or fail together: if the e-mail cannot
        be sent the insert is rolled back and EmailException is raised.
        """
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            activation_token=random_string(ACTIVATION_TOKEN_LENGTH),
            inactive=True,
        )
        db.add(user)
        db.flush()

        try:
            get_email_service().send_account_activation(email, user.activation_token)
        except EmailDeliveryError:
            db.rollback()
            logger.warning("Registration of %s rolled back: activation e-mail failed", email)
            raise EmailException() from None

        db.commit()
        db.refresh(user)
        return user

    def activate_user(self, db: Session, token: str) -> None:
        user = db.query(User).filter(User.activation_token == token).first()
        if not user:
            raise InvalidTokenException()
        user.activation_token = None
        user.inactive = False
        db.commit()

    def get_users(self, db: Session, page: int, size: int, authenticated_user_id: int | None = None) -> dict:
        """Page through active users, leaving out the caller."""
        query = db.query(User).filter(User.inactive.is_(False))
        if authenticated_user_id is not None:
            query = query.filter(User.id != authenticated_user_id)

        total = query.count()
        users = query.order_by(User.id).offset(page * size).limit(size).all()
        return {
            "content": [user_summary(u) for u in users],
            "page": page,
            "size": size,
            "totalPages": math.ceil(total / size),
        }

    def get_user(self, db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.id == user_id, User.inactive.is_(False)).first()
        if not user:
            raise NotFoundException("user_not_found")
        return user

    def find_by_email(self, db: Session, email: str) -> User | None:
        return db.query(User).filter(User.email == email).first()

    def find_by_password_reset_token(self, db: Session, token: object) -> User | None:
        if not isinstance(token, str) or not token:
            return None
        return db.query(User).filter(User.password_reset_token == token).first()

    def update_user(self, db: Session, user_id: int, username: str, image: str | None = None) -> User:
        """Change the username and, when an image is given, replace the profile image."""
        user = db.get(User, user_id)
        if not user:
            raise NotFoundException("user_not_found")

        user.username = username
        if image:
            file_service = get_file_service()
            if user.image:
                file_service.delete_profile_image(user.image)
            user.image = file_service.save_profile_image(image)
        db.commit()
        db.refresh(user)
        return user

    def delete_user(self, db: Session, user_id: int) -> None:
        """Delete a user's files, then the user. Tokens, hoaxes and attachment rows cascade."""
        user = db.get(User, user_id)
        if not user:
            raise NotFoundException("user_not_found")
        get_file_service().delete_user_files(db, user)
        db.delete(user)
        db.commit()

    def password_reset_request(self, db: Session, email: str) -> None:
        """Issue a password reset token and e-mail it.

        The token is committed before sending, so it survives a failed send;
        the next request overwrites it.
        """
        user = self.find_by_email(db, email)
        if not user:
            raise NotFoundException("email_not_inuse")

        user.password_reset_token = random_string(PASSWORD_RESET_TOKEN_LENGTH)
        db.commit()

        try:
            get_email_service().send_password_reset(email, user.password_reset_token)
        except EmailDeliveryError:
            raise EmailException() from None

    def update_password(self, db: Session, token: str, password: str) -> None:
        """Set a new password from a reset token, activate the account and revoke all its tokens."""
        user = self.find_by_password_reset_token(db, token)
        if not user:
            raise InvalidTokenException()

        user.password_hash = hash_password(password)
        user.password_reset_token = None
        user.activation_token = None
        user.inactive = False
        db.commit()
        get_token_service().clear_tokens(db, user.id)


_user_service: UserService | None = None


def get_user_service() -> UserService:
    """Get singleton user service instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
