"""Shared test data and helpers."""

from sqlalchemy.orm import Session

from hoaxify.models.user import User
from hoaxify.security import hash_password

PASSWORD = "P4ssword"

# Magic bytes are all the type sniffer needs
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64
GIF_BYTES = b"GIF89a" + b"\x00" * 64
PDF_BYTES = b"%PDF-1.4\n" + b"\x00" * 64
TEXT_BYTES = b"just some plain text in a file"


def create_user(
    db: Session,
    username: str = "user1",
    email: str | None = None,
    password: str = PASSWORD,
    inactive: bool = False,
    **fields,
) -> User:
    user = User(
        username=username,
        email=email or f"{username}@mail.com",
        password_hash=hash_password(password),
        inactive=inactive,
        **fields,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
