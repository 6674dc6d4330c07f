"""Pytest configuration and fixtures."""

import os
import shutil
import tempfile

UPLOAD_ROOT = tempfile.mkdtemp(prefix="hoaxify-test-")
os.environ["UPLOAD_DIR"] = UPLOAD_ROOT
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

from unittest.mock import patch  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from hoaxify.config import get_settings  # noqa: E402
from hoaxify.database import Base, get_db  # noqa: E402
from hoaxify.models.file_attachment import FileAttachment  # noqa: E402, F401
from hoaxify.models.hoax import Hoax  # noqa: E402, F401
from hoaxify.models.token import Token  # noqa: E402, F401
from hoaxify.models.user import User  # noqa: E402, F401
from hoaxify.services.token import get_token_service  # noqa: E402
from helpers import create_user  # noqa: E402


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(UPLOAD_ROOT, ignore_errors=True)


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_upload_folders():
    """Empty the profile and attachment folders after each test."""
    yield
    settings = get_settings()
    for folder in (settings.profile_folder, settings.attachment_folder):
        if folder.exists():
            for path in folder.iterdir():
                path.unlink()


@pytest.fixture(name="smtp", autouse=True)
def smtp_fixture():
    """Replace the SMTP client. Set smtp.side_effect to simulate a delivery failure."""
    with patch("hoaxify.services.email.smtplib.SMTP") as smtp_class:
        yield smtp_class


@pytest.fixture(name="outbox")
def outbox_fixture(smtp):
    """Return a callable listing the messages handed to the SMTP client."""

    def messages():
        send_message = smtp.return_value.__enter__.return_value.send_message
        return [c.args[0] for c in send_message.call_args_list]

    return messages


@pytest.fixture(name="client")
def client_fixture(db_session: Session):
    """Create a test client with overridden DB dependency and disabled rate limiting."""
    from hoaxify.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session):
    """Create an active test user with a bearer token."""
    user = create_user(db_session)
    token = get_token_service().create_token(db_session, user)
    return {
        "user_id": user.id,
        "username": user.username,
        "email": user.email,
        "token": token,
    }
