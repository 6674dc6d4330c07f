"""Tests for the password reset request and password update endpoints."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from hoaxify.models.token import Token
from hoaxify.models.user import User
from hoaxify.security import verify_password
from helpers import PASSWORD, auth_header, create_user


class TestPasswordResetRequest:
    """Tests for POST /api/1.0/users/password."""

    def _request(self, client: TestClient, email: str | None = "user1@mail.com", **kwargs):
        return client.post("/api/1.0/users/password", json={"email": email}, **kwargs)

    def test_unknown_email(self, client: TestClient):
        response = self._request(client)
        assert response.status_code == 404
        assert response.json()["message"] == "E-mail is not in use"

    def test_unknown_email_in_spanish(self, client: TestClient):
        response = self._request(client, headers={"Accept-Language": "es"})
        assert response.json()["message"] == "El e-mail no está en uso"

    def test_invalid_email(self, client: TestClient):
        response = self._request(client, email="not-an-email")
        assert response.status_code == 400
        assert response.json()["validationErrors"] == {"email": "E-mail is not valid"}

    def test_missing_email(self, client: TestClient):
        response = self._request(client, email=None)
        assert response.status_code == 400
        assert response.json()["validationErrors"] == {"email": "E-mail is not valid"}

    def test_missing_body(self, client: TestClient):
        response = client.post("/api/1.0/users/password")
        assert response.status_code == 400
        assert response.json()["validationErrors"] == {"email": "E-mail is not valid"}

    def test_known_email(self, client: TestClient, db_session: Session):
        create_user(db_session)
        response = self._request(client)
        assert response.status_code == 200
        assert response.json()["message"] == "Check your e-mail for resetting your password"

    def test_reset_token_stored(self, client: TestClient, db_session: Session):
        user = create_user(db_session)
        self._request(client)
        db_session.refresh(user)
        assert user.password_reset_token is not None
        assert len(user.password_reset_token) == 16

    def test_reset_email_sent(self, client: TestClient, db_session: Session, outbox):
        user = create_user(db_session)
        self._request(client)
        db_session.refresh(user)
        messages = outbox()
        assert len(messages) == 1
        assert messages[0]["To"] == "user1@mail.com"
        assert messages[0]["Subject"] == "Password reset"
        assert user.password_reset_token in messages[0].get_content()

    def test_new_request_replaces_token(self, client: TestClient, db_session: Session):
        user = create_user(db_session)
        self._request(client)
        db_session.refresh(user)
        first = user.password_reset_token
        self._request(client)
        db_session.refresh(user)
        assert user.password_reset_token != first

    def test_email_failure(self, client: TestClient, db_session: Session, smtp):
        """A failed send reports 502; the issued token is kept and replaced by the next request."""
        user = create_user(db_session)
        smtp.side_effect = ConnectionRefusedError("smtp down")
        response = self._request(client)
        assert response.status_code == 502
        assert response.json()["message"] == "E-mail Failure"
        db_session.refresh(user)
        assert user.password_reset_token is not None


class TestPasswordUpdate:
    """Tests for PUT /api/1.0/users/password."""

    def _update(self, client: TestClient, token: str | None, password: str | None = "N3wP4ssword", **kwargs):
        return client.put(
            "/api/1.0/users/password", json={"passwordResetToken": token, "password": password}, **kwargs
        )

    def test_unknown_token(self, client: TestClient):
        response = self._update(client, "abcd")
        assert response.status_code == 403
        assert response.json()["message"] == (
            "You are not authorized to update your password. Please follow the password reset steps again."
        )

    def test_unknown_token_with_invalid_password(self, client: TestClient):
        """Authorization is checked before the new password is validated."""
        response = self._update(client, "abcd", password="weak")
        assert response.status_code == 403

    def test_missing_token(self, client: TestClient):
        assert self._update(client, None).status_code == 403

    @pytest.mark.parametrize("token", [12345, ["abcd"], {"token": "abcd"}])
    def test_non_string_token(self, client: TestClient, token):
        assert self._update(client, token).status_code == 403

    def test_missing_body(self, client: TestClient):
        assert client.put("/api/1.0/users/password").status_code == 403

    def test_invalid_password(self, client: TestClient, db_session: Session):
        create_user(db_session, password_reset_token="reset-token")
        response = self._update(client, "reset-token", password="alllowercase")
        assert response.status_code == 400
        assert response.json()["validationErrors"]["password"] == (
            "Password must have at least 1 uppercase, 1 lowercase letter and 1 number"
        )

    def test_missing_password(self, client: TestClient, db_session: Session):
        create_user(db_session, password_reset_token="reset-token")
        response = self._update(client, "reset-token", password=None)
        assert response.json()["validationErrors"]["password"] == "Password cannot be null"

    def test_password_updated(self, client: TestClient, db_session: Session):
        user = create_user(db_session, password_reset_token="reset-token")
        response = self._update(client, "reset-token")
        assert response.status_code == 200
        assert response.json()["message"] == "Password updated"
        db_session.refresh(user)
        assert verify_password("N3wP4ssword", user.password_hash)
        assert user.password_reset_token is None

    def test_inactive_account_activated(self, client: TestClient, db_session: Session):
        user = create_user(db_session, inactive=True, activation_token="activation", password_reset_token="reset-token")
        self._update(client, "reset-token")
        db_session.refresh(user)
        assert user.inactive is False
        assert user.activation_token is None

    def test_existing_sessions_revoked(self, client: TestClient, db_session: Session, test_user: dict):
        user = db_session.get(User, test_user["user_id"])
        user.password_reset_token = "reset-token"
        db_session.commit()

        self._update(client, "reset-token")

        assert db_session.query(Token).filter(Token.user_id == user.id).count() == 0
        response = client.post("/api/1.0/hoaxes", json={"content": "Hoax after reset"}, headers=auth_header(test_user["token"]))
        assert response.status_code == 401

    def test_token_single_use(self, client: TestClient, db_session: Session):
        create_user(db_session, password_reset_token="reset-token")
        self._update(client, "reset-token")
        assert self._update(client, "reset-token").status_code == 403

    def test_login_with_new_password(self, client: TestClient, db_session: Session):
        create_user(db_session, password_reset_token="reset-token")
        self._update(client, "reset-token")
        old = client.post("/api/1.0/auth", json={"email": "user1@mail.com", "password": PASSWORD})
        new = client.post("/api/1.0/auth", json={"email": "user1@mail.com", "password": "N3wP4ssword"})
        assert old.status_code == 401
        assert new.status_code == 200
