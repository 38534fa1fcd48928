"""Integration tests for registration, login and the bearer-token gate."""

from __future__ import annotations

from datetime import timedelta

from flask_jwt_extended import create_access_token

from tests.factories.account import DEFAULT_PASSWORD, AccountFactory
from tests.helpers.utils import bearer


def _login(client, email: str, password: str):
    return client.post("/login", json={"email": email, "password": password})


class TestRegister:
    def test_register_login_me_scenario(self, client):
        resp = client.post("/register", json={"email": "a@x.com", "password": "p"})
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["message"] == "User record created"
        assert body["user"]["email"] == "a@x.com"
        assert body["user"]["role"] == "user"
        assert "password_hash" not in body["user"]

        token = _login(client, "a@x.com", "p").get_json()["token"]

        me = client.get("/me", headers=bearer(token))
        assert me.status_code == 200
        assert me.get_json()["username"] == "a"
        assert me.get_json()["id"] == body["user"]["id"]

    def test_duplicate_email_conflicts(self, client):
        client.post("/register", json={"email": "dup@x.com", "password": "p"})
        resp = client.post("/register", json={"email": "dup@x.com", "password": "p"})
        assert resp.status_code == 409
        assert resp.get_json()["detail"] == "Email already exists"

    def test_missing_fields_are_bad_request(self, client):
        resp = client.post("/register", json={"email": "a@x.com"})
        assert resp.status_code == 400
        problem = resp.get_json()
        assert problem["code"] == "validation_error"
        assert "password" in problem["details"]["errors"]

    def test_invalid_email_is_bad_request(self, client):
        resp = client.post("/register", json={"email": "nope", "password": "p"})
        assert resp.status_code == 400

    def test_non_string_role_registers_as_user(self, client):
        resp = client.post("/register", json={"email": "n@x.com", "password": "p", "role": 5})
        assert resp.status_code == 201
        assert resp.get_json()["user"]["role"] == "user"


class TestLogin:
    def test_login_with_factory_account(self, client, session):
        AccountFactory(email="f@x.com")
        session.commit()
        resp = _login(client, "F@x.com", DEFAULT_PASSWORD)
        assert resp.status_code == 200
        assert resp.get_json()["token"]

    def test_unknown_email_and_wrong_password_are_indistinguishable(self, client, session):
        AccountFactory(email="known@x.com")
        session.commit()

        unknown = _login(client, "ghost@x.com", DEFAULT_PASSWORD)
        wrong = _login(client, "known@x.com", "wrong")

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.get_json()["detail"] == wrong.get_json()["detail"]
        assert unknown.get_json()["code"] == "invalid_credentials"

    def test_blank_password_is_bad_request(self, client):
        resp = _login(client, "a@x.com", "")
        assert resp.status_code == 400


class TestGate:
    def test_no_header_is_401(self, client):
        resp = client.get("/me")
        assert resp.status_code == 401
        assert resp.get_json()["detail"] == "No token provided"

    def test_non_bearer_scheme_is_401(self, client):
        resp = client.get("/me", headers={"Authorization": "Basic Zm9vOmJhcg=="})
        assert resp.status_code == 401

    def test_empty_bearer_token_is_401(self, client):
        resp = client.get("/me", headers={"Authorization": "Bearer "})
        assert resp.status_code == 401
        assert resp.get_json()["detail"] == "No token provided"

    def test_garbage_token_is_403(self, client):
        resp = client.get("/me", headers=bearer("not-a-jwt"))
        assert resp.status_code == 403
        assert resp.get_json()["detail"] == "Invalid token"

    def test_expired_token_is_403(self, client, app, session):
        account = AccountFactory()
        session.commit()
        with app.app_context():
            token = create_access_token(
                identity=str(account.id), expires_delta=timedelta(seconds=-1)
            )
        assert client.get("/me", headers=bearer(token)).status_code == 403

    def test_token_for_deleted_account_is_403(self, client, app):
        with app.app_context():
            token = create_access_token(identity="987654")
        resp = client.get("/me", headers=bearer(token))
        assert resp.status_code == 403
        assert resp.get_json()["detail"] == "Invalid token or user not found"

    def test_logout_requires_and_accepts_token(self, client):
        assert client.post("/logout").status_code == 401

        client.post("/register", json={"email": "out@x.com", "password": "p"})
        token = _login(client, "out@x.com", "p").get_json()["token"]
        resp = client.post("/logout", headers=bearer(token))
        assert resp.status_code == 200
        assert resp.get_json() == {"message": "Logged out successfully"}
