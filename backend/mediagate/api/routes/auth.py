"""Account registration, login and profile endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from mediagate.api.deps import (
    account_service,
    current_account,
    json_response,
    require_account,
    timing,
)
from mediagate.schemas import (
    AccountSchema,
    LoginSchema,
    ProfileSchema,
    RegisterSchema,
    TokenResponseSchema,
)
from mediagate.services.accounts.dto import LoginIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
account_schema = AccountSchema()
profile_schema = ProfileSchema()
token_schema = TokenResponseSchema()


@bp.post("/register")
@timing
def register():
    """Create an account and return its public representation."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    account = account_service().register(RegisterIn(**payload))
    body = {"message": "User record created", "user": account_schema.dump(account)}
    return json_response(body, status=201)


@bp.post("/login")
@timing
def login():
    """Verify credentials and issue a bearer token."""

    payload = login_schema.load(request.get_json(silent=True) or {})
    token = account_service().login(LoginIn(**payload))
    return json_response(token_schema.dump(token))


@bp.get("/me")
@require_account
@timing
def me():
    """Return the profile of the authenticated account."""

    profile = account_service().get_profile(current_account().id)
    return json_response(profile_schema.dump(profile))


@bp.post("/logout")
@require_account
@timing
def logout():
    """Acknowledge a logout; bearer tokens simply expire on the client side."""

    return json_response({"message": "Logged out successfully"})
