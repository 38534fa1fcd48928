"""Tests for the Flask-JWT-Extended token adapter."""

from __future__ import annotations

from datetime import timedelta

import pytest
from flask_jwt_extended import create_refresh_token

from mediagate.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from mediagate.services._shared.errors import InvalidTokenError
from mediagate.services.tokens.service import TokenService


@pytest.fixture()
def tokens(app) -> TokenService:
    return TokenService(provider=JWTTokenProvider(), lifetime=timedelta(hours=1))


def test_issued_token_carries_subject(app, tokens):
    with app.app_context():
        token = tokens.issue(42)
        assert tokens.verify(token) == "42"


def test_token_valid_before_expiry_and_rejected_after(app, tokens, freeze_time):
    with app.app_context():
        with freeze_time("2026-01-01 12:00:00") as frozen:
            token = tokens.issue(7)
            frozen.tick(timedelta(minutes=59))
            assert tokens.verify(token) == "7"
            frozen.tick(timedelta(minutes=2))
            with pytest.raises(InvalidTokenError):
                tokens.verify(token)


def test_tampered_token_is_rejected(app, tokens):
    with app.app_context():
        token = tokens.issue(1)
        head, payload, signature = token.split(".")
        forged = ".".join([head, payload, signature[::-1]])
        with pytest.raises(InvalidTokenError):
            tokens.verify(forged)


@pytest.mark.parametrize("garbage", ["abc", "a.b.c", ""])
def test_malformed_token_is_rejected(app, tokens, garbage):
    with app.app_context(), pytest.raises(InvalidTokenError):
        tokens.verify(garbage)


def test_refresh_tokens_are_not_bearer_tokens(app, tokens):
    with app.app_context():
        refresh = create_refresh_token(identity="1")
        with pytest.raises(InvalidTokenError):
            tokens.verify(refresh)
