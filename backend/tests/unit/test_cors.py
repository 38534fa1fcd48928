"""Tests for the CORS policy."""

from __future__ import annotations

import pytest
from flask import Flask

from mediagate.core import cors
from mediagate.core.cors import parse_origins


@pytest.mark.parametrize("raw", [None, "", " ", "*", " * "])
def test_wildcard_or_blank_means_any_origin(raw):
    assert parse_origins(raw) is None


def test_explicit_origins_are_split_and_trimmed():
    assert parse_origins("https://a.example, https://b.example ,") == [
        "https://a.example",
        "https://b.example",
    ]


def test_preflight_allows_bearer_header(client):
    resp = client.options(
        "/me",
        headers={
            "Origin": "https://app.example",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "Authorization",
        },
    )
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert "Access-Control-Allow-Credentials" not in resp.headers
    assert "authorization" in resp.headers["Access-Control-Allow-Headers"].lower()


def test_explicit_origins_are_echoed_with_credentials():
    app = Flask(__name__)
    app.config["CORS_ORIGINS"] = "https://app.example"
    cors.init_app(app)
    app.add_url_rule("/ping", "ping", lambda: "pong")

    resp = app.test_client().get("/ping", headers={"Origin": "https://app.example"})

    assert resp.headers["Access-Control-Allow-Origin"] == "https://app.example"
    assert resp.headers["Access-Control-Allow-Credentials"] == "true"
