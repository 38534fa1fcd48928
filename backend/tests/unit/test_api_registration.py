"""Tests for blueprint prefix handling."""

from __future__ import annotations

import pytest
from flask import Blueprint, Flask

from mediagate.api import join_prefix, register_blueprint_group


@pytest.mark.parametrize(
    "segments, expected",
    [
        (("", ""), None),
        (("/", ""), None),
        (("/api/", "/v2"), "/api/v2"),
        (("api", ""), "/api"),
        (("", "images/"), "/images"),
    ],
)
def test_join_prefix(segments, expected):
    assert join_prefix(*segments) == expected


def test_group_mounts_under_base_prefix():
    app = Flask(__name__)
    bp = Blueprint("extra", __name__)
    bp.add_url_rule("/ping", "ping", lambda: "pong")

    register_blueprint_group(app, base_prefix="/media", entries=[(bp, "")])

    assert app.test_client().get("/media/ping").get_data(as_text=True) == "pong"
