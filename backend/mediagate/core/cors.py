"""Cross-origin policy for browser clients of the gateway."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from mediagate.core.logger import REQUEST_ID_HEADER

# Bearer tokens travel in Authorization; multipart uploads set Content-Type
ALLOWED_HEADERS = ("Authorization", "Content-Type", REQUEST_ID_HEADER)


def parse_origins(raw: str | None) -> list[str] | None:
    """
    Split ``CORS_ORIGINS`` into a list.

    :returns: ``None`` for a blank value or ``*`` (any origin), otherwise the
        explicit origins.
    """
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    if not origins or origins == ["*"]:
        return None
    return origins


def init_app(app: Flask) -> None:
    """Apply the CORS policy to every route.

    With no explicit origin list every response carries a literal ``*``;
    credentials are only allowed together with an explicit list.
    """
    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    CORS(
        app,
        resources={r"/*": {"origins": origins or "*"}},
        supports_credentials=origins is not None,
        send_wildcard=origins is None,
        allow_headers=list(ALLOWED_HEADERS),
        expose_headers=[REQUEST_ID_HEADER],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
