"""HTTP layer: blueprints, request helpers and route registration."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def join_prefix(*segments: str) -> str | None:
    """
    Join URL prefix segments, ignoring blanks and duplicate slashes.

    :returns: ``"/a/b"`` style prefix, or ``None`` when every segment is blank
        so the blueprint mounts at the root.
    """
    parts = [s.strip("/") for s in segments if s and s.strip("/")]
    return "/" + "/".join(parts) if parts else None


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register ``(blueprint, relative_prefix)`` pairs beneath ``base_prefix``.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Common prefix, usually ``API_BASE_PREFIX``; empty mounts at ``/``.
    entries:
        Pairs whose ``relative_prefix`` is appended to ``base_prefix``.
    """

    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=join_prefix(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    """Mount every route blueprint under ``API_BASE_PREFIX``."""

    from mediagate.api.routes import REGISTRY

    register_blueprint_group(
        app, base_prefix=app.config.get("API_BASE_PREFIX", ""), entries=REGISTRY
    )


__all__ = ["init_app", "join_prefix", "register_blueprint_group"]
