"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

import logging
from collections.abc import Callable

from flask import Flask

from mediagate.core.config import BaseConfig, get_config
from mediagate.core.logger import configure_logging, init_app as init_logging
from mediagate.services._shared.ports import ObjectStorage

log = logging.getLogger(__name__)


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    storage_factory: Callable[[Flask], ObjectStorage] | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config class, import string or object; defaults to the
        class selected by ``APP_ENV``.
    :param storage_factory: Override for the object storage adapter, used by
        tests to inject a prepared backend.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from mediagate.core import extensions

    extensions.init_app(app)

    from mediagate.core import gateway

    if storage_factory is None:
        gateway.init_app(app)
    else:
        gateway.init_app(app, storage_factory=storage_factory)

    init_logging(app)

    from mediagate.core import cors

    cors.init_app(app)

    from mediagate.api import init_app as init_api

    init_api(app)

    from mediagate.core import errors

    errors.init_app(app)

    log.info("app.created port=%s", app.config.get("PORT"))
    return app
