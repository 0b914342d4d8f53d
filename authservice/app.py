# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit
import signal
import sys

from flask import Flask

from authservice.infrastructure.container import Container
from authservice.infrastructure.db.session import Database
from authservice.shared.config import AppConfig, load_config
from authservice.shared.errors.http import register_error_handler
from authservice.shared.errors.storage import ConnectionFailure
from authservice.shared.logging import logger, setup_logging
from authservice.shared.middleware.request_logger import configure_request_logging
from authservice.shared.middleware.security_headers import configure_cors, configure_security_headers

CONTAINER_EXTENSION = "authservice.container"


def get_container(app: Flask) -> Container:
    return app.extensions[CONTAINER_EXTENSION]


def create_app(config: AppConfig | None = None, *, database: Database | None = None) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level, config.log_file)

    container = Container(config, database=database)
    container.database.create_all()

    app = Flask(__name__)
    app.extensions[CONTAINER_EXTENSION] = container

    register_error_handler(app, expose_internal_errors=config.expose_internal_errors())
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_security_headers(app, config.security)
    configure_cors(app, config.security, config.server.api_prefix)

    app.register_blueprint(container.health_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())

    logger.info(f"Flask app initialized env={config.app_env} prefix={config.server.api_prefix or '/'}")
    return app


def _install_shutdown_hooks(container: Container) -> None:
    atexit.register(container.database.dispose)

    def _on_sigterm(signum, _frame) -> None:
        logger.info(f"Received signal {signum}, shutting down")
        sys.exit(0)

    signal.signal(signal.SIGTERM, _on_sigterm)


def main() -> None:
    config = load_config()
    try:
        app = create_app(config)
    except ConnectionFailure as exc:
        logger.error(f"Failed to set up application: {exc}")
        sys.exit(1)

    _install_shutdown_hooks(get_container(app))
    app.run(host=config.server.host, port=config.server.port, threaded=True)


if __name__ == "__main__":
    main()
