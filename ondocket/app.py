"""
On The Docket - Content Manager & Publishing Hub
Application factory and startup
"""
import os

import flask.cli
flask.cli.show_server_banner = lambda *args: None

from flask import Flask
import structlog

from ondocket.constants import BUILD_VERSION, CONFIG_DIR
from ondocket.exceptions import register_exception_handlers
from ondocket.metrics import init_metrics
from ondocket.routes.contents import contents_bp
from ondocket.routes.web import web_bp
from ondocket.settings import load_settings
from ondocket.store import JsonFileStorage, RecordStore
from ondocket.utils import configure_logging, get_or_create_secret_key

logger = structlog.get_logger('main')


def init_store(app, contents_file):
    """Bind the record store to the app, creating an empty contents file if needed"""
    storage = JsonFileStorage(contents_file)
    if storage.ensure_exists():
        logger.info(f"Initialized new collection at {contents_file}")
    app.record_store = RecordStore(storage)
    logger.info(f"Record store using {contents_file}")
    return app.record_store


def create_app(test_config=None):
    """Application factory

    test_config may carry CONFIG_FILE, CONTENTS_FILE, SECRET_KEY and any
    other Flask config overrides.
    """
    test_config = dict(test_config or {})

    settings = load_settings(force=True, config_file=test_config.pop("CONFIG_FILE", None))
    configure_logging(
        level=settings["logging"].get("level", "INFO"),
        log_format=settings["logging"].get("format"),
    )

    app = Flask(__name__)
    app.config["ONDOCKET_SETTINGS"] = settings
    app.config["CONTENTS_FILE"] = settings["storage"]["contents_file"]
    app.config.update(test_config)
    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = get_or_create_secret_key(CONFIG_DIR)

    # Register exception handlers
    register_exception_handlers(app)

    # Register blueprints
    app.register_blueprint(web_bp)
    app.register_blueprint(contents_bp)

    # Initialize metrics
    init_metrics(app)

    init_store(app, app.config["CONTENTS_FILE"])

    return app


def main():
    app = create_app()
    server = app.config["ONDOCKET_SETTINGS"]["server"]
    host = os.environ.get("ONDOCKET_HOST", server["host"])
    port = int(os.environ.get("ONDOCKET_PORT", server["port"]))
    logger.info(f'Build Version: {BUILD_VERSION}')
    logger.info(f'Starting server on port {port}...')
    app.run(host=host, port=port, debug=False, use_reloader=False)


if __name__ == '__main__':
    main()
