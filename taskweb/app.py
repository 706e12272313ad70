"""Main Flask application."""

import logging
import os

from flask import Flask, jsonify, render_template
from flask_wtf.csrf import CSRFError, CSRFProtect

from taskweb import __version__
from taskweb.blueprints import pages_bp, tasks_bp
from taskweb.config import Config, get_config
from taskweb.services.startup_checks import (
    build_readiness_report,
    run_startup_config_audit,
    should_fail_fast_on_config_audit,
)
from taskweb.services.task_api import init_task_api_client
from taskweb.time_utils import format_datetime

logger = logging.getLogger(__name__)

csrf = CSRFProtect()


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(error):
        return (
            render_template(
                "error.html",
                heading="Page not found",
                message="If you typed the web address, check it is correct.",
            ),
            404,
        )

    @app.errorhandler(CSRFError)
    def csrf_error(error):
        logger.warning("Rejected request with invalid CSRF token: %s", error.description)
        return (
            render_template(
                "error.html",
                heading="Your form has expired",
                message="Go back, reload the page and submit the form again.",
            ),
            400,
        )

    @app.errorhandler(500)
    def internal_error(error):
        logger.error("Unhandled error: %s", error)
        return (
            render_template(
                "error.html",
                heading="Sorry, there is a problem with the service",
                message="Try again later.",
            ),
            500,
        )


def create_app(config_class: type = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    config_audit = run_startup_config_audit(app)
    app.extensions["startup_config_audit"] = config_audit

    for warning in config_audit.get("warnings", []):
        logger.warning("Startup config warning: %s", warning)
    for error in config_audit.get("errors", []):
        logger.error("Startup config issue: %s", error)
    if config_audit.get("errors") and should_fail_fast_on_config_audit(app):
        raise RuntimeError(
            "Startup config audit failed with errors: "
            + "; ".join(config_audit["errors"])
        )

    # Initialize extensions
    csrf.init_app(app)
    init_task_api_client(app)

    app.add_template_filter(format_datetime, "datetime_display")

    # Register blueprints
    app.register_blueprint(pages_bp)
    app.register_blueprint(tasks_bp)

    _register_error_handlers(app)

    @app.route("/health")
    def health_check():
        """Health check endpoint."""
        return jsonify({"status": "healthy", "version": __version__})

    @app.route("/health/ready")
    def readiness_check():
        """Readiness endpoint that verifies startup config and the backend."""
        report = build_readiness_report(
            app,
            app.extensions.get("startup_config_audit", {"warnings": [], "errors": []}),
        )
        return jsonify(report), (200 if report["ready"] else 503)

    return app


def _ssl_context(app: Flask) -> tuple[str, str] | None:
    """Certificate/key pair for local HTTPS, when both files exist."""
    cert_path = app.config.get("SSL_CERT_PATH")
    key_path = app.config.get("SSL_KEY_PATH")
    if cert_path and key_path and os.path.exists(cert_path) and os.path.exists(key_path):
        return cert_path, key_path
    return None


def main() -> None:
    """Run the development server."""
    config_class = get_config()
    logging.basicConfig(
        level=config_class.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(config_class)
    port = app.config["PORT"]

    ssl_context = None
    if app.config.get("ENV_NAME") == "development":
        ssl_context = _ssl_context(app)
        if ssl_context is None:
            logger.info("SSL certificates not found, starting in HTTP mode")

    scheme = "https" if ssl_context else "http"
    logger.info("Application started: %s://localhost:%s", scheme, port)
    app.run(port=port, debug=app.config["DEBUG"], ssl_context=ssl_context)


if __name__ == "__main__":
    main()
