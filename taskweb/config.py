"""Application configuration."""

import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
SSL_DIR = os.path.join(BASE_DIR, "resources", "localhost-ssl")

DEFAULT_BACKEND_TIMEOUT_SECONDS = 10.0


class Config:
    """Base configuration."""

    ENV_NAME = os.environ.get("APP_ENV", "development").lower()
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-key-change-in-production")
    DEBUG = False
    TESTING = False

    # Backend task API
    BACKEND_URL = os.environ.get("BACKEND_URL", "http://localhost:4000").rstrip("/")
    # Raw string; read through backend_timeout_seconds()
    BACKEND_TIMEOUT_SECONDS = os.environ.get("BACKEND_TIMEOUT_SECONDS", "10")
    BACKEND_READINESS_CHECK = (
        os.environ.get("BACKEND_READINESS_CHECK", "false").lower() == "true"
    )

    # Server
    PORT = int(os.environ.get("PORT", "3100"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Local TLS for development
    SSL_CERT_PATH = os.environ.get(
        "SSL_CERT_PATH", os.path.join(SSL_DIR, "localhost.crt")
    )
    SSL_KEY_PATH = os.environ.get("SSL_KEY_PATH", os.path.join(SSL_DIR, "localhost.key"))

    # CSRF protection (Flask-WTF)
    WTF_CSRF_ENABLED = os.environ.get("WTF_CSRF_ENABLED", "true").lower() == "true"

    STARTUP_CONFIG_AUDIT_FAIL_FAST = (
        os.environ.get("STARTUP_CONFIG_AUDIT_FAIL_FAST", "false").lower() == "true"
    )


class DevelopmentConfig(Config):
    """Development configuration."""

    ENV_NAME = "development"
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""

    ENV_NAME = "production"
    DEBUG = False
    STARTUP_CONFIG_AUDIT_FAIL_FAST = True


class TestingConfig(Config):
    """Testing configuration."""

    ENV_NAME = "testing"
    TESTING = True
    BACKEND_URL = "http://localhost:4000"
    BACKEND_READINESS_CHECK = False
    WTF_CSRF_ENABLED = False
    STARTUP_CONFIG_AUDIT_FAIL_FAST = False


CONFIG_BY_NAME = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(name: str | None = None) -> type[Config]:
    """Return the config class for an environment name (defaults to APP_ENV)."""
    env_name = (name or os.environ.get("APP_ENV") or "development").lower()
    return CONFIG_BY_NAME.get(env_name, DevelopmentConfig)


def backend_timeout_seconds(config) -> float | None:
    """Parse BACKEND_TIMEOUT_SECONDS; None when missing, non-numeric or not positive."""
    try:
        timeout = float(
            config.get("BACKEND_TIMEOUT_SECONDS", DEFAULT_BACKEND_TIMEOUT_SECONDS)
        )
    except (TypeError, ValueError):
        return None
    if timeout <= 0:
        return None
    return timeout
