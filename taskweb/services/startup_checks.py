"""Startup validation and readiness checks."""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import urlparse

import requests
from flask import Flask

from taskweb.config import DEFAULT_BACKEND_TIMEOUT_SECONDS, backend_timeout_seconds

_DEV_CONFIG_SENTINEL = "dev-" + "key-change-in-production"
_LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}


def run_startup_config_audit(app: Flask) -> dict[str, list[str]]:
    """Audit critical startup settings and return warnings/errors."""
    warnings: list[str] = []
    errors: list[str] = []

    is_production = _is_production_context(app)
    secret_key = app.config.get("SECRET_KEY")
    if not secret_key or secret_key == _DEV_CONFIG_SENTINEL:  # noqa: S105
        message = "SECRET_KEY is using a development default."
        if is_production:
            errors.append(message)
        else:
            warnings.append(message)

    backend_url = str(app.config.get("BACKEND_URL") or "")
    parsed = urlparse(backend_url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        errors.append(f"BACKEND_URL is not a valid http(s) URL: {backend_url!r}")
    elif is_production and parsed.hostname in _LOCAL_HOSTS:
        warnings.append("BACKEND_URL points at localhost in production context.")

    if backend_timeout_seconds(app.config) is None:
        errors.append("BACKEND_TIMEOUT_SECONDS must be a positive number.")

    if is_production and not app.config.get("WTF_CSRF_ENABLED", True):
        warnings.append("CSRF protection is disabled in production context.")

    return {"warnings": warnings, "errors": errors}


def backend_connectivity_check(app: Flask) -> dict[str, Any]:
    """Check that the backend task API answers its health endpoint."""
    url = f"{app.config['BACKEND_URL']}/health"
    try:
        resp = requests.get(url, timeout=min(_timeout_or_default(app), 5))
        resp.raise_for_status()
        return {"ok": True, "url": url}
    except requests.RequestException as exc:
        return {"ok": False, "url": url, "detail": f"{type(exc).__name__}: {exc}"}


def _timeout_or_default(app: Flask) -> float:
    return backend_timeout_seconds(app.config) or DEFAULT_BACKEND_TIMEOUT_SECONDS


def build_readiness_report(
    app: Flask, config_audit: dict[str, list[str]]
) -> dict[str, Any]:
    """Build readiness state from backend and startup audit checks."""
    if app.config.get("BACKEND_READINESS_CHECK"):
        backend_check = backend_connectivity_check(app)
    else:
        backend_check = {"ok": True, "skipped": True}

    checks = {
        "backend": backend_check,
        "startup_config": {
            "ok": len(config_audit.get("errors", [])) == 0,
            "warnings": list(config_audit.get("warnings", [])),
            "errors": list(config_audit.get("errors", [])),
        },
    }

    ready = checks["backend"]["ok"] and checks["startup_config"]["ok"]
    return {
        "ready": ready,
        "status": "ready" if ready else "not_ready",
        "checks": checks,
    }


def should_fail_fast_on_config_audit(app: Flask) -> bool:
    """True when startup should fail on config audit errors."""
    return bool(app.config.get("STARTUP_CONFIG_AUDIT_FAIL_FAST", False))


def _is_production_context(app: Flask) -> bool:
    if app.config.get("TESTING"):
        return False
    if app.config.get("DEBUG"):
        return False

    explicit_env = str(app.config.get("ENV_NAME") or os.getenv("APP_ENV") or "")
    if explicit_env.lower() == "production":
        return True

    return False
