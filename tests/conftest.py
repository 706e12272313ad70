"""Pytest configuration and shared fixtures."""

import json

import pytest
import requests


@pytest.fixture(scope="function")
def app():
    """Create test Flask app."""
    from taskweb.app import create_app
    from taskweb.config import TestingConfig

    app = create_app(TestingConfig)
    app.config["TESTING"] = True

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def make_response():
    """Build a real ``requests.Response`` with a JSON body."""

    def _make(status_code: int, body=None, text: str | None = None):
        resp = requests.Response()
        resp.status_code = status_code
        resp.url = "http://localhost:4000/api/tasks"
        if text is not None:
            resp._content = text.encode("utf-8")
        else:
            resp._content = json.dumps(body).encode("utf-8")
            resp.headers["Content-Type"] = "application/json"
        return resp

    return _make
