"""
Task API Service

Client for the backend task REST API.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from flask import Flask, current_app

from taskweb.config import DEFAULT_BACKEND_TIMEOUT_SECONDS, backend_timeout_seconds
from taskweb.models import CreatedTask

logger = logging.getLogger(__name__)

_EXTENSION_KEY = "task_api_client"


class TaskApiError(Exception):
    """Raised when the backend task API call fails."""

    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.errors = errors or []
        self.status_code = status_code


class TaskApiClient:
    """Thin wrapper over the backend ``/api/tasks`` endpoints."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def tasks_url(self) -> str:
        return f"{self.base_url}/api/tasks"

    def create_task(self, payload: dict[str, Any]) -> CreatedTask:
        """
        Create a task on the backend.

        Args:
            payload: ``{title, description, status, dueDate}``

        Returns:
            The created task

        Raises:
            TaskApiError: on transport failure, a non-2xx response, or an
                unreadable response body
        """
        try:
            resp = requests.post(
                self.tasks_url,
                json=payload,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.HTTPError as e:
            response = e.response
            status_code = response.status_code if response is not None else None
            raise TaskApiError(
                f"Task API returned HTTP {status_code}",
                errors=_extract_errors(response),
                status_code=status_code,
            ) from e
        except requests.RequestException as e:
            raise TaskApiError(f"Task API request failed: {e}") from e

        try:
            return CreatedTask.from_api(resp.json())
        except (ValueError, KeyError, TypeError) as e:
            raise TaskApiError(
                f"Task API returned an unexpected body: {e}",
                status_code=resp.status_code,
            ) from e


def _extract_errors(response: requests.Response | None) -> list[str]:
    """Pull the ``errors`` list out of a backend error body, if present."""
    if response is None:
        return []
    try:
        body = response.json()
    except ValueError:
        return []
    if not isinstance(body, dict):
        return []
    errors = body.get("errors")
    if not isinstance(errors, list):
        return []
    return [str(err) for err in errors if err]


def init_task_api_client(app: Flask) -> TaskApiClient:
    """Create the task API client from app config and attach it to the app."""
    timeout = backend_timeout_seconds(app.config)
    if timeout is None:
        logger.warning(
            "Invalid BACKEND_TIMEOUT_SECONDS %r, using %s",
            app.config.get("BACKEND_TIMEOUT_SECONDS"),
            DEFAULT_BACKEND_TIMEOUT_SECONDS,
        )
        timeout = DEFAULT_BACKEND_TIMEOUT_SECONDS

    client = TaskApiClient(base_url=app.config["BACKEND_URL"], timeout=timeout)
    app.extensions[_EXTENSION_KEY] = client
    logger.info("Task API client initialized (backend: %s)", client.base_url)
    return client


def get_task_api_client() -> TaskApiClient:
    """Get the task API client for the current app."""
    return current_app.extensions[_EXTENSION_KEY]
